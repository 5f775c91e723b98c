import json
from pathlib import Path

import pytest

from poll_statistics import aggregate_poll_stats, UNSPECIFIED
from poll_statistics.io.tallies import (
    parse_options_csv,
    parse_demographics_csv,
    load_reference_distributions,
    save_report_json,
)


DATA_DIR = Path(__file__).parent / "data"


def test_parse_options_csv_basic():
    opts = parse_options_csv(DATA_DIR / "example_options.csv")
    assert [o.id for o in opts] == ["opt-yes", "opt-no"]
    assert opts[0].label == "Yes"
    assert opts[0].vote_count == 60
    assert opts[1].position == 2


def test_parse_options_csv_defaults_position_to_row_order(tmp_path):
    p = tmp_path / "options.csv"
    p.write_text("id,label,votes\na,A,3\nb,B,4\n", encoding="utf-8")
    opts = parse_options_csv(p)
    assert [o.position for o in opts] == [0, 1]
    assert [o.vote_count for o in opts] == [3, 4]


def test_parse_options_csv_rejects_missing_id(tmp_path):
    p = tmp_path / "options.csv"
    p.write_text("option_id,label,vote_count\n,A,3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Missing option_id"):
        parse_options_csv(p)


def test_parse_options_csv_rejects_bad_count(tmp_path):
    p = tmp_path / "options.csv"
    p.write_text("option_id,label,vote_count\na,A,lots\n", encoding="utf-8")
    with pytest.raises(ValueError, match="line 2"):
        parse_options_csv(p)


def test_parse_demographics_csv_blank_cells_are_unspecified():
    rows = parse_demographics_csv(DATA_DIR / "example_demographics.csv")
    assert len(rows) == 6
    assert rows[0].age_range == "18-24"
    assert rows[2].age_range == UNSPECIFIED
    assert rows[2].gender == UNSPECIFIED
    assert rows[2].country == UNSPECIFIED
    assert rows[5].gender == UNSPECIFIED
    assert sum(r.count for r in rows) == 100


def test_parse_demographics_csv_rejects_negative_count(tmp_path):
    p = tmp_path / "demo.csv"
    p.write_text("option_id,age_range,gender,country,count\na,18-24,male,NZ,-1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Negative count"):
        parse_demographics_csv(p)


def test_load_reference_distributions():
    ref = load_reference_distributions(DATA_DIR / "reference_distributions.json")
    assert set(ref.dimensions) == {"age_range", "gender"}
    assert ref.get("gender") == {"male": 0.5, "female": 0.5}


def test_load_reference_distributions_rejects_non_object(tmp_path):
    p = tmp_path / "ref.json"
    p.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_reference_distributions(p)


def test_full_workflow_files_to_json_report(tmp_path):
    options = parse_options_csv(DATA_DIR / "example_options.csv")
    tallies = parse_demographics_csv(DATA_DIR / "example_demographics.csv")
    ref = load_reference_distributions(DATA_DIR / "reference_distributions.json")

    report = aggregate_poll_stats(options, tallies, reference_distributions=ref)
    out = save_report_json(report, tmp_path / "report.json")

    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["totalVotes"] == 100
    assert [o["id"] for o in data["options"]] == ["opt-yes", "opt-no"]
    assert set(data["significanceTests"]) == {"age_range", "gender"}
    assert len(data["weighted"]["byAge"]) == 2
    assert len(data["weighted"]["byGender"]) == 2


def test_report_json_nan_becomes_null():
    report = aggregate_poll_stats(
        [{"id": "a", "label": "A", "position": 0, "vote_count": 1}], []
    )
    report.options[0].proportion = float("nan")
    assert report.to_dict()["options"][0]["proportion"] is None
