import pytest

from poll_statistics.core.models.options import ReferenceDistributions
from poll_statistics.core.models.tally import DemographicTallyRow, Dimension
from poll_statistics.core.statistics.weighting import (
    calculate_weights,
    sample_distribution,
    weight_results,
    MIN_WEIGHT,
    MAX_WEIGHT,
)


def _row(option_id, count, age_range="unspecified", gender="unspecified", country="unspecified"):
    return DemographicTallyRow(
        option_id=option_id, age_range=age_range, gender=gender, country=country, count=count
    )


GENDER_5050 = ReferenceDistributions.from_pairs("gender", [("male", 0.5), ("female", 0.5)])


def test_calculate_weights_ratio():
    w = calculate_weights({"a": 0.5, "b": 0.5}, {"a": 0.25, "b": 0.75})
    assert w["a"] == pytest.approx(0.5)
    assert w["b"] == pytest.approx(1.5)


def test_calculate_weights_clamps_extremes():
    w = calculate_weights({"a": 0.01, "b": 0.99}, {"a": 0.5, "b": 0.5})
    assert w["a"] == MAX_WEIGHT
    assert w["b"] == pytest.approx(0.5 / 0.99)

    w = calculate_weights({"a": 0.9, "b": 0.1}, {"a": 0.1, "b": 0.9})
    assert w["a"] == MIN_WEIGHT
    assert w["b"] == MAX_WEIGHT


def test_calculate_weights_neutral_without_sample_data():
    w = calculate_weights({"a": 1.0, "b": 0.0}, {"a": 0.4, "b": 0.3, "c": 0.3})
    assert w["b"] == 1.0
    assert w["c"] == 1.0
    assert set(w) == {"a", "b", "c"}


def test_calculate_weights_always_within_bounds():
    samples = [
        {"x": 0.001, "y": 0.999},
        {"x": 0.5, "y": 0.5},
        {"x": 0.999, "y": 0.001},
        {"x": 0.2, "y": 0.0},
        {},
    ]
    populations = [
        {"x": 0.9, "y": 0.1},
        {"x": 0.01, "y": 0.99},
        {"x": 0.0, "y": 1.0},
    ]
    for sample in samples:
        for population in populations:
            for weight in calculate_weights(sample, population).values():
                assert MIN_WEIGHT <= weight <= MAX_WEIGHT


def test_sample_distribution_proportions():
    rows = [_row("A", 30, gender="male"), _row("B", 10, gender="female"), _row("A", 0, gender="female")]
    dist, total = sample_distribution(rows, Dimension.GENDER)
    assert total == 40
    assert dist == {"male": pytest.approx(0.75), "female": pytest.approx(0.25)}


def test_weight_results_reweights_towards_population():
    rows = [_row("A", 60, gender="male"), _row("B", 20, gender="female")]
    results = weight_results(rows, "gender", GENDER_5050)
    by_id = {r.option_id: r for r in results}

    assert by_id["A"].raw_count == 60
    assert by_id["A"].raw_proportion == pytest.approx(0.75)
    assert by_id["B"].raw_proportion == pytest.approx(0.25)
    # male weight 0.5/0.75, female weight 0.5/0.25
    assert by_id["A"].weight == pytest.approx(2.0 / 3.0)
    assert by_id["B"].weight == pytest.approx(2.0)
    assert by_id["A"].weighted_proportion == pytest.approx(0.5)
    assert by_id["B"].weighted_proportion == pytest.approx(0.5)


def test_weight_results_proportions_sum_to_one():
    rows = [
        _row("A", 12, age_range="18-24"),
        _row("A", 40, age_range="65+"),
        _row("B", 7, age_range="25-34"),
        _row("B", 3, age_range="unspecified"),
        _row("C", 19, age_range="45-54"),
        _row("C", 1, age_range="18-24"),
    ]
    results = weight_results(rows, Dimension.AGE_RANGE)
    assert [r.option_id for r in results] == ["A", "B", "C"]
    assert sum(r.raw_proportion for r in results) == pytest.approx(1.0, abs=1e-9)
    assert sum(r.weighted_proportion for r in results) == pytest.approx(1.0, abs=1e-9)


def test_weight_results_identity_when_sample_matches_population():
    rows = [
        _row("A", 30, gender="male"),
        _row("A", 20, gender="female"),
        _row("B", 20, gender="male"),
        _row("B", 30, gender="female"),
    ]
    for r in weight_results(rows, "gender", GENDER_5050):
        assert r.weighted_proportion == pytest.approx(r.raw_proportion, abs=1e-6)
        assert r.weight == pytest.approx(1.0)


def test_weight_results_unknown_group_gets_neutral_weight():
    rows = [_row("A", 10, gender="male"), _row("B", 10, gender="other")]
    by_id = {r.option_id: r for r in weight_results(rows, "gender", GENDER_5050)}
    assert by_id["B"].weight == pytest.approx(1.0)
    # male: 0.5 / 0.5 -> 1.0 as well
    assert by_id["A"].weight == pytest.approx(1.0)


def test_weight_results_option_with_only_zero_rows():
    rows = [_row("A", 10, gender="male"), _row("B", 0, gender="female")]
    by_id = {r.option_id: r for r in weight_results(rows, "gender", GENDER_5050)}
    assert by_id["B"].raw_count == 0
    assert by_id["B"].weight == 1.0
    assert by_id["B"].weighted_proportion == 0.0


def test_weight_results_empty_for_zero_total():
    rows = [_row("A", 0, gender="male"), _row("B", 0, gender="female")]
    assert weight_results(rows, "gender", GENDER_5050) == []
    assert weight_results([], "gender", GENDER_5050) == []


def test_weight_results_empty_for_unconfigured_dimension():
    rows = [_row("A", 10, country="NZ"), _row("B", 5, country="AU")]
    assert weight_results(rows, Dimension.COUNTRY) == []
    # gender is not configured in this reference set
    assert weight_results(rows, "gender", ReferenceDistributions.from_pairs("age_range", [("18-24", 1.0)])) == []


def test_weight_results_uses_default_reference_when_not_given():
    rows = [_row("A", 10, gender="male"), _row("B", 30, gender="female")]
    results = weight_results(rows, "gender")
    assert len(results) == 2
    assert sum(r.weighted_proportion for r in results) == pytest.approx(1.0, abs=1e-9)
