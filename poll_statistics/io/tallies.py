"""File loaders for poll tallies and engine configuration.

These helpers are for offline analysis and tests; the engine itself performs
no I/O and is normally fed by the storage layer.

Supported formats:
- options CSV (one row per poll option)
- demographics CSV (one row per option x demographic cell)
- reference distributions JSON ({dimension: {group: proportion}})
- report JSON export
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, List, Sequence

from ..core.models.options import ReferenceDistributions
from ..core.models.tally import DemographicTallyRow, OptionTally, UNSPECIFIED
from ..core.results.stats_report import StatsReport


def _get(row: Dict[str, str], keys: Sequence[str], default: str = "") -> str:
    for k in keys:
        if k in row and row[k] is not None and row[k] != "":
            return row[k]
    return default


def _parse_int(value: str, field_name: str, path: Path, line: int) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {field_name} '{value}' in {path} (line {line})") from None


def parse_options_csv(path: str | Path) -> List[OptionTally]:
    """Parse option totals from a CSV.

    Expected columns (flexible):
      - id/option_id
      - label/name
      - position (defaults to row order)
      - vote_count/votes
    """
    path = Path(path)
    options: List[OptionTally] = []

    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for idx, row in enumerate(reader):
            line = idx + 2
            oid = _get(row, ["option_id", "id"]).strip()
            if not oid:
                raise ValueError(f"Missing option_id in {path} (line {line})")

            label = _get(row, ["label", "name"], default=oid).strip()
            position = _parse_int(_get(row, ["position"], default=str(idx)), "position", path, line)
            votes = _parse_int(_get(row, ["vote_count", "votes"], default="0"), "vote_count", path, line)
            if votes < 0:
                raise ValueError(f"Negative vote_count in {path} (line {line})")

            options.append(OptionTally(id=oid, label=label, position=position, vote_count=votes))

    return options


def parse_demographics_csv(path: str | Path) -> List[DemographicTallyRow]:
    """Parse demographic tally rows from a CSV.

    Expected columns:
      - option_id
      - age_range, gender, country (blank -> "unspecified")
      - count
    """
    path = Path(path)
    rows: List[DemographicTallyRow] = []

    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for idx, row in enumerate(reader):
            line = idx + 2
            oid = _get(row, ["option_id", "option"]).strip()
            if not oid:
                raise ValueError(f"Missing option_id in {path} (line {line})")

            count = _parse_int(_get(row, ["count", "votes"], default="0"), "count", path, line)
            if count < 0:
                raise ValueError(f"Negative count in {path} (line {line})")

            rows.append(DemographicTallyRow(
                option_id=oid,
                age_range=_get(row, ["age_range", "age"], default=UNSPECIFIED).strip(),
                gender=_get(row, ["gender"], default=UNSPECIFIED).strip(),
                country=_get(row, ["country"], default=UNSPECIFIED).strip(),
                count=count,
            ))

    return rows


def load_reference_distributions(path: str | Path) -> ReferenceDistributions:
    """Load reference population distributions from a JSON file."""
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object of dimensions in {path}")
    return ReferenceDistributions.from_dict(data)


def save_report_json(report: StatsReport, path: str | Path, indent: int = 2) -> Path:
    """Write a report as JSON and return the path written."""
    path = Path(path)
    path.write_text(report.to_json(indent=indent), encoding="utf-8")
    return path
