from .tallies import (
    parse_options_csv,
    parse_demographics_csv,
    load_reference_distributions,
    save_report_json,
)

__all__ = [
    "parse_options_csv",
    "parse_demographics_csv",
    "load_reference_distributions",
    "save_report_json",
]
