"""
Data models for poll statistics.

This module provides the core data structures:
- OptionTally: Vote total for one poll option
- DemographicTallyRow: Aggregate count for one option in one demographic cell
- Dimension: Demographic dimensions (age range, gender, country)
- StatsOptions: Configuration for a statistics run
- ReferenceDistributions: Static population distributions for weighting
"""

from .tally import OptionTally, DemographicTallyRow, Dimension, UNSPECIFIED
from .options import StatsOptions, ReferenceDistributions

__all__ = [
    # Tallies
    "OptionTally",
    "DemographicTallyRow",
    "Dimension",
    "UNSPECIFIED",

    # Configuration
    "StatsOptions",
    "ReferenceDistributions",
]
