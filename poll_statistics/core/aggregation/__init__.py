from .stats_aggregator import (
    aggregate_poll_stats,
    build_demographic_breakdown,
    build_contingency_table,
)

__all__ = ["aggregate_poll_stats", "build_demographic_breakdown", "build_contingency_table"]
