import pytest

from poll_statistics.core.results.stats_report import SampleAdequacy
from poll_statistics.core.statistics.sample_size import (
    TIER_THRESHOLDS,
    assess_sample_size,
    required_sample_size,
    votes_needed,
)


@pytest.mark.parametrize(
    "total, options, expected",
    [
        (30, 3, SampleAdequacy.FAIR),            # 10 per option
        (90, 3, SampleAdequacy.GOOD),            # 30 per option
        (300, 3, SampleAdequacy.EXCELLENT),      # 100 per option
        (999, 100, SampleAdequacy.INSUFFICIENT), # 9.99 per option
        (9999, 100, SampleAdequacy.GOOD),        # 99.99 per option
        (250, 2, SampleAdequacy.EXCELLENT),      # 125 per option
        (0, 4, SampleAdequacy.INSUFFICIENT),
    ],
)
def test_tier_boundaries_inclusive_on_lower_bound(total, options, expected):
    assert assess_sample_size(total, options).adequacy is expected


@pytest.mark.parametrize(
    "total, options, min_recommended",
    [
        (250, 2, 200),
        (60, 2, 60),
        (20, 2, 20),
        (5, 2, 20),
    ],
)
def test_min_recommended_is_options_times_threshold(total, options, min_recommended):
    assert assess_sample_size(total, options).min_recommended == min_recommended


def test_assessment_labels_and_description():
    res = assess_sample_size(250, 2)
    assert res.label == "Excellent sample"
    assert "250" in res.description
    assert res.to_dict() == {
        "adequacy": "excellent",
        "label": "Excellent sample",
        "description": "250 responses provide high-confidence results",
    }

    res = assess_sample_size(3, 2)
    assert res.label == "Insufficient sample"
    assert res.description.startswith("Only 3 responses")


def test_no_options_is_insufficient():
    res = assess_sample_size(10, 0)
    assert res.adequacy is SampleAdequacy.INSUFFICIENT
    assert res.min_recommended == 0


@pytest.mark.parametrize(
    "margin, confidence, expected",
    [
        (0.05, 0.95, 385),
        (0.03, 0.95, 1068),
        (0.05, 0.99, 664),
        (0.10, 0.90, 68),
    ],
)
def test_required_sample_size(margin, confidence, expected):
    assert required_sample_size(margin, confidence) == expected


def test_required_sample_size_rejects_non_positive_margin():
    with pytest.raises(ValueError):
        required_sample_size(0.0)


def test_votes_needed_for_next_tier():
    assert votes_needed(5, 2) == 15      # to fair (20)
    assert votes_needed(20, 2) == 40     # to good (60)
    assert votes_needed(60, 2) == 140    # to excellent (200)
    assert votes_needed(250, 2) == 0
    assert votes_needed(10, 0) == 0


def test_tiers_follow_threshold_table():
    options = 4
    for threshold, tier, label, _description in TIER_THRESHOLDS:
        at = assess_sample_size(options * threshold, options)
        assert at.adequacy is tier
        assert at.label == label
        assert at.min_recommended == options * threshold
        below = assess_sample_size(options * threshold - 1, options)
        assert below.adequacy is not tier
        assert votes_needed(options * threshold - 1, options) == 1
