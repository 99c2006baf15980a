from __future__ import annotations

import pytest

from vocalytics.models import FeatureSet
from vocalytics.overall import (
    GENERAL_RECOMMENDATIONS,
    overall_score,
    rate_band_score,
    recommendations,
    vocal_quality,
)

STEADY_CALL = FeatureSet(
    word_count=100,
    speaking_rate_wpm=150.0,
    duration_seconds=40.0,
    agent_turn_ratio=60.0,
    confidence_word_count=2,
    uncertainty_word_count=0,
    professional_word_count=3,
    empathy_word_count=1,
)


def test_vocal_quality_from_counts():
    q = vocal_quality(STEADY_CALL)
    assert (q.clarity, q.confidence, q.professionalism, q.empathy) == (100, 66, 84, 52)


def test_vocal_quality_is_clamped():
    q = vocal_quality(FeatureSet(empathy_word_count=10, confidence_word_count=0, uncertainty_word_count=20))
    assert q.empathy == 100
    assert q.confidence == 0


@pytest.mark.parametrize("wpm, expected", [(150.0, 100.0), (125.0, 80.0), (190.0, 80.0), (200.0, 10.0), (0.0, 0.0)])
def test_rate_band_score(wpm, expected):
    assert rate_band_score(wpm) == expected


def test_overall_score_weights_components():
    assert overall_score(STEADY_CALL) == pytest.approx(87.7)


def test_overall_score_penalizes_imbalance_and_interruptions():
    worse = FeatureSet(
        word_count=100,
        speaking_rate_wpm=150.0,
        duration_seconds=40.0,
        agent_turn_ratio=90.0,
        interruption_count=2,
        confidence_word_count=2,
        uncertainty_word_count=0,
        professional_word_count=3,
        empathy_word_count=1,
    )
    # balance 40 instead of 100, interruptions 60 instead of 100
    assert overall_score(worse) == pytest.approx(87.7 - 6.0 - 4.0)


def test_recommendations_follow_thresholds():
    recs = recommendations(STEADY_CALL)
    assert len(recs) == 6
    assert recs[0].startswith("Use definitive language")
    assert recs[2].startswith("Use empathetic phrases")
    assert recs[-2:] == GENERAL_RECOMMENDATIONS


def test_fast_filler_heavy_call():
    f = FeatureSet(
        word_count=100,
        filler_word_count=5,
        duration_seconds=60.0,
        speaking_rate_wpm=200.0,
        confidence_word_count=5,
        uncertainty_word_count=0,
        professional_word_count=2,
        empathy_word_count=2,
    )
    assert f.filler_rate_per_minute == 5.0
    recs = recommendations(f)
    assert recs[0].startswith("Practice speaking at 140-170 words per minute")
    assert recs[1].startswith("Implement pause-and-breathe")
    assert len(recs) == 5


def test_filler_rate_without_duration():
    assert FeatureSet(filler_word_count=4).filler_rate_per_minute == 0.0
