from __future__ import annotations

import pytest

from vocalytics.fallback import FALLBACK_SCORECARD, FALLBACK_TEXT
from vocalytics.models import LEVELS, NEGATIVE, NEUTRAL, POSITIVE, FeatureSet, Score3, sum_scores
from vocalytics.scoring import (
    ADAPTABILITY,
    ARTICULATION,
    KNOWLEDGE,
    PACING,
    SCORECARD_RULES,
    VOICE_QUALITY,
    articulation_level,
    boundaries_level,
    conflict_level,
    customer_centric_level,
    demeanor_level,
    empathy_level,
    expressiveness_level,
    knowledge_level,
    language_level,
    listening_level,
    pacing_level,
    pause_level,
    score_features,
    silence_level,
    speech_rate_level,
    turn_management_level,
    vocal_confidence_level,
)

SECTION_NAMES = [
    "Vocal Characteristics",
    "Conversation Flow",
    "Emotional Intelligence and Adaptability",
    "Professionalism and Etiquette",
]


def _metric(scorecard, name):
    for section in scorecard:
        for metric in section.metrics:
            if metric.name == name:
                return metric
    raise KeyError(name)


def test_scorecard_layout():
    scorecard = score_features(FeatureSet())
    assert [s.name for s in scorecard] == SECTION_NAMES
    assert [len(s.metrics) for s in scorecard] == [3, 3, 3, 6]
    assert [m.name for m in scorecard[1].metrics] == [
        "Active Listening",
        "Pacing and Turn Taking",
        "Pauses and Silence",
    ]


def test_section_scores_sum_their_metrics():
    f = FeatureSet(word_count=80, filler_word_count=1, professional_word_count=3, empathy_word_count=5)
    for section in score_features(f):
        assert section.scores == sum_scores(m.scores for m in section.metrics)


def test_articulation_bands():
    assert articulation_level(FeatureSet(word_count=100, filler_word_count=6)) == NEGATIVE
    assert articulation_level(FeatureSet(word_count=100, filler_word_count=3)) == NEUTRAL
    assert articulation_level(FeatureSet(word_count=100, filler_word_count=2)) == POSITIVE

    metric = ARTICULATION.evaluate(FeatureSet(word_count=100, filler_word_count=6))
    assert metric.scores == Score3(1, 0, 0)
    assert metric.justification.startswith("High frequency of filler words detected (6 instances).")


def test_voice_quality_positive_shape():
    f = FeatureSet(word_count=100, speaking_rate_wpm=150.0)
    metric = VOICE_QUALITY.evaluate(f)
    assert metric.scores == Score3(0, 1, 3)
    assert "150 WPM" in metric.justification


def test_pacing_sub_metrics_follow_features():
    smooth = FeatureSet(
        word_count=100,
        speaking_rate_wpm=155.0,
        agent_turn_ratio=55.0,
        listening_cue_count=3,
        quick_response_count=1,
        customer_lines=1,
    )
    metric = PACING.evaluate(smooth)
    assert metric.scores == Score3(0, 0, 2)
    rate, turns = metric.sub_metrics
    assert (rate.name, rate.active_rating, rate.ratings.label(rate.active_rating)) == (
        "Speech Rate",
        POSITIVE,
        "APPROPRIATE",
    )
    assert turns.ratings.label(turns.active_rating) == "SMOOTH"

    fast = PACING.evaluate(FeatureSet(word_count=100, speaking_rate_wpm=200.0))
    assert fast.scores == Score3(1, 0, 0)
    assert fast.sub_metrics[0].ratings.label(fast.sub_metrics[0].active_rating) == "TOO FAST"
    assert fast.sub_metrics[1].ratings.label(fast.sub_metrics[1].active_rating) == "BALANCED"


def test_adaptability_is_never_negative():
    assert ADAPTABILITY.evaluate(FeatureSet()).scores == Score3(0, 1, 0)
    assert ADAPTABILITY.evaluate(FeatureSet(adaptability_phrase_count=1)).scores == Score3(0, 0, 2)


def test_knowledge_negative_when_hedging():
    f = FeatureSet(confidence_word_count=0, uncertainty_word_count=3)
    assert KNOWLEDGE.evaluate(f).scores == Score3(1, 0, 0)


def test_sub_metric_serialization_has_label():
    d = PACING.evaluate(FeatureSet(speaking_rate_wpm=100.0)).to_dict()
    assert d["sub_metrics"][0]["active_rating"] == NEUTRAL
    assert d["sub_metrics"][0]["active_label"] == "TOO SLOW"
    assert d["scores"] == [1, 0, 0]


def test_fallback_covers_full_taxonomy():
    assert [s.name for s in FALLBACK_SCORECARD] == SECTION_NAMES
    for section, (_, rules) in zip(FALLBACK_SCORECARD, SCORECARD_RULES):
        assert [m.name for m in section.metrics] == [r.name for r in rules]
        assert section.scores == Score3(0, len(rules), 0)
        for metric in section.metrics:
            assert metric.scores == Score3(0, 1, 0)
            assert metric.justification == FALLBACK_TEXT
            assert all(s.active_rating == NEUTRAL for s in metric.sub_metrics)


SMOOTH = dict(listening_cue_count=3, quick_response_count=1, customer_lines=1)


@pytest.mark.parametrize(
    "decide, features, expected",
    [
        (vocal_confidence_level, FeatureSet(confidence_word_count=0, uncertainty_word_count=3), NEGATIVE),
        (vocal_confidence_level, FeatureSet(confidence_word_count=1, uncertainty_word_count=1), NEUTRAL),
        (vocal_confidence_level, FeatureSet(confidence_word_count=0, uncertainty_word_count=0), NEUTRAL),
        (vocal_confidence_level, FeatureSet(confidence_word_count=3, uncertainty_word_count=1), POSITIVE),
        (listening_level, FeatureSet(listening_cue_count=0), NEGATIVE),
        (listening_level, FeatureSet(listening_cue_count=2), NEUTRAL),
        (listening_level, FeatureSet(listening_cue_count=3), POSITIVE),
        (pacing_level, FeatureSet(speaking_rate_wpm=110.0, agent_turn_ratio=50.0), NEGATIVE),
        (pacing_level, FeatureSet(speaking_rate_wpm=175.0, agent_turn_ratio=50.0), NEUTRAL),
        (pacing_level, FeatureSet(speaking_rate_wpm=150.0, agent_turn_ratio=90.0), NEUTRAL),
        (pacing_level, FeatureSet(speaking_rate_wpm=150.0, agent_turn_ratio=50.0), POSITIVE),
        (speech_rate_level, FeatureSet(speaking_rate_wpm=181.0), NEGATIVE),
        (speech_rate_level, FeatureSet(speaking_rate_wpm=119.0), NEUTRAL),
        (speech_rate_level, FeatureSet(speaking_rate_wpm=180.0), POSITIVE),
        (turn_management_level, FeatureSet(interruption_count=3, agent_turn_ratio=50.0, **SMOOTH), NEGATIVE),
        (turn_management_level, FeatureSet(agent_turn_ratio=50.0), NEUTRAL),
        (turn_management_level, FeatureSet(agent_turn_ratio=80.0, **SMOOTH), NEUTRAL),
        (turn_management_level, FeatureSet(agent_turn_ratio=50.0, **SMOOTH), POSITIVE),
        (pause_level, FeatureSet(pause_frequency_per_minute=10.5), NEGATIVE),
        (pause_level, FeatureSet(pause_frequency_per_minute=1.0), NEUTRAL),
        (pause_level, FeatureSet(pause_frequency_per_minute=2.0), POSITIVE),
        (pause_level, FeatureSet(pause_frequency_per_minute=10.0), POSITIVE),
        (silence_level, FeatureSet(long_silence_count=4), NEGATIVE),
        (silence_level, FeatureSet(long_silence_count=1), NEUTRAL),
        (silence_level, FeatureSet(long_silence_count=0), POSITIVE),
        (expressiveness_level, FeatureSet(emotional_word_count=2), NEUTRAL),
        (expressiveness_level, FeatureSet(emotional_word_count=3), POSITIVE),
        (empathy_level, FeatureSet(empathy_word_count=0), NEGATIVE),
        (empathy_level, FeatureSet(empathy_word_count=3), NEUTRAL),
        (empathy_level, FeatureSet(empathy_word_count=4), POSITIVE),
        (conflict_level, FeatureSet(interruption_count=3), NEGATIVE),
        (conflict_level, FeatureSet(), NEUTRAL),
        (conflict_level, FeatureSet(interruption_count=3, empathy_word_count=1), POSITIVE),
        (customer_centric_level, FeatureSet(customer_centric_phrase_count=0), NEGATIVE),
        (customer_centric_level, FeatureSet(customer_centric_phrase_count=2), NEUTRAL),
        (customer_centric_level, FeatureSet(customer_centric_phrase_count=3), POSITIVE),
        (language_level, FeatureSet(casual_word_count=2, professional_word_count=1), NEGATIVE),
        (language_level, FeatureSet(casual_word_count=1, professional_word_count=1), NEUTRAL),
        (language_level, FeatureSet(casual_word_count=1, professional_word_count=2), POSITIVE),
        (boundaries_level, FeatureSet(familiarity_word_count=1), NEGATIVE),
        (boundaries_level, FeatureSet(casual_word_count=2, professional_word_count=1), NEUTRAL),
        (boundaries_level, FeatureSet(), POSITIVE),
        (demeanor_level, FeatureSet(casual_word_count=3, familiarity_word_count=1, professional_word_count=1), NEGATIVE),
        (demeanor_level, FeatureSet(casual_word_count=3, professional_word_count=1), NEUTRAL),
        (demeanor_level, FeatureSet(professional_word_count=2), POSITIVE),
        (knowledge_level, FeatureSet(confidence_word_count=1, uncertainty_word_count=2), NEGATIVE),
        (knowledge_level, FeatureSet(knowledge_phrase_count=1, uncertainty_word_count=2), NEUTRAL),
        (knowledge_level, FeatureSet(knowledge_phrase_count=2), POSITIVE),
    ],
)
def test_level_bands(decide, features, expected):
    assert decide(features) == expected
    users = [
        rule
        for _, rules in SCORECARD_RULES
        for metric in rules
        for rule in (metric,) + metric.sub_metrics
        if rule.decide is decide
    ]
    assert users
    for rule in users:
        table = rule.scores if hasattr(rule, "scores") else rule.analysis
        assert expected in table


def test_turn_ratio_moves_the_scorecard():
    balanced = score_features(FeatureSet(word_count=100, speaking_rate_wpm=150.0, agent_turn_ratio=50.0, **SMOOTH))
    lopsided = score_features(FeatureSet(word_count=100, speaking_rate_wpm=150.0, agent_turn_ratio=100.0, **SMOOTH))
    assert balanced[1].metrics[1].scores == Score3(0, 0, 2)
    assert lopsided[1].metrics[1].scores == Score3(0, 1, 1)
    assert balanced[1].metrics[1].sub_metrics[1].active_rating == POSITIVE
    assert lopsided[1].metrics[1].sub_metrics[1].active_rating == NEUTRAL


def test_every_level_has_score_and_text():
    ctx = FeatureSet().template_context()
    for _, rules in SCORECARD_RULES:
        for rule in rules:
            levels = set(rule.scores)
            assert levels <= set(LEVELS)
            assert set(rule.justification) == levels
            assert set(rule.analysis) == levels
            for level in levels:
                assert rule.justification[level].format(**ctx)
                assert rule.analysis[level].format(**ctx)
            for sub in rule.sub_metrics:
                assert set(sub.analysis) == set(LEVELS)
                for level in LEVELS:
                    assert sub.analysis[level].format(**ctx)
                    assert sub.ratings.label(level)
