from __future__ import annotations

from typing import Tuple

from .models import NEUTRAL, Metric, Score3, Section, SubMetric
from .scoring import SCORECARD_RULES, MetricRule, build_section

FALLBACK_TEXT = "Default analysis - check transcript format."
FALLBACK_SCORE = Score3(0, 1, 0)


def _placeholder_metric(rule: MetricRule) -> Metric:
    return Metric(
        name=rule.name,
        scores=FALLBACK_SCORE,
        justification=FALLBACK_TEXT,
        analysis=FALLBACK_TEXT,
        sub_metrics=tuple(
            SubMetric(name=s.name, ratings=s.ratings, active_rating=NEUTRAL, analysis=FALLBACK_TEXT)
            for s in rule.sub_metrics
        ),
    )


def _build_fallback() -> Tuple[Section, ...]:
    return tuple(
        build_section(name, tuple(_placeholder_metric(r) for r in rules))
        for name, rules in SCORECARD_RULES
    )


# Built once; every member is frozen so the constant can be shared across calls.
FALLBACK_SCORECARD: Tuple[Section, ...] = _build_fallback()
