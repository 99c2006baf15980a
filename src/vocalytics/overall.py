from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .models import FeatureSet

LOG = logging.getLogger("vocalytics")

IDEAL_AGENT_SHARE = 60.0

# Component -> weight; weights sum to 1.0.
OVERALL_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ("clarity", 0.2),
    ("confidence", 0.15),
    ("professionalism", 0.15),
    ("empathy", 0.1),
    ("speaking_rate", 0.1),
    ("filler_words", 0.1),
    ("balance", 0.1),
    ("interruptions", 0.1),
)

GENERAL_RECOMMENDATIONS: Tuple[str, ...] = (
    "Continue practicing vocal variety to maintain customer engagement throughout calls",
    "Record and review your calls regularly to track improvement in identified areas",
)


def _clamp_pct(x: float) -> int:
    return int(max(0, min(100, round(x))))


@dataclass(frozen=True)
class VocalQuality:
    """0..100 language-based quality ratings."""

    clarity: int
    confidence: int
    professionalism: int
    empathy: int


def vocal_quality(f: FeatureSet) -> VocalQuality:
    return VocalQuality(
        clarity=_clamp_pct(f.clarity_score),
        confidence=_clamp_pct(50 + 8 * f.confidence_word_count - 5 * f.uncertainty_word_count),
        professionalism=_clamp_pct(60 + 8 * f.professional_word_count - 6 * f.casual_word_count),
        empathy=_clamp_pct(40 + 12 * f.empathy_word_count),
    )


def rate_band_score(wpm: float) -> float:
    if 140 <= wpm <= 170:
        return 100.0
    if 120 <= wpm <= 190:
        return 80.0
    return max(0.0, 100 - abs(wpm - 155) * 2)


def overall_score(f: FeatureSet) -> float:
    """Weighted 0..100 summary of the call, rounded to one decimal."""
    q = vocal_quality(f)
    components = {
        "clarity": q.clarity,
        "confidence": q.confidence,
        "professionalism": q.professionalism,
        "empathy": q.empathy,
        "speaking_rate": rate_band_score(f.speaking_rate_wpm),
        "filler_words": max(0.0, 100 - f.filler_rate_per_minute * 15),
        "balance": max(0.0, 100 - abs(f.agent_turn_ratio - IDEAL_AGENT_SHARE) * 2),
        "interruptions": max(0, 100 - f.interruption_count * 20),
    }
    score = round(sum(components[name] * weight for name, weight in OVERALL_WEIGHTS), 1)
    LOG.debug("Overall score %s from components %s", score, components)
    return score


def recommendations(f: FeatureSet) -> Tuple[str, ...]:
    q = vocal_quality(f)
    out: List[str] = []

    if f.is_too_fast:
        out.append(
            "Practice speaking at 140-170 words per minute for optimal comprehension - try reading aloud with a timer"
        )
    elif f.is_too_slow:
        out.append("Increase speaking pace to 140-170 WPM - practice with energetic content to build natural rhythm")

    if f.filler_rate_per_minute > 3:
        out.append("Implement pause-and-breathe technique instead of using filler words - practice silent pauses")
        out.append("Record practice sessions to identify and reduce specific filler word patterns")

    if q.confidence < 70:
        out.append("Use definitive language: 'I will' instead of 'I think I can' - practice assertive phrases")
        out.append("Prepare key responses in advance to sound more confident and knowledgeable")

    if q.empathy < 60:
        out.append("Use empathetic phrases like 'I understand how that must feel' and 'I can see why that's concerning'")
        out.append("Practice active listening techniques and acknowledge customer emotions before providing solutions")

    if q.professionalism < 70:
        out.append("Use formal greetings and closings consistently - avoid casual language during business calls")
        out.append("Maintain professional tone throughout - replace casual words with business-appropriate alternatives")

    if q.clarity < 75:
        out.append("Focus on clear articulation - practice tongue twisters and pronunciation exercises")
        out.append("Slow down slightly and emphasize key words for better clarity")

    out.extend(GENERAL_RECOMMENDATIONS)
    return tuple(out)
