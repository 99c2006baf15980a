from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

LOG = logging.getLogger("vocalytics")

AGENT = "Agent"
CUSTOMER = "Customer"

# Event vocabulary; the exact strings are rendered as badges downstream.
DIALOG_START = "AGENT PROSPECT DIALOG START"
DIALOG_END = "AGENT PROSPECT DIALOG END"
INTRODUCTION_START = "INTRODUCTION START"
INTRODUCTION_END = "INTRODUCTION END"
PRIMARY_AGENT_START = "PRIMARY AGENT START"
HOLD_START = "HOLD START"
HOLD_END = "HOLD END"
TRANSFER_START = "TRANSFER START"
TRANSFER_END = "TRANSFER END"
AUTO_ATTENDANT_START = "AUTO ATTDNT START"
CALL_END = "CALL END"

EVENT_TAGS: Tuple[str, ...] = (
    DIALOG_START,
    DIALOG_END,
    INTRODUCTION_START,
    INTRODUCTION_END,
    PRIMARY_AGENT_START,
    HOLD_START,
    HOLD_END,
    TRANSFER_START,
    TRANSFER_END,
    AUTO_ATTENDANT_START,
    CALL_END,
)

NEGATIVE = "negative"
NEUTRAL = "neutral"
POSITIVE = "positive"
LEVELS: Tuple[str, ...] = (NEGATIVE, NEUTRAL, POSITIVE)


@dataclass(frozen=True)
class TimedWord:
    word: str
    start: float
    end: float
    confidence: float = 1.0


@dataclass(frozen=True)
class Utterance:
    speaker: str
    start: float
    end: float
    text: str = ""


@dataclass(frozen=True)
class TranscriptSegment:
    id: int
    speaker_role: str
    text: str
    start_time: float
    end_time: float
    confidence_score: int
    events: Tuple[str, ...] = ()

    @property
    def is_agent(self) -> bool:
        return self.speaker_role == AGENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "speaker_role": self.speaker_role,
            "text": self.text,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "confidence_score": self.confidence_score,
            "events": list(self.events),
        }


@dataclass(frozen=True)
class FeatureSet:
    word_count: int = 0
    sentence_count: int = 0
    filler_word_count: int = 0
    confidence_word_count: int = 1
    uncertainty_word_count: int = 1
    professional_word_count: int = 0
    casual_word_count: int = 0
    empathy_word_count: int = 0
    emotional_word_count: int = 0
    listening_cue_count: int = 0
    adaptability_phrase_count: int = 0
    agent_turn_ratio: float = 0.0
    speaking_rate_wpm: float = 0.0
    pause_frequency_per_minute: float = 0.0
    duration_seconds: float = 0.0
    speaking_rate_source: str = "estimated"
    interruption_count: int = 0
    incomplete_thought_count: int = 0
    quick_response_count: int = 0
    customer_centric_phrase_count: int = 0
    knowledge_phrase_count: int = 0
    familiarity_word_count: int = 0
    long_silence_count: int = 0
    agent_lines: int = 0
    customer_lines: int = 0

    @property
    def filler_ratio(self) -> float:
        return self.filler_word_count / max(self.word_count, 1)

    @property
    def confidence_ratio(self) -> float:
        if self.confidence_word_count == 0 and self.uncertainty_word_count == 0:
            return 1.0
        return self.confidence_word_count / max(self.uncertainty_word_count, 1)

    @property
    def clarity_score(self) -> float:
        incomplete_per_sentence = self.incomplete_thought_count / max(self.sentence_count, 1)
        score = 100.0 - 500.0 * self.filler_ratio - 10.0 * incomplete_per_sentence
        return min(100.0, max(0.0, score))

    @property
    def response_quality(self) -> float:
        return self.quick_response_count / max(self.customer_lines, 1)

    @property
    def is_optimal_rate(self) -> bool:
        return 140 <= self.speaking_rate_wpm <= 170

    @property
    def is_too_fast(self) -> bool:
        return self.speaking_rate_wpm > 180

    @property
    def is_too_slow(self) -> bool:
        return self.speaking_rate_wpm < 120

    @property
    def has_good_flow(self) -> bool:
        return 40 <= self.agent_turn_ratio <= 70

    @property
    def is_balanced(self) -> bool:
        return 45 <= self.agent_turn_ratio <= 65

    @property
    def is_smooth(self) -> bool:
        return self.response_quality > 0.5 and self.listening_cue_count > 2

    @property
    def filler_rate_per_minute(self) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        return round(self.filler_word_count / self.duration_seconds * 60, 1)

    def template_context(self) -> Dict[str, Any]:
        """Flat mapping of raw and derived values for justification templates."""
        ctx = asdict(self)
        ctx.update(
            filler_ratio=self.filler_ratio,
            confidence_ratio=self.confidence_ratio,
            clarity_score=self.clarity_score,
            response_quality=self.response_quality,
            filler_rate_per_minute=self.filler_rate_per_minute,
        )
        return ctx


class Score3(NamedTuple):
    """Display weights (negative, neutral, positive); not a distribution."""

    negative: int = 0
    neutral: int = 0
    positive: int = 0


def sum_scores(scores: Iterable[Score3]) -> Score3:
    neg = neu = pos = 0
    for s in scores:
        neg += s.negative
        neu += s.neutral
        pos += s.positive
    return Score3(neg, neu, pos)


@dataclass(frozen=True)
class RatingLabels:
    negative: str
    neutral: str
    positive: str

    def label(self, level: str) -> str:
        return getattr(self, level)


@dataclass(frozen=True)
class SubMetric:
    name: str
    ratings: RatingLabels
    active_rating: str
    analysis: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ratings": asdict(self.ratings),
            "active_rating": self.active_rating,
            "active_label": self.ratings.label(self.active_rating),
            "analysis": self.analysis,
        }


@dataclass(frozen=True)
class Metric:
    name: str
    scores: Score3
    justification: str
    analysis: str
    sub_metrics: Tuple[SubMetric, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "name": self.name,
            "scores": list(self.scores),
            "justification": self.justification,
            "analysis": self.analysis,
        }
        if self.sub_metrics:
            d["sub_metrics"] = [s.to_dict() for s in self.sub_metrics]
        return d


@dataclass(frozen=True)
class Section:
    name: str
    scores: Score3
    metrics: Tuple[Metric, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "scores": list(self.scores),
            "metrics": [m.to_dict() for m in self.metrics],
        }


@dataclass(frozen=True)
class AnalysisResult:
    segments: Tuple[TranscriptSegment, ...]
    scorecard: Tuple[Section, ...]
    overall_score: Optional[float] = None
    recommendations: Tuple[str, ...] = ()
    fallback: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segments": [s.to_dict() for s in self.segments],
            "scorecard": [s.to_dict() for s in self.scorecard],
            "overall_score": self.overall_score,
            "recommendations": list(self.recommendations),
            "fallback": self.fallback,
            "reason": self.reason,
        }


def safe_float(x: Any, default: float = 0.0) -> float:
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def _ordered(start: float, end: float) -> Tuple[float, float]:
    if end < start:
        return end, start
    return start, end


def parse_timed_words(items: Optional[Iterable[Any]]) -> Tuple[TimedWord, ...]:
    """Accept TimedWord instances or word dicts (Deepgram-style)."""
    if not items:
        return ()
    words: List[TimedWord] = []
    for i, item in enumerate(items):
        if isinstance(item, TimedWord):
            words.append(item)
            continue
        if not isinstance(item, dict):
            LOG.warning("Timed word %s is not an object; skipped", i)
            continue
        # Deepgram exposes both "word" and the formatted "punctuated_word"
        text = str(item.get("word", item.get("punctuated_word", "")) or "")
        start = safe_float(item.get("start", 0.0), 0.0)
        end = safe_float(item.get("end", start), start)
        start, end = _ordered(start, end)
        conf = safe_float(item.get("confidence", 1.0), 1.0)
        words.append(TimedWord(word=text, start=start, end=end, confidence=conf))
    return tuple(words)


def parse_utterances(items: Optional[Iterable[Any]]) -> Tuple[Utterance, ...]:
    if not items:
        return ()
    out: List[Utterance] = []
    for i, item in enumerate(items):
        if isinstance(item, Utterance):
            out.append(item)
            continue
        if not isinstance(item, dict):
            LOG.warning("Utterance %s is not an object; skipped", i)
            continue
        speaker = str(item.get("speaker", "")).strip()
        start = safe_float(item.get("start", 0.0), 0.0)
        end = safe_float(item.get("end", start), start)
        start, end = _ordered(start, end)
        out.append(Utterance(speaker=speaker, start=start, end=end, text=str(item.get("text", "") or "")))
    return tuple(out)


@dataclass(frozen=True)
class Sentence:
    """One split piece of transcript text plus the punctuation that closed it."""

    text: str
    terminator: str = ""

    @property
    def is_question(self) -> bool:
        return "?" in self.text or "?" in self.terminator


