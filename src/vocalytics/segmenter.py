from __future__ import annotations

import re
from typing import Callable, List, Tuple

from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import AGENT, CUSTOMER, Sentence, TranscriptSegment
from .preprocess import contains_keyword, contains_phrase, matches_any_regex, split_sentences

_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{2,4}$")

MIN_SEGMENT_S = 2.0
MAX_SEGMENT_S = 15.0
CONFIDENCE_CAP = 98

SpeakerPredicate = Callable[[Sentence, int, Lexicon], bool]


def is_pure_confirmation(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    return text.strip().lower() in {c.lower() for c in lexicon.confirmation}


def _strong_agent_phrase(s: Sentence, index: int, lexicon: Lexicon) -> bool:
    return matches_any_regex(s.text, lexicon.strong_agent)


def _opening_line(s: Sentence, index: int, lexicon: Lexicon) -> bool:
    return index == 0


def _agent_question(s: Sentence, index: int, lexicon: Lexicon) -> bool:
    return s.is_question and len(s.text) > 15


def _long_offer(s: Sentence, index: int, lexicon: Lexicon) -> bool:
    return len(s.text) > 50 and contains_keyword(s.text, lexicon.agent_offer)


def _customer_reply(s: Sentence, index: int, lexicon: Lexicon) -> bool:
    text = s.text.strip()
    return (
        is_pure_confirmation(text, lexicon)
        or bool(_DATE_RE.match(text))
        or contains_phrase(text, lexicon.customer_marker)
    )


# First match wins; order is the precedence contract.
SPEAKER_RULES: Tuple[Tuple[str, SpeakerPredicate, str], ...] = (
    ("strong_agent_phrase", _strong_agent_phrase, AGENT),
    ("opening_line", _opening_line, AGENT),
    ("agent_question", _agent_question, AGENT),
    ("long_offer", _long_offer, AGENT),
    ("customer_reply", _customer_reply, CUSTOMER),
)


def _fallback_role(s: Sentence, index: int) -> str:
    if len(s.text) > 30:
        return AGENT
    return AGENT if index % 2 == 0 else CUSTOMER


def match_speaker_rule(s: Sentence, index: int, lexicon: Lexicon = DEFAULT_LEXICON) -> Tuple[str, str]:
    """Return (rule name, speaker role) for the first rule that fires."""
    for name, predicate, role in SPEAKER_RULES:
        if predicate(s, index, lexicon):
            return name, role
    return "fallback", _fallback_role(s, index)


def classify_speaker(s: Sentence, index: int, lexicon: Lexicon = DEFAULT_LEXICON) -> str:
    return match_speaker_rule(s, index, lexicon)[1]


def speaker_confidence(text: str, role: str, index: int, lexicon: Lexicon = DEFAULT_LEXICON) -> int:
    confidence = 70
    if role == AGENT:
        if contains_phrase(text, lexicon.high_certainty_agent):
            confidence = 95
        elif contains_keyword(text, lexicon.moderate_agent):
            confidence = 85
    else:
        if len(text.strip()) < 20 and is_pure_confirmation(text, lexicon):
            confidence = 95
        elif contains_phrase(text, lexicon.customer_marker + lexicon.confirmation):
            confidence = 90

    if index == 0 and role == AGENT:
        confidence = max(confidence, 85)
    return max(0, min(confidence, CONFIDENCE_CAP))


def segment_duration(text: str) -> float:
    return max(MIN_SEGMENT_S, min(MAX_SEGMENT_S, len(text) / 10))


def segment_transcript(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Tuple[TranscriptSegment, ...]:
    """Split into sentence turns with speaker, synthetic timing and confidence.

    Events are left empty; see events.tag_events.
    """
    segments: List[TranscriptSegment] = []
    cursor = 0.0
    for index, sentence in enumerate(split_sentences(text)):
        role = classify_speaker(sentence, index, lexicon)
        start = cursor
        end = start + segment_duration(sentence.text)
        cursor = end
        segments.append(
            TranscriptSegment(
                id=index,
                speaker_role=role,
                text=sentence.text,
                start_time=start,
                end_time=end,
                confidence_score=speaker_confidence(sentence.text, role, index, lexicon),
            )
        )
    return tuple(segments)
