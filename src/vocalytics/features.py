from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Pattern, Sequence, Tuple

from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import FeatureSet, TimedWord, Utterance
from .preprocess import (
    count_incomplete_thoughts,
    count_pause_markers,
    count_phrases,
    line_prefix_regex,
    split_sentences,
    words,
)

LOG = logging.getLogger("vocalytics")

# Assumed delivery pace when no timing data is available. The resulting
# rate is a default, not a measurement (see FeatureSet.speaking_rate_source).
BASELINE_WPM = 150.0
LONG_SILENCE_S = 3.0

EMPTY_FEATURES = FeatureSet()


@lru_cache(maxsize=64)
def _quick_response_regex(agent_prefixes: Tuple[str, ...]) -> Pattern[str]:
    alts = "|".join(re.escape(p) for p in agent_prefixes) or r"(?!x)x"
    return re.compile(r"\?\s*\n\s*(?:" + alts + r")\s*:", re.IGNORECASE)


def speaking_rate(
    word_count: int,
    timed_words: Sequence[TimedWord] = (),
    utterances: Sequence[Utterance] = (),
) -> Tuple[float, float, str]:
    """Return (words per minute, duration seconds, source)."""
    if timed_words:
        end = max(w.end for w in timed_words)
        if end > 0:
            return round(len(timed_words) / end * 60, 1), end, "timed_words"
    if utterances:
        end = max(u.end for u in utterances)
        if end > 0:
            return round(word_count / end * 60, 1), end, "utterances"
    if word_count == 0:
        return 0.0, 0.0, "estimated"
    duration = word_count / BASELINE_WPM * 60
    return round(word_count / duration * 60, 1), duration, "estimated"


def turn_balance(text: str, utterances: Sequence[Utterance], lexicon: Lexicon) -> Tuple[float, int, int]:
    """Return (agent turn ratio 0..100, agent lines, customer lines)."""
    agent_re = line_prefix_regex(lexicon.agent_prefix)
    customer_re = line_prefix_regex(lexicon.customer_prefix)
    lines = [ln for ln in text.splitlines() if ln.strip()]
    agent_lines = sum(1 for ln in lines if agent_re.match(ln))
    customer_lines = sum(1 for ln in lines if customer_re.match(ln))
    total = agent_lines + customer_lines
    if total > 0:
        return agent_lines / total * 100, agent_lines, customer_lines
    if utterances:
        # Whoever speaks first is taken to be the agent, as with segment 0.
        agent_speaker = utterances[0].speaker
        agent_turns = sum(1 for u in utterances if u.speaker == agent_speaker)
        return agent_turns / len(utterances) * 100, 0, 0
    return 50.0, 0, 0


def count_long_silences(text: str, timed_words: Sequence[TimedWord], lexicon: Lexicon) -> int:
    if timed_words:
        return sum(
            1 for prev, nxt in zip(timed_words, timed_words[1:]) if nxt.start - prev.end > LONG_SILENCE_S
        )
    lowered = text.lower()
    return sum(lowered.count(marker.lower()) for marker in lexicon.silence_marker)


def extract_features(
    text: str,
    timed_words: Sequence[TimedWord] = (),
    utterances: Sequence[Utterance] = (),
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> FeatureSet:
    """Scan the transcript once and return the flat bag of counts and ratios."""
    if not text or not text.strip():
        return EMPTY_FEATURES

    word_count = len(words(text))
    rate, duration, source = speaking_rate(word_count, timed_words, utterances)
    pauses = count_pause_markers(text)
    ratio, agent_lines, customer_lines = turn_balance(text, utterances, lexicon)

    features = FeatureSet(
        word_count=word_count,
        sentence_count=len(split_sentences(text)),
        filler_word_count=count_phrases(text, lexicon.filler),
        confidence_word_count=count_phrases(text, lexicon.confidence),
        uncertainty_word_count=count_phrases(text, lexicon.uncertainty),
        professional_word_count=count_phrases(text, lexicon.professional),
        casual_word_count=count_phrases(text, lexicon.casual),
        empathy_word_count=count_phrases(text, lexicon.empathy),
        emotional_word_count=count_phrases(text, lexicon.emotional),
        listening_cue_count=count_phrases(text, lexicon.listening_cue),
        adaptability_phrase_count=count_phrases(text, lexicon.adaptability),
        agent_turn_ratio=round(ratio, 1),
        speaking_rate_wpm=rate,
        pause_frequency_per_minute=round(pauses / duration * 60, 2) if duration > 0 else 0.0,
        duration_seconds=round(duration, 2),
        speaking_rate_source=source,
        interruption_count=count_phrases(text, lexicon.interruption),
        incomplete_thought_count=count_incomplete_thoughts(text),
        quick_response_count=len(_quick_response_regex(lexicon.agent_prefix).findall(text)),
        customer_centric_phrase_count=count_phrases(text, lexicon.customer_centric),
        knowledge_phrase_count=count_phrases(text, lexicon.knowledge),
        familiarity_word_count=count_phrases(text, lexicon.familiarity),
        long_silence_count=count_long_silences(text, timed_words, lexicon),
        agent_lines=agent_lines,
        customer_lines=customer_lines,
    )
    LOG.debug(
        "Features: words=%s sentences=%s rate=%s (%s) fillers=%s cues=%s",
        features.word_count,
        features.sentence_count,
        features.speaking_rate_wpm,
        features.speaking_rate_source,
        features.filler_word_count,
        features.listening_cue_count,
    )
    return features
