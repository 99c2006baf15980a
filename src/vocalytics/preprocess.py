from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, Pattern, Tuple

from .models import Sentence

_SENTENCE_SPLIT_RE = re.compile(r"([.!?]+)")
# "...", "--" or a run of 2+ spaces; each run counts once.
_PAUSE_RE = re.compile(r"\.\.\.|--| {2,}")
_INCOMPLETE_RE = re.compile(r"\.\.\.|--")
_INFLECTION = r"(?:s|es|ed|ing|red|ring)?"


def words(text: str) -> List[str]:
    return (text or "").split()


def split_sentences(text: str) -> List[Sentence]:
    """Split on runs of . ! ? keeping each piece's closing punctuation aside."""
    parts = _SENTENCE_SPLIT_RE.split(text or "")
    out: List[Sentence] = []
    for i in range(0, len(parts), 2):
        piece = parts[i].strip()
        if not piece:
            continue
        terminator = parts[i + 1] if i + 1 < len(parts) else ""
        out.append(Sentence(text=piece, terminator=terminator))
    return out


@lru_cache(maxsize=1024)
def phrase_regex(phrase: str) -> Pattern[str]:
    # Lookarounds instead of \b so phrases that start/end with punctuation ("--") still match.
    return re.compile(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)", re.IGNORECASE)


@lru_cache(maxsize=256)
def any_phrase_regex(phrases: Tuple[str, ...]) -> Pattern[str]:
    alts = "|".join(re.escape(p) for p in sorted(phrases, key=len, reverse=True))
    return re.compile(r"(?<!\w)(?:" + (alts or r"(?!x)x") + r")(?!\w)", re.IGNORECASE)


@lru_cache(maxsize=256)
def keyword_regex(keywords: Tuple[str, ...]) -> Pattern[str]:
    """Whole-word match that also accepts simple inflections (hold -> holding)."""
    alts = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(r"(?<!\w)(?:" + (alts or r"(?!x)x") + r")" + _INFLECTION + r"(?!\w)", re.IGNORECASE)


@lru_cache(maxsize=256)
def regex_list(patterns: Tuple[str, ...]) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


@lru_cache(maxsize=64)
def line_prefix_regex(prefixes: Tuple[str, ...]) -> Pattern[str]:
    alts = "|".join(re.escape(p) for p in prefixes) or r"(?!x)x"
    return re.compile(r"^\s*(?:" + alts + r")\s*:", re.IGNORECASE)


def count_phrases(text: str, phrases: Iterable[str]) -> int:
    """Sum of whole-phrase occurrences; overlapping entries are counted separately."""
    if not text:
        return 0
    return sum(len(phrase_regex(p).findall(text)) for p in phrases)


def contains_phrase(text: str, phrases: Tuple[str, ...]) -> bool:
    return bool(any_phrase_regex(phrases).search(text or ""))


def contains_keyword(text: str, keywords: Tuple[str, ...]) -> bool:
    return bool(keyword_regex(keywords).search(text or ""))


def matches_any_regex(text: str, patterns: Tuple[str, ...]) -> bool:
    return any(p.search(text or "") for p in regex_list(patterns))


def count_pause_markers(text: str) -> int:
    return len(_PAUSE_RE.findall(text or ""))


def count_incomplete_thoughts(text: str) -> int:
    return len(_INCOMPLETE_RE.findall(text or ""))
