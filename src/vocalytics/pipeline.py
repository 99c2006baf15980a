from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from .events import tag_events
from .fallback import FALLBACK_SCORECARD
from .features import extract_features
from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import AnalysisResult, parse_timed_words, parse_utterances
from .overall import overall_score, recommendations
from .scoring import score_features
from .segmenter import segment_transcript

LOG = logging.getLogger("vocalytics")

KNOWN_TEXT_FIELDS = ("text", "transcript", "content")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def coerce_transcript(raw: Any) -> str:
    """Resolve the accepted transcript shapes to plain text.

    A string passes through. A mapping or object with a non-empty ``text``,
    ``transcript`` or ``content`` field (checked in that order) yields that
    field. Anything else is stringified; every non-string path is logged.
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw

    if isinstance(raw, Mapping):
        for key in KNOWN_TEXT_FIELDS:
            value = raw.get(key)
            if value:
                LOG.warning("Transcript given as object; using '%s' field", key)
                return _as_text(value)
        LOG.warning("Transcript object has no known text field; serializing it as JSON")
        try:
            return json.dumps(raw, ensure_ascii=False, sort_keys=True, default=str)
        except (TypeError, ValueError):
            return str(raw)

    for key in KNOWN_TEXT_FIELDS:
        value = getattr(raw, key, None)
        if value:
            LOG.warning("Transcript given as %s; using '%s' attribute", type(raw).__name__, key)
            return _as_text(value)

    LOG.warning("Unexpected transcript type %s; using its string form", type(raw).__name__)
    return str(raw)


def analyze(
    transcript: Any,
    timed_words: Optional[Iterable[Any]] = None,
    utterances: Optional[Iterable[Any]] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> AnalysisResult:
    """Main entrypoint: transcript (+ optional timing) -> segments and scorecard.

    Never raises. Empty input or any internal failure yields no segments and
    the fallback scorecard, flagged on the result.
    """
    try:
        text = coerce_transcript(transcript)
        words = parse_timed_words(timed_words)
        utts = parse_utterances(utterances)

        segments = tag_events(segment_transcript(text, lexicon), lexicon)
        if not segments:
            LOG.warning("Transcript is empty after sentence split; returning fallback scorecard")
            return AnalysisResult(segments=(), scorecard=FALLBACK_SCORECARD, fallback=True, reason="empty_transcript")

        features = extract_features(text, words, utts, lexicon)
        scorecard = score_features(features)
        overall = overall_score(features)
        advice = recommendations(features)
    except Exception:
        LOG.exception("Transcript analysis failed; returning fallback scorecard")
        return AnalysisResult(segments=(), scorecard=FALLBACK_SCORECARD, fallback=True, reason="analysis_failure")

    LOG.debug("Analyzed transcript: %d segments, %d words", len(segments), features.word_count)
    return AnalysisResult(segments=segments, scorecard=scorecard, overall_score=overall, recommendations=advice)


def analyze_to_dict(
    transcript: Any,
    timed_words: Optional[Iterable[Any]] = None,
    utterances: Optional[Iterable[Any]] = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> Dict[str, Any]:
    return analyze(transcript, timed_words, utterances, lexicon).to_dict()


def analyze_payload(
    payload: Any, lexicon: Lexicon = DEFAULT_LEXICON, words: Optional[Iterable[Any]] = None
) -> Dict[str, Any]:
    """Analyze a decoded JSON value; objects may carry ``words`` and ``utterances``.

    Explicit ``words`` take precedence over the payload's own.
    """
    utterances = None
    if isinstance(payload, dict):
        if words is None:
            words = payload.get("words")
        utterances = payload.get("utterances")
    return analyze_to_dict(payload, words, utterances, lexicon)


def analyze_json(input_json: str, lexicon: Lexicon = DEFAULT_LEXICON) -> str:
    payload = json.loads(input_json)
    out = analyze_payload(payload, lexicon)
    return json.dumps(out, ensure_ascii=False, indent=2)
