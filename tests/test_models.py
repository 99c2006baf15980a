from __future__ import annotations

import logging

from vocalytics.models import TimedWord, Utterance, parse_timed_words, parse_utterances, safe_float


def test_safe_float():
    assert safe_float("1.5") == 1.5
    assert safe_float(None, 2.0) == 2.0
    assert safe_float("abc") == 0.0


def test_parse_timed_words_tolerates_bad_items(caplog):
    items = [
        {"punctuated_word": "Hello,", "start": "0.5", "end": 0.2},
        TimedWord("there", 0.6, 0.9),
        "oops",
        None,
        {"word": "friend", "start": "x"},
    ]
    with caplog.at_level(logging.WARNING):
        words = parse_timed_words(items)
    assert [w.word for w in words] == ["Hello,", "there", "friend"]
    assert (words[0].start, words[0].end) == (0.2, 0.5)
    assert (words[2].start, words[2].end, words[2].confidence) == (0.0, 0.0, 1.0)
    assert len(caplog.records) == 2


def test_parse_utterances():
    assert parse_timed_words(None) == ()
    utts = parse_utterances([{"speaker": 0, "start": 1, "end": 3, "text": "hi"}, 5, Utterance("1", 3.0, 4.0)])
    assert utts[0] == Utterance(speaker="0", start=1.0, end=3.0, text="hi")
    assert utts[1].speaker == "1"
    assert len(utts) == 2
