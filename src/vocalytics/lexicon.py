from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml


@dataclass(frozen=True)
class Lexicon:
    """Word and phrase lists driving every text heuristic.

    Entries are matched case-insensitively as whole words/phrases, except
    ``strong_agent`` whose entries are regular expressions.
    """

    # --- feature extractor ---
    filler: Tuple[str, ...] = (
        "um", "uh", "like", "you know", "so", "well", "actually", "basically", "right", "okay",
    )
    confidence: Tuple[str, ...] = (
        "certainly", "definitely", "absolutely", "sure", "confident", "yes", "of course",
    )
    uncertainty: Tuple[str, ...] = (
        "maybe", "perhaps", "i think", "probably", "not sure", "might", "could be",
    )
    professional: Tuple[str, ...] = (
        "please", "thank you", "sir", "madam", "certainly", "of course", "my pleasure",
        "absolutely", "definitely", "professional",
    )
    casual: Tuple[str, ...] = (
        "yeah", "nope", "whatever", "dude", "guys", "stuff", "things", "like", "totally",
    )
    empathy: Tuple[str, ...] = (
        "understand", "sorry", "apologize", "feel", "imagine", "appreciate", "concern",
        "worry", "frustration", "difficult",
    )
    emotional: Tuple[str, ...] = (
        "excited", "thrilled", "disappointed", "frustrated", "happy", "pleased", "concerned",
        "worried", "grateful", "thankful",
    )
    listening_cue: Tuple[str, ...] = (
        "i understand", "i see", "that makes sense", "tell me more", "go on", "i hear you",
        "absolutely", "of course", "right", "exactly", "mm-hmm", "yes", "okay",
    )
    adaptability: Tuple[str, ...] = (
        "let me try a different approach", "another way to look at this", "alternatively",
        "on the other hand", "let me explain differently",
    )
    customer_centric: Tuple[str, ...] = (
        "how can i help", "what can i do for you", "your needs", "your concerns", "for you",
        "help you", "assist you",
    )
    knowledge: Tuple[str, ...] = (
        "according to our policy", "based on our records", "our system shows", "i can confirm",
        "our procedure", "company policy",
    )
    familiarity: Tuple[str, ...] = ("honey", "sweetie", "darling", "babe", "buddy", "dude", "pal")
    interruption: Tuple[str, ...] = ("--", "sorry to interrupt", "excuse me", "wait", "hold on")
    silence_marker: Tuple[str, ...] = ("[silence]", "[pause]", "[long pause]", "[no response]")
    agent_prefix: Tuple[str, ...] = ("agent", "rep", "representative")
    customer_prefix: Tuple[str, ...] = ("customer", "caller", "client", "prospect")

    # --- speaker classifier ---
    strong_agent: Tuple[str, ...] = (
        r"licensed agent", r"this is.*agent", r"calling from", r"recorded line",
        r"my name is.*agent", r"assurant sales", r"qualify for", r"benefits available",
        r"qualifying questions", r"zip code", r"county", r"date of birth", r"let me help",
        r"i can assist", r"what i can do", r"alexandria castro",
    )
    agent_offer: Tuple[str, ...] = ("help", "assist", "available", "qualify", "benefits")
    high_certainty_agent: Tuple[str, ...] = (
        "licensed agent", "recorded line", "my name is", "qualifying questions", "zip code",
        "benefits available",
    )
    moderate_agent: Tuple[str, ...] = ("help", "assist", "qualify", "available")
    confirmation: Tuple[str, ...] = ("yes", "no", "okay", "ok", "sure", "alright")
    customer_marker: Tuple[str, ...] = ("my last name is", "rodriguez", "lisa")

    # --- event tagger ---
    self_introduction: Tuple[str, ...] = ("my name is", "this is", "licensed agent")
    primary_agent: Tuple[str, ...] = ("licensed agent", "assurant")
    acknowledgment: Tuple[str, ...] = ("yes", "okay")
    hold: Tuple[str, ...] = ("hold", "wait", "moment")
    hold_return: Tuple[str, ...] = (
        "thank you for holding", "thank you for waiting", "thanks for holding",
        "thanks for waiting", "are you still there", "i'm back",
    )
    transfer: Tuple[str, ...] = ("transfer", "connect", "specialist")
    auto_attendant: Tuple[str, ...] = ("automated", "press", "dial")
    dialog_end: Tuple[str, ...] = ("qualifying questions", "review what you're eligible")


DEFAULT_LEXICON = Lexicon()


def load_lexicon(path: Union[str, Path], base: Lexicon = DEFAULT_LEXICON) -> Lexicon:
    """Load list overrides from YAML; listed categories replace the defaults."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Lexicon file not found at {p}")
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    if data is None:
        return base
    if not isinstance(data, dict):
        raise ValueError("Lexicon yaml must be a mapping of category -> list of phrases")
    return lexicon_from_mapping(data, base)


def lexicon_from_mapping(data: Dict[str, Any], base: Lexicon = DEFAULT_LEXICON) -> Lexicon:
    known = {f.name for f in fields(Lexicon)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown lexicon categories: {', '.join(unknown)}")
    overrides: Dict[str, Tuple[str, ...]] = {}
    for key, value in data.items():
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Lexicon category '{key}' must be a list")
        overrides[key] = tuple(str(v).strip() for v in value if str(v).strip())
    return replace(base, **overrides)
