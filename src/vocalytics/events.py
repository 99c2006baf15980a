from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import (
    AUTO_ATTENDANT_START,
    CALL_END,
    DIALOG_END,
    DIALOG_START,
    HOLD_END,
    HOLD_START,
    INTRODUCTION_END,
    INTRODUCTION_START,
    PRIMARY_AGENT_START,
    TRANSFER_END,
    TRANSFER_START,
    TranscriptSegment,
)
from .preprocess import contains_keyword, contains_phrase


@dataclass(frozen=True)
class ConversationState:
    dialog_started: bool = False
    in_introduction_phase: bool = True
    hold_open: bool = False
    transfer_open: bool = False


INITIAL_STATE = ConversationState()


def step(
    state: ConversationState, segment: TranscriptSegment, lexicon: Lexicon = DEFAULT_LEXICON
) -> Tuple[Tuple[str, ...], ConversationState]:
    """Tag one segment. Rules read the state as it was before this segment."""
    text = segment.text
    is_agent = segment.is_agent
    events: List[str] = []

    if segment.id == 0 and is_agent:
        events.append(DIALOG_START)

    introduces = is_agent and contains_phrase(text, lexicon.self_introduction)
    if state.in_introduction_phase and introduces:
        events.append(INTRODUCTION_START)
        if contains_phrase(text, lexicon.primary_agent):
            events.append(PRIMARY_AGENT_START)

    if state.in_introduction_phase and not is_agent and contains_phrase(text, lexicon.acknowledgment):
        events.append(INTRODUCTION_END)

    if state.hold_open and contains_phrase(text, lexicon.hold_return):
        events.append(HOLD_END)
    elif contains_keyword(text, lexicon.hold):
        events.append(HOLD_START)

    if state.transfer_open and introduces:
        events.append(TRANSFER_END)
    if contains_keyword(text, lexicon.transfer):
        events.append(TRANSFER_START)

    if contains_keyword(text, lexicon.auto_attendant):
        events.append(AUTO_ATTENDANT_START)

    if state.dialog_started and is_agent and contains_phrase(text, lexicon.dialog_end):
        events.append(DIALOG_END)

    hold_open = state.hold_open
    if HOLD_END in events:
        hold_open = False
    if HOLD_START in events:
        hold_open = True
    transfer_open = state.transfer_open
    if TRANSFER_END in events:
        transfer_open = False
    if TRANSFER_START in events:
        transfer_open = True

    new_state = replace(
        state,
        dialog_started=state.dialog_started or DIALOG_START in events,
        in_introduction_phase=state.in_introduction_phase and INTRODUCTION_END not in events,
        hold_open=hold_open,
        transfer_open=transfer_open,
    )
    return tuple(events), new_state


def tag_events(
    segments: Sequence[TranscriptSegment], lexicon: Lexicon = DEFAULT_LEXICON
) -> Tuple[TranscriptSegment, ...]:
    """Fold left-to-right over the turns and attach event tags.

    The last segment always ends up with exactly one CALL END.
    """
    state = INITIAL_STATE
    tagged: List[TranscriptSegment] = []
    for seg in segments:
        events, state = step(state, seg, lexicon)
        tagged.append(replace(seg, events=seg.events + events))

    if tagged:
        last = tagged[-1]
        if CALL_END not in last.events:
            tagged[-1] = replace(last, events=last.events + (CALL_END,))
    return tuple(tagged)
