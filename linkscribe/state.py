"""Transcription state and the pure reducer that moves it between phases.

Phases (derived, never stored):

    idle       not transcribing, no error; text may or may not be present
    in_flight  transcribing; text and error cleared
    succeeded  not transcribing, no error, text present
    failed     not transcribing, error present, text empty
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union


class Phase(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TranscriptionState:
    """What the transcription step shows: result text, in-flight flag, last error."""

    original_text: str = ""
    is_transcribing: bool = False
    error: Optional[str] = None

    @property
    def phase(self) -> Phase:
        if self.is_transcribing:
            return Phase.IN_FLIGHT
        if self.error is not None:
            return Phase.FAILED
        if self.original_text:
            return Phase.SUCCEEDED
        return Phase.IDLE

    @property
    def has_result(self) -> bool:
        return bool(self.original_text)


INITIAL_STATE = TranscriptionState()


@dataclass(frozen=True)
class Submitted:
    """A request is about to be issued."""


@dataclass(frozen=True)
class Succeeded:
    text: str


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class Cleared:
    """User discarded the current result."""


Action = Union[Submitted, Succeeded, Failed, Cleared]


def reduce(state: TranscriptionState, action: Action) -> TranscriptionState:
    """Return the state that follows ``action``; illegal transitions leave ``state`` as is."""
    if isinstance(action, Submitted):
        if state.is_transcribing:
            return state
        return replace(state, is_transcribing=True, original_text="", error=None)

    if isinstance(action, Succeeded):
        if not state.is_transcribing:
            return state
        return replace(state, is_transcribing=False, original_text=action.text, error=None)

    if isinstance(action, Failed):
        if not state.is_transcribing:
            return state
        return replace(state, is_transcribing=False, original_text="", error=action.message)

    if isinstance(action, Cleared):
        return INITIAL_STATE

    raise TypeError(f"Unknown action: {action!r}")
