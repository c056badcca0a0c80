"""Tests for the transcription reducer and derived phases."""

from linkscribe.state import (
    INITIAL_STATE,
    Cleared,
    Failed,
    Phase,
    Submitted,
    Succeeded,
    TranscriptionState,
    reduce,
)

IN_FLIGHT = TranscriptionState(is_transcribing=True)


def test_initial_state_is_idle_and_empty() -> None:
    assert INITIAL_STATE == TranscriptionState(original_text="", is_transcribing=False, error=None)
    assert INITIAL_STATE.phase is Phase.IDLE


def test_submitted_clears_previous_result_and_error() -> None:
    """A new request never shows alongside a stale result or error."""
    for previous in (
        TranscriptionState(original_text="old text"),
        TranscriptionState(error="old error"),
    ):
        state = reduce(previous, Submitted())
        assert state == IN_FLIGHT
        assert state.phase is Phase.IN_FLIGHT


def test_submitted_while_in_flight_is_ignored() -> None:
    assert reduce(IN_FLIGHT, Submitted()) is IN_FLIGHT


def test_succeeded_stores_text() -> None:
    state = reduce(IN_FLIGHT, Succeeded("hello world"))
    assert state == TranscriptionState(original_text="hello world")
    assert state.phase is Phase.SUCCEEDED


def test_succeeded_with_empty_text_lands_idle() -> None:
    state = reduce(IN_FLIGHT, Succeeded(""))
    assert state == INITIAL_STATE
    assert state.phase is Phase.IDLE


def test_failed_stores_message_and_clears_in_flight_flag() -> None:
    state = reduce(IN_FLIGHT, Failed("Unsupported platform"))
    assert state == TranscriptionState(error="Unsupported platform")
    assert state.is_transcribing is False
    assert state.phase is Phase.FAILED


def test_resolution_outside_in_flight_is_ignored() -> None:
    done = TranscriptionState(original_text="kept")
    assert reduce(done, Succeeded("late")) is done
    assert reduce(done, Failed("late")) is done


def test_cleared_returns_exact_initial_state() -> None:
    assert reduce(TranscriptionState(original_text="hello world"), Cleared()) == INITIAL_STATE
    assert reduce(TranscriptionState(error="boom"), Cleared()) == INITIAL_STATE
