"""Transcription step: URL input, the request/result state machine, and its actions."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from linkscribe.clipboard import ClipboardProvider
from linkscribe.config import settings
from linkscribe.state import (
    INITIAL_STATE,
    Action,
    Cleared,
    Failed,
    Submitted,
    Succeeded,
    TranscriptionState,
    reduce,
)
from linkscribe.transcriber import TranscriptionFailed, TranscriptionService

logger = structlog.get_logger()

StateListener = Callable[[TranscriptionState], None]


@dataclass(frozen=True)
class PendingTranscription:
    """Token for one issued request; only the latest generation may resolve the state."""

    generation: int
    url: str


class TranscriptionStep:
    """One mounted instance of the transcription step.

    The host seeds the URL, receives ``on_transcription_complete(text)`` when the
    user forwards a result and ``on_back()`` when the user leaves. State lives only
    as long as the instance; call ``unmount()`` when the host discards it.
    """

    def __init__(
        self,
        seed_url: str,
        service: TranscriptionService,
        clipboard: ClipboardProvider,
        on_transcription_complete: Callable[[str], None],
        on_back: Callable[[], None],
        fallback_error: Optional[str] = None,
    ) -> None:
        self._seed = seed_url
        self._url = seed_url
        self._service = service
        self._clipboard = clipboard
        self._on_transcription_complete = on_transcription_complete
        self._on_back = on_back
        self._fallback_error = fallback_error or settings.TRANSCRIPTION_FALLBACK_ERROR
        self._state = INITIAL_STATE
        self._generation = 0
        self._mounted = True
        self._listeners: list[StateListener] = []

    # -- input holder --

    @property
    def url(self) -> str:
        return self._url

    def set_url(self, value: str) -> None:
        self._url = value

    def reseed(self, clean_url: str) -> None:
        """Overwrite the local URL when the host's seed value changes, discarding local edits."""
        if clean_url == self._seed:
            return
        self._seed = clean_url
        self._url = clean_url
        logger.info("transcription_step.reseed", video_url=clean_url)

    # -- state --

    @property
    def state(self) -> TranscriptionState:
        return self._state

    @property
    def mounted(self) -> bool:
        return self._mounted

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns a function that unsubscribes it.

        A listener that raises is logged and skipped; the transition and the other listeners still apply.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, action: Action) -> None:
        new_state = reduce(self._state, action)
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as exc:  # noqa: BLE001
                logger.warning("transcription_step.listener_failed", listener=repr(listener), error=str(exc))

    def unmount(self) -> None:
        """Detach from the host; any outstanding request resolves into nothing."""
        self._mounted = False
        self._listeners.clear()

    # -- enablement --

    @property
    def can_submit(self) -> bool:
        return bool(self._url) and not self._state.is_transcribing

    @property
    def can_copy(self) -> bool:
        return self._state.has_result

    @property
    def can_clear(self) -> bool:
        return self._state.has_result

    @property
    def can_forward(self) -> bool:
        return self._state.has_result

    # -- transcription --

    def submit(self) -> Optional[PendingTranscription]:
        """Enter the in-flight phase and return the request token, or None when submit is disabled.

        Text and error are cleared before this returns, i.e. before the remote call starts.
        """
        if not self._mounted or not self.can_submit:
            logger.info(
                "transcription_step.submit_ignored",
                video_url=self._url,
                is_transcribing=self._state.is_transcribing,
            )
            return None
        self._generation += 1
        self._dispatch(Submitted())
        logger.info("transcription_step.submit", video_url=self._url, generation=self._generation)
        return PendingTranscription(generation=self._generation, url=self._url)

    def _is_current(self, pending: PendingTranscription) -> bool:
        return (
            self._mounted
            and pending.generation == self._generation
            and self._state.is_transcribing
        )

    def _failure_message(self, exc: Exception) -> str:
        if isinstance(exc, TranscriptionFailed):
            message = exc.message
        else:
            message = str(exc)
        return message or self._fallback_error

    async def resolve(self, pending: PendingTranscription) -> None:
        """Await the service for ``pending`` and apply the outcome if the request is still current."""
        try:
            text = await self._service.transcribe(pending.url)
        except asyncio.CancelledError:
            if self._is_current(pending):
                logger.warning(
                    "transcription_step.cancelled",
                    video_url=pending.url,
                    generation=pending.generation,
                )
                self._dispatch(Failed(self._fallback_error))
            raise
        except Exception as exc:  # noqa: BLE001
            message = self._failure_message(exc)
            if not self._is_current(pending):
                logger.info(
                    "transcription_step.stale_failure_ignored",
                    video_url=pending.url,
                    generation=pending.generation,
                )
                return
            logger.error(
                "transcription_step.failed",
                video_url=pending.url,
                generation=pending.generation,
                error=message,
            )
            self._dispatch(Failed(message))
            return

        if not self._is_current(pending):
            logger.info(
                "transcription_step.stale_result_ignored",
                video_url=pending.url,
                generation=pending.generation,
            )
            return
        logger.info(
            "transcription_step.succeeded",
            video_url=pending.url,
            generation=pending.generation,
            length=len(text),
        )
        self._dispatch(Succeeded(text))

    async def transcribe(self) -> None:
        """Submit and wait for the outcome; a no-op when submit is disabled."""
        pending = self.submit()
        if pending is not None:
            await self.resolve(pending)

    # -- actions --

    def copy(self) -> bool:
        if not self.can_copy:
            return False
        try:
            self._clipboard.write_text(self._state.original_text)
        except Exception as exc:  # noqa: BLE001
            logger.warning("transcription_step.copy_failed", error=str(exc))
        return True

    def clear(self) -> bool:
        if not self.can_clear:
            return False
        self._dispatch(Cleared())
        logger.info("transcription_step.clear")
        return True

    def forward(self) -> bool:
        if not self.can_forward:
            return False
        logger.info("transcription_step.forward", length=len(self._state.original_text))
        self._on_transcription_complete(self._state.original_text)
        return True

    def back(self) -> bool:
        logger.info("transcription_step.back")
        self._on_back()
        return True
