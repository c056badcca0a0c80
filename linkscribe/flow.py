"""Host flow: link -> transcription -> translation, owning the mounted transcription step."""

from __future__ import annotations

from enum import Enum
from typing import Optional

import structlog

from linkscribe.clipboard import ClipboardProvider
from linkscribe.links import clean_video_url
from linkscribe.step import TranscriptionStep
from linkscribe.transcriber import TranscriptionService

logger = structlog.get_logger()


class Stage(str, Enum):
    LINK = "link"
    TRANSCRIPTION = "transcription"
    TRANSLATION = "translation"


class FlowController:
    """Decides which stage is shown and mounts a fresh step whenever the transcription stage is entered."""

    def __init__(self, service: TranscriptionService, clipboard: ClipboardProvider) -> None:
        self._service = service
        self._clipboard = clipboard
        self.stage = Stage.LINK
        self.clean_url = ""
        self.transcript = ""
        self.step: Optional[TranscriptionStep] = None

    def open_link(self, raw_url: str) -> str:
        """Clean a pasted link and show the transcription stage seeded with it."""
        self.clean_url = clean_video_url(raw_url)
        self.stage = Stage.TRANSCRIPTION
        if self.step is None:
            self._mount_step()
        else:
            self.step.reseed(self.clean_url)
        logger.info("flow.open_link", clean_url=self.clean_url)
        return self.clean_url

    def back(self) -> None:
        """Return from translation to a freshly mounted transcription step."""
        if self.stage is not Stage.TRANSLATION:
            return
        self.stage = Stage.TRANSCRIPTION
        self._mount_step()
        logger.info("flow.back", stage=self.stage.value)

    def _mount_step(self) -> None:
        self._unmount_step()
        self.step = TranscriptionStep(
            seed_url=self.clean_url,
            service=self._service,
            clipboard=self._clipboard,
            on_transcription_complete=self._on_transcription_complete,
            on_back=self._on_back,
        )

    def _unmount_step(self) -> None:
        if self.step is not None:
            self.step.unmount()
            self.step = None

    def _on_transcription_complete(self, text: str) -> None:
        self.transcript = text
        self._unmount_step()
        self.stage = Stage.TRANSLATION
        logger.info("flow.transcription_complete", length=len(text))

    def _on_back(self) -> None:
        self._unmount_step()
        self.stage = Stage.LINK
        logger.info("flow.back_to_link")
