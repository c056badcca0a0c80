"""Clipboard providers for the transcription step."""

from __future__ import annotations

from typing import Optional, Protocol

import structlog

logger = structlog.get_logger()


class ClipboardProvider(Protocol):
    def write_text(self, text: str) -> None: ...


class BufferedClipboard:
    """Holds copied text until the HTTP layer hands it to the browser, which owns the real clipboard."""

    def __init__(self) -> None:
        self._pending: Optional[str] = None

    def write_text(self, text: str) -> None:
        logger.info("clipboard.write_text", length=len(text))
        self._pending = text

    def take(self) -> Optional[str]:
        """Return the last copied text and forget it."""
        text, self._pending = self._pending, None
        return text
