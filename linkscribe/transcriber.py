"""Transcription service contract and the Gemini-backed implementation."""

from __future__ import annotations

from typing import Any, Optional, Protocol

import httpx
import structlog
from opentelemetry import trace

from linkscribe.config import settings
from linkscribe.links import is_youtube_url

logger = structlog.get_logger()
tracer = trace.get_tracer(__name__)

TRANSCRIPTION_PROMPT = (
    "Transcribe all speech in the video at the URL below, word for word, in its "
    "original language. Return only the transcript text, without timestamps, "
    "speaker labels or commentary."
)
INVALID_RESPONSE_MESSAGE = "Transcription service returned an invalid response"


class TranscriptionFailed(Exception):
    """Raised when a video URL could not be transcribed, for any reason.

    ``message`` is the human-readable cause, or None when the failure carried none.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message
        super().__init__(message or "")


class TranscriptionService(Protocol):
    async def transcribe(self, url: str) -> str: ...


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Pull ``error.message`` out of a Google API error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        return message if isinstance(message, str) and message else None
    return None


def _candidate_text(body: Any) -> str:
    """Join the text parts of the first candidate; any unexpected shape is a failed transcription."""
    if not isinstance(body, dict) or not isinstance(body.get("candidates") or [], list):
        raise TranscriptionFailed(INVALID_RESPONSE_MESSAGE)
    candidates = body.get("candidates") or []
    if not candidates:
        feedback = body.get("promptFeedback")
        reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        raise TranscriptionFailed(
            f"Transcription was blocked: {reason}" if reason else "The model returned no transcript"
        )
    candidate = candidates[0]
    if not isinstance(candidate, dict) or not isinstance(candidate.get("content") or {}, dict):
        raise TranscriptionFailed(INVALID_RESPONSE_MESSAGE)
    parts = (candidate.get("content") or {}).get("parts") or []
    if not isinstance(parts, list) or not all(
        isinstance(part, dict) and isinstance(part.get("text", ""), str) for part in parts
    ):
        raise TranscriptionFailed(INVALID_RESPONSE_MESSAGE)
    return "".join(part.get("text", "") for part in parts).strip()


class GeminiTranscriber:
    """Transcribes a video URL with one generateContent call to the Gemini API.

    The request timeout is the only time limit in the transcription path.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self._model = model or settings.GEMINI_MODEL
        self._base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self._timeout = timeout or settings.GEMINI_TIMEOUT_SECONDS
        self._transport = transport

    def _request_body(self, url: str) -> dict[str, Any]:
        parts: list[dict[str, Any]] = []
        # Gemini can fetch YouTube videos directly; other hosts only get the link as text.
        if is_youtube_url(url):
            parts.append({"file_data": {"file_uri": url}})
        parts.append({"text": f"{TRANSCRIPTION_PROMPT}\n\n{url}"})
        return {"contents": [{"role": "user", "parts": parts}]}

    async def transcribe(self, url: str) -> str:
        """Return the transcript for ``url``. Raises TranscriptionFailed on any failure."""
        if not url or not url.strip():
            raise TranscriptionFailed("Video URL is empty")
        if not self._api_key:
            raise TranscriptionFailed("Transcription service is not configured (missing GEMINI_API_KEY)")

        with tracer.start_as_current_span("gemini.transcribe") as span:
            span.set_attribute("video.url", url)
            span.set_attribute("gemini.model", self._model)
            logger.info("gemini.transcribe.start", video_url=url, model=self._model)
            try:
                async with httpx.AsyncClient(
                    base_url=self._base_url, timeout=self._timeout, transport=self._transport
                ) as client:
                    response = await client.post(
                        f"/models/{self._model}:generateContent",
                        headers={"x-goog-api-key": self._api_key},
                        json=self._request_body(url),
                    )
                    response.raise_for_status()
                    text = _candidate_text(response.json())
            except httpx.TimeoutException:
                logger.error("gemini.transcribe.timeout", video_url=url)
                raise TranscriptionFailed("Transcription timed out") from None
            except httpx.HTTPStatusError as exc:
                detail = _error_detail(exc.response)
                logger.error(
                    "gemini.transcribe.http_error",
                    video_url=url,
                    status_code=exc.response.status_code,
                    error=detail,
                )
                raise TranscriptionFailed(detail) from None
            except httpx.HTTPError as exc:
                logger.error("gemini.transcribe.network_error", video_url=url, error=str(exc))
                raise TranscriptionFailed(f"Network error: {exc}") from None
            except ValueError:
                logger.error("gemini.transcribe.invalid_response", video_url=url)
                raise TranscriptionFailed(INVALID_RESPONSE_MESSAGE) from None

            span.set_attribute("transcript.length", len(text))
            logger.info("gemini.transcribe.success", video_url=url, length=len(text))
            return text
