"""Shared fixtures: a fresh flow per test with a fake transcription service behind the API."""

import os

# Set env before importing the app so pydantic-settings picks them up.
os.environ.setdefault("API_KEY", "test-secret-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

import pytest
from fastapi.testclient import TestClient

from linkscribe.clipboard import BufferedClipboard
from linkscribe.flow import FlowController
from linkscribe.main import app, get_clipboard, get_flow


class FakeTranscriber:
    """Resolves immediately with ``text``, or raises ``error`` when set. Records every URL."""

    def __init__(self, text: str = "hello world", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[str] = []

    async def transcribe(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture
def clipboard() -> BufferedClipboard:
    return BufferedClipboard()


@pytest.fixture
def flow(transcriber: FakeTranscriber, clipboard: BufferedClipboard) -> FlowController:
    return FlowController(service=transcriber, clipboard=clipboard)


@pytest.fixture
def client(flow: FlowController, clipboard: BufferedClipboard):
    app.dependency_overrides[get_flow] = lambda: flow
    app.dependency_overrides[get_clipboard] = lambda: clipboard
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
