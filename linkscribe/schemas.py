"""Pydantic request/response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from linkscribe.flow import FlowController, Stage
from linkscribe.state import Phase
from linkscribe.step import TranscriptionStep


class LinkRequest(BaseModel):
    """Body for POST /flow/link: the link as pasted by the user."""

    url: str


class UrlUpdate(BaseModel):
    """Body for PUT /step/url: the user's edit of the URL field."""

    url: str


class FlowView(BaseModel):
    stage: Stage
    clean_url: str
    transcript: str

    @classmethod
    def from_flow(cls, flow: FlowController) -> FlowView:
        return cls(stage=flow.stage, clean_url=flow.clean_url, transcript=flow.transcript)


class StepView(BaseModel):
    """Everything a front end needs to render the transcription step."""

    url: str
    original_text: str
    is_transcribing: bool
    error: Optional[str]
    phase: Phase
    can_submit: bool
    can_copy: bool
    can_clear: bool
    can_forward: bool

    @classmethod
    def from_step(cls, step: TranscriptionStep) -> StepView:
        state = step.state
        return cls(
            url=step.url,
            original_text=state.original_text,
            is_transcribing=state.is_transcribing,
            error=state.error,
            phase=state.phase,
            can_submit=step.can_submit,
            can_copy=step.can_copy,
            can_clear=step.can_clear,
            can_forward=step.can_forward,
        )


class ClipboardPayload(BaseModel):
    """Text the browser should write to the system clipboard."""

    text: str
