"""FastAPI app exposing the link flow and the transcription step to a browser front end."""

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from linkscribe.auth import require_api_key
from linkscribe.clipboard import BufferedClipboard
from linkscribe.config import settings
from linkscribe.flow import FlowController
from linkscribe.logging_config import setup_logging
from linkscribe.schemas import ClipboardPayload, FlowView, LinkRequest, StepView, UrlUpdate
from linkscribe.step import TranscriptionStep
from linkscribe.tracing import setup_tracing
from linkscribe.transcriber import GeminiTranscriber


def _configure_observability() -> None:
    setup_logging(service_name="linkscribe", environment=settings.ENV, level=settings.LOG_LEVEL)
    setup_tracing(service_name="linkscribe", environment=settings.ENV)


_configure_observability()

app = FastAPI()

_clipboard = BufferedClipboard()
_flow = FlowController(service=GeminiTranscriber(), clipboard=_clipboard)


def get_clipboard() -> BufferedClipboard:
    return _clipboard


def get_flow() -> FlowController:
    return _flow


def get_step(flow: FlowController = Depends(get_flow)) -> TranscriptionStep:
    """The mounted transcription step; 409 when the flow is on another stage."""
    if flow.step is None:
        raise HTTPException(status_code=409, detail="Transcription step is not active")
    return flow.step


@app.exception_handler(RequestValidationError)
def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 for body validation errors (e.g. missing required fields)."""
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


@app.get("/health")
def health() -> dict[str, str]:
    """Health check: returns 200 when API is up. No auth required."""
    return {"status": "ok"}


@app.get("/flow", dependencies=[Depends(require_api_key)])
async def read_flow(flow: FlowController = Depends(get_flow)) -> FlowView:
    return FlowView.from_flow(flow)


@app.post("/flow/link", dependencies=[Depends(require_api_key)])
async def open_link(body: LinkRequest, flow: FlowController = Depends(get_flow)) -> FlowView:
    """Seed the transcription step with the cleaned link and show it."""
    if not body.url.strip():
        raise HTTPException(status_code=400, detail="url must not be empty")
    flow.open_link(body.url)
    return FlowView.from_flow(flow)


@app.post("/flow/back", dependencies=[Depends(require_api_key)])
async def flow_back(flow: FlowController = Depends(get_flow)) -> FlowView:
    flow.back()
    return FlowView.from_flow(flow)


@app.get("/step", dependencies=[Depends(require_api_key)])
async def read_step(step: TranscriptionStep = Depends(get_step)) -> StepView:
    return StepView.from_step(step)


@app.put("/step/url", dependencies=[Depends(require_api_key)])
async def update_url(body: UrlUpdate, step: TranscriptionStep = Depends(get_step)) -> StepView:
    step.set_url(body.url)
    return StepView.from_step(step)


@app.post("/step/transcribe", status_code=202, dependencies=[Depends(require_api_key)])
async def transcribe(
    background_tasks: BackgroundTasks,
    step: TranscriptionStep = Depends(get_step),
) -> StepView:
    """Enter the in-flight phase now; the remote call resolves after the response is sent."""
    pending = step.submit()
    if pending is None:
        raise HTTPException(status_code=409, detail="Transcription cannot start now")
    view = StepView.from_step(step)
    background_tasks.add_task(step.resolve, pending)
    return view


@app.post("/step/copy", dependencies=[Depends(require_api_key)])
async def copy_result(
    step: TranscriptionStep = Depends(get_step),
    clipboard: BufferedClipboard = Depends(get_clipboard),
) -> ClipboardPayload:
    if not step.copy():
        raise HTTPException(status_code=409, detail="Nothing to copy")
    return ClipboardPayload(text=clipboard.take() or "")


@app.post("/step/clear", dependencies=[Depends(require_api_key)])
async def clear_result(step: TranscriptionStep = Depends(get_step)) -> StepView:
    if not step.clear():
        raise HTTPException(status_code=409, detail="Nothing to clear")
    return StepView.from_step(step)


@app.post("/step/forward", dependencies=[Depends(require_api_key)])
async def forward_result(
    step: TranscriptionStep = Depends(get_step),
    flow: FlowController = Depends(get_flow),
) -> FlowView:
    """Hand the transcript to the translation stage."""
    if not step.forward():
        raise HTTPException(status_code=409, detail="Nothing to forward")
    return FlowView.from_flow(flow)


@app.post("/step/back", dependencies=[Depends(require_api_key)])
async def step_back(
    step: TranscriptionStep = Depends(get_step),
    flow: FlowController = Depends(get_flow),
) -> FlowView:
    step.back()
    return FlowView.from_flow(flow)
