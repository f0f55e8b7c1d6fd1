"""FastAPI application: book-to-slide-deck generation, viewer and PDF export."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import quote

from fastapi import BackgroundTasks, FastAPI, Form, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from app.config import settings
from app.exceptions import ExportFailure, GenerationFailure, InvalidTransition
from app.models.schemas import InfographicDocument, InfographicRequest
from app.services.infographic_service import generate_infographic
from app.services.pdf_export import export_filename, export_pdf
from app.services.presentation import TOTAL_SLIDES, build_slide, footer_text
from app.services.view_state import ViewController, ViewState

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# Single-user UI state
view = ViewController()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """The API credential is read once at startup; without it the service does not start."""
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY is not configured")
    logger.info("Using model %s (search grounding: %s)", settings.gemini_model, settings.search_grounding)
    yield


app = FastAPI(
    title="Book2Slide API",
    description="Turns a book title and author into a grounded literary-analysis slide deck, exportable to PDF.",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(InvalidTransition)
async def invalid_transition_handler(request: Request, exc: InvalidTransition) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


def _see_other() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def _render(request: Request, alert: str = "") -> Response:
    """Screen for the current view state."""
    context = {"view": view, "alert": alert, "total_slides": TOTAL_SLIDES}
    if view.state is ViewState.RESULT:
        context["slide"] = build_slide(view.document, view.current_slide)
        context["footer"] = footer_text(view.document)
    return templates.TemplateResponse(request, f"{view.state.value}.html", context)


@app.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


# --- HTML front end


@app.get("/", include_in_schema=False)
async def index(request: Request):
    return _render(request)


@app.post("/submit", include_in_schema=False)
async def submit(
    request: Request,
    background_tasks: BackgroundTasks,
    title: str = Form(""),
    author: str = Form(""),
):
    """Validate, switch to loading and run the generation after the redirect is sent."""
    if not view.begin(title, author):
        return _render(request)
    background_tasks.add_task(view.complete, generate_infographic)
    return _see_other()


@app.post("/slides/next", include_in_schema=False)
async def next_slide():
    view.next_slide()
    return _see_other()


@app.post("/slides/prev", include_in_schema=False)
async def previous_slide():
    view.previous_slide()
    return _see_other()


@app.post("/slides/{index}", include_in_schema=False)
async def go_to_slide(index: int):
    view.go_to(index)
    return _see_other()


@app.post("/reset", include_in_schema=False)
async def reset():
    view.reset()
    return _see_other()


@app.post("/retry", include_in_schema=False)
async def retry():
    view.retry()
    return _see_other()


def _pdf_response(document: InfographicDocument, pdf: bytes) -> Response:
    filename = export_filename(document.title)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@app.get("/export", include_in_schema=False)
def export(request: Request):
    """Download the whole deck; a failure keeps the viewer open and shows an alert."""
    if view.state is not ViewState.RESULT:
        return _see_other()
    try:
        pdf = export_pdf(view.document)
    except ExportFailure as e:
        return _render(request, alert=str(e))
    return _pdf_response(view.document, pdf)


# --- JSON API


@app.post(
    "/api/infographic",
    response_model=InfographicDocument,
    summary="Generate the infographic document",
    description="One grounded model call; returns the recovered document with its source URLs.",
)
async def post_infographic(request: InfographicRequest) -> InfographicDocument:
    """
    **Input (body):**
    - `title`: book title
    - `author`: book author

    **Output:** the infographic document (camelCase keys) with `sources` from search grounding.
    """
    try:
        return await generate_infographic(request.title, request.author)
    except GenerationFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    "/api/export",
    summary="Export a document as PDF",
    description="Renders the ten slides of the given document into a landscape PDF, one slide per page.",
    response_class=Response,
)
def post_export(document: InfographicDocument) -> Response:
    try:
        pdf = export_pdf(document)
    except ExportFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _pdf_response(document, pdf)
