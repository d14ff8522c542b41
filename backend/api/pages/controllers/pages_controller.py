"""Pages controller — HTML routes for the web UI."""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from config import SITE_NAME
from errors import NotStreamable, ShareError
from api.files.services import files_service

router = APIRouter(tags=["Pages"])

TEMPLATES_DIR = Path(__file__).parent.parent.parent.parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)

POLICIES = {
    "terms": (
        "Terms of Service",
        [
            "Don't upload illegal content.",
            "No copyright infringement.",
            "Files may be removed at our discretion.",
        ],
    ),
    "privacy": (
        "Privacy Policy",
        [
            "We collect minimal metadata (filename, size, mime, timestamps).",
            "No account system. Server logs may include IPs for abuse prevention.",
        ],
    ),
}


def _filesize(size: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size or 0)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return f"{value:.1f} {units[unit]}" if unit else f"{int(value)} B"


templates.env.filters["filesize"] = _filesize
templates.env.globals["site_name"] = SITE_NAME


def _error_page(exc: ShareError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(request, "home.html")


@router.get("/terms", response_class=HTMLResponse)
async def terms(request: Request):
    return _policy(request, "terms")


@router.get("/privacy", response_class=HTMLResponse)
async def privacy(request: Request):
    return _policy(request, "privacy")


def _policy(request: Request, kind: str):
    title, lines = POLICIES[kind]
    return templates.TemplateResponse(
        request, "policy.html", {"title": title, "lines": lines}
    )


@router.get("/f/{short_id}", response_class=HTMLResponse)
async def share_page(request: Request, short_id: str):
    """Landing page for a shared link."""
    try:
        file = files_service.lookup(short_id)
    except ShareError as exc:
        return _error_page(exc)
    return templates.TemplateResponse(request, "file.html", {"file": file})


@router.get("/stream/{short_id}", response_class=HTMLResponse)
async def stream_page(request: Request, short_id: str):
    """Audio/video player page; only for files uploaded as streamable."""
    try:
        file = files_service.lookup(short_id)
        if not file.streamable:
            raise NotStreamable("Not streamable")
    except ShareError as exc:
        return _error_page(exc)
    return templates.TemplateResponse(
        request,
        "stream.html",
        {
            "file": file,
            "is_video": file.mime.startswith("video/"),
            "is_audio": file.mime.startswith("audio/"),
        },
    )
