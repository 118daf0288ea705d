"""Jinja2 template rendering for server-rendered pages."""

from pathlib import Path
from urllib.parse import quote

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from anon_feedback.auth.schemas import SessionSnapshot, SessionStatus
from anon_feedback.web.navbar import build_navbar

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def path_segment(value: object) -> str:
    """Percent-encode a value so it stays a single URL path segment."""
    return quote(str(value), safe="")


templates.env.filters["path_segment"] = path_segment


def render_page(
    request: Request,
    template_name: str,
    context: dict | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render a page template with the navbar for the request's session."""
    provider = getattr(request.state, "sessions", None)
    snapshot = (
        provider.snapshot()
        if provider is not None
        else SessionSnapshot(status=SessionStatus.UNAUTHENTICATED)
    )

    page_context = {"navbar": build_navbar(snapshot)}
    page_context.update(context or {})

    return templates.TemplateResponse(
        request,
        template_name,
        page_context,
        status_code=status_code,
    )
