"""Public pages: landing, auth hand-off pages, and sign-out."""

from urllib.parse import urlencode

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from anon_feedback.api.dependencies import get_auth_config, get_session_provider
from anon_feedback.auth.config import AuthConfig
from anon_feedback.auth.provider import SessionProvider
from anon_feedback.routing.guard import DASHBOARD_PATH
from anon_feedback.web.templating import render_page

logger = structlog.get_logger(__name__)
router = APIRouter()


def _provider_sign_in_href(config: AuthConfig) -> str:
    return f"{config.sign_in_url}?{urlencode({'callbackUrl': DASHBOARD_PATH})}"


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
):
    return render_page(request, "index.html")


@router.get("/sign-in", response_class=HTMLResponse, include_in_schema=False)
async def sign_in(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    config: AuthConfig = Depends(get_auth_config),
):
    return render_page(request, "auth.html", {
        "heading": "Sign in to Anonymous Feedback",
        "action_label": "Sign in",
        "provider_href": _provider_sign_in_href(config),
    })


@router.get("/sign-up", response_class=HTMLResponse, include_in_schema=False)
async def sign_up(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    config: AuthConfig = Depends(get_auth_config),
):
    return render_page(request, "auth.html", {
        "heading": "Join Anonymous Feedback",
        "message": "Sign up to start receiving anonymous feedback.",
        "action_label": "Sign up",
        "provider_href": _provider_sign_in_href(config),
    })


@router.get("/verify/{username}", response_class=HTMLResponse, include_in_schema=False)
async def verify(
    username: str,
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    config: AuthConfig = Depends(get_auth_config),
):
    return render_page(request, "auth.html", {
        "heading": "Verify Your Account",
        "message": f"Enter the verification code sent to {username}'s email.",
        "action_label": "Continue",
        "provider_href": _provider_sign_in_href(config),
    })


@router.get("/logout", include_in_schema=False)
async def logout(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    config: AuthConfig = Depends(get_auth_config),
):
    """Terminate the session: drop our cookies and hand off to the provider."""
    user = sessions.session.user if sessions.session else None
    response = RedirectResponse(url=config.sign_out_url, status_code=303)
    for name in config.session_cookie_names:
        response.delete_cookie(name, secure=name.startswith("__Secure-"))

    logger.info("User signed out", user_id=user.identifier if user else None)
    return response
