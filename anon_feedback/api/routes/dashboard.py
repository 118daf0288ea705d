"""Owner dashboard page and its actions.

Each request builds a fresh ``DashboardViewModel`` bound to the
request's session, mounts it (loading the feedback list and acceptance
flag) and runs at most one action. Callers sending
``Accept: application/json`` get the resulting state as JSON. Browser
form posts are answered with a 303 back to the dashboard page, with the
action's toasts carried over in a flash cookie.
"""

import structlog
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from anon_feedback.api.dependencies import (
    get_dashboard_config,
    get_feedback_api,
    get_session_provider,
)
from anon_feedback.api.models import (
    ActionResponse,
    CopyLinkResponse,
    DashboardStateResponse,
    FeedbackItem,
    ToastModel,
)
from anon_feedback.auth.provider import SessionProvider
from anon_feedback.config.settings import get_settings
from anon_feedback.dashboard.client import FeedbackApiClient
from anon_feedback.dashboard.clipboard import BufferClipboard
from anon_feedback.dashboard.commands import CommandResult
from anon_feedback.dashboard.config import DashboardConfig
from anon_feedback.dashboard.notifications import Toast
from anon_feedback.dashboard.view_model import (
    COPY_FAILED_MESSAGE,
    COPY_SUCCESS_TITLE,
    DashboardView,
    DashboardViewModel,
)
from anon_feedback.routing.guard import DASHBOARD_PATH
from anon_feedback.web.flash import clear_flash, flash_toasts, read_flashed_toasts
from anon_feedback.web.templating import render_page

logger = structlog.get_logger(__name__)
router = APIRouter(prefix=DASHBOARD_PATH)


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


def _request_origin(request: Request) -> str:
    settings = get_settings()
    if settings.public_origin:
        return settings.public_origin.rstrip("/")
    return f"{request.url.scheme}://{request.url.netloc}"


def _toast_models(toasts: list[Toast]) -> list[ToastModel]:
    return [ToastModel(**t.to_dict()) for t in toasts]


def _state(vm: DashboardViewModel, toasts: list[Toast]) -> DashboardStateResponse:
    return DashboardStateResponse(
        view=vm.view.value,
        username=vm.user.username if vm.user else None,
        profile_url=vm.profile_url,
        accepting_feedback=vm.accepting_feedback,
        feedbacks=[
            FeedbackItem(
                feedback_id=f.feedback_id,
                content=f.content,
                created_at=f.created_at.isoformat() if f.created_at else None,
            )
            for f in vm.feedbacks
        ],
        toasts=_toast_models(toasts),
    )


def _render(request: Request, vm: DashboardViewModel):
    toasts = vm.notifier.drain()
    if _wants_json(request):
        return _state(vm, toasts)
    return render_page(request, "dashboard.html", {
        "view": vm.view.value,
        "user": vm.user,
        "profile_url": vm.profile_url,
        "accepting_feedback": vm.accepting_feedback,
        "is_switch_loading": vm.is_switch_loading,
        "feedbacks": vm.feedbacks,
        "toasts": toasts,
        "copy_messages": {
            "copied": COPY_SUCCESS_TITLE,
            "failed": COPY_FAILED_MESSAGE,
        },
    })


def _redirect_to_dashboard(vm: DashboardViewModel) -> RedirectResponse:
    """Post/redirect/get: hand the action's toasts to the next page load."""
    response = RedirectResponse(url=DASHBOARD_PATH, status_code=303)
    flash_toasts(response, vm.notifier.drain(), path=DASHBOARD_PATH)
    return response


def _action_result(
    request: Request,
    vm: DashboardViewModel,
    result: CommandResult | None,
):
    if not _wants_json(request):
        return _redirect_to_dashboard(vm)

    toasts = vm.notifier.drain()
    if result is None:
        ok, message = False, None
    elif result.ok:
        ok, message = True, result.value if isinstance(result.value, str) else None
    else:
        ok, message = False, result.message

    return ActionResponse(ok=ok, message=message, state=_state(vm, toasts))


async def get_view_model(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    api: FeedbackApiClient = Depends(get_feedback_api),
    config: DashboardConfig = Depends(get_dashboard_config),
):
    vm = DashboardViewModel(
        sessions=sessions,
        api=api,
        origin=_request_origin(request),
        config=config,
    )
    try:
        yield vm
    finally:
        vm.close()


@router.get("", summary="Dashboard page")
async def dashboard_page(
    request: Request,
    response: Response,
    vm: DashboardViewModel = Depends(get_view_model),
):
    target = vm.redirect_target(request.url.path)
    if target is not None:
        return RedirectResponse(url=target, status_code=303)

    for toast in read_flashed_toasts(request):
        vm.notifier.push(toast)

    await vm.mount()
    result = _render(request, vm)
    clear_flash(request, result if isinstance(result, Response) else response, path=DASHBOARD_PATH)
    return result


@router.post("/refresh", summary="Reload the feedback list")
async def refresh_feedbacks(
    request: Request,
    vm: DashboardViewModel = Depends(get_view_model),
):
    result = None
    if vm.view is DashboardView.READY:
        await vm.load_acceptance()
        result = await vm.load_feedbacks(refresh=True)
    return _action_result(request, vm, result)


@router.post("/accept-feedbacks", summary="Toggle whether feedback is accepted")
async def toggle_accept_feedbacks(
    request: Request,
    vm: DashboardViewModel = Depends(get_view_model),
):
    result = None
    if await vm.mount() and vm.accepting_feedback is not None:
        result = await vm.toggle_acceptance()
    return _action_result(request, vm, result)


# Ids arrive percent-encoded as one segment but may decode to several.
@router.post("/feedback/{feedback_id:path}/delete", summary="Delete one feedback item")
async def delete_feedback(
    feedback_id: str,
    request: Request,
    vm: DashboardViewModel = Depends(get_view_model),
):
    result = None
    if await vm.mount():
        result = await vm.delete_feedback(feedback_id)
        logger.info("Feedback delete", feedback_id=feedback_id, ok=result.ok)
    return _action_result(request, vm, result)


@router.post("/copy-link", summary="Copy the shareable profile link")
async def copy_profile_link(
    request: Request,
    vm: DashboardViewModel = Depends(get_view_model),
):
    """Copy the profile link for API callers.

    Browsers copy on the page itself; a form post reaching this endpoint
    comes from a page without a usable clipboard and gets the link shown
    for manual copying instead.
    """
    if not _wants_json(request):
        vm.offer_profile_url()
        return _redirect_to_dashboard(vm)

    clipboard = BufferClipboard()
    copied = await vm.copy_profile_url(clipboard)
    return CopyLinkResponse(
        copied=copied,
        profile_url=clipboard.text or vm.profile_url,
        toasts=_toast_models(vm.notifier.drain()),
    )
