"""Tests for the dashboard view-model state transitions."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from anon_feedback.auth.provider import SessionProvider
from anon_feedback.auth.schemas import Session, SessionUser
from anon_feedback.dashboard.client import DataApiError, FeedbackApiClient
from anon_feedback.dashboard.clipboard import BufferClipboard, ClipboardError
from anon_feedback.dashboard.schemas import DecodedFeedbackList, Feedback
from anon_feedback.dashboard.view_model import DashboardView, DashboardViewModel


def _feedbacks(*ids: str) -> list[Feedback]:
    return [Feedback(feedback_id=i, content=f"content {i}") for i in ids]


@pytest.fixture
def mock_api():
    """Mock FeedbackApiClient with successful defaults."""
    api = AsyncMock(spec=FeedbackApiClient)
    api.get_feedbacks = AsyncMock(return_value=DecodedFeedbackList(items=_feedbacks("a", "b")))
    api.get_acceptance = AsyncMock(return_value=False)
    api.set_acceptance = AsyncMock(return_value="Feedback acceptance updated")
    api.delete_feedback = AsyncMock(return_value="Feedback deleted")
    return api


@pytest.fixture
def vm(signed_in, mock_api):
    return DashboardViewModel(signed_in, mock_api, origin="https://app.example.com")


class TestViewState:
    def test_loading_until_resolved(self, alice_session, mock_api):
        vm = DashboardViewModel(SessionProvider(lambda: alice_session), mock_api)
        assert vm.view is DashboardView.LOADING
        assert vm.redirect_target("/admin/dashboard") is None

    def test_signed_out(self, signed_out, mock_api):
        vm = DashboardViewModel(signed_out, mock_api)

        assert vm.view is DashboardView.SIGNED_OUT
        assert vm.redirect_target("/admin/dashboard") == "/sign-in"
        assert vm.redirect_target("/sign-in") is None

    def test_ready(self, vm):
        assert vm.view is DashboardView.READY
        assert vm.redirect_target("/admin/dashboard") is None


class TestMount:
    @pytest.mark.asyncio
    async def test_loads_both_when_signed_in(self, vm, mock_api):
        assert await vm.mount() is True

        mock_api.get_feedbacks.assert_awaited_once()
        mock_api.get_acceptance.assert_awaited_once()
        assert [f.feedback_id for f in vm.feedbacks] == ["a", "b"]
        assert vm.accepting_feedback is False
        assert vm.notifier.pending == []

    @pytest.mark.asyncio
    async def test_no_fetch_when_signed_out(self, signed_out, mock_api):
        vm = DashboardViewModel(signed_out, mock_api)

        assert await vm.mount() is False

        mock_api.get_feedbacks.assert_not_awaited()
        mock_api.get_acceptance.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_fetch_while_loading(self, alice_session, mock_api):
        vm = DashboardViewModel(SessionProvider(lambda: alice_session), mock_api)

        assert await vm.mount() is False
        mock_api.get_feedbacks.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_loads_run_concurrently(self, vm, mock_api):
        started = []
        gate = asyncio.Event()

        async def slow_feedbacks():
            started.append("feedbacks")
            await gate.wait()
            return DecodedFeedbackList(items=[])

        async def acceptance():
            started.append("acceptance")
            gate.set()
            return True

        mock_api.get_feedbacks.side_effect = slow_feedbacks
        mock_api.get_acceptance.side_effect = acceptance

        await asyncio.wait_for(vm.mount(), timeout=1.0)

        assert set(started) == {"feedbacks", "acceptance"}


class TestLoadFeedbacks:
    @pytest.mark.asyncio
    async def test_non_array_response_empties_list(self, vm, mock_api):
        vm.feedbacks = _feedbacks("old")
        mock_api.get_feedbacks.return_value = DecodedFeedbackList.empty()

        result = await vm.load_feedbacks()

        assert result.ok
        assert vm.feedbacks == []
        assert vm.notifier.pending == []

    @pytest.mark.asyncio
    async def test_failure_keeps_stale_list(self, vm, mock_api):
        vm.feedbacks = _feedbacks("old")
        mock_api.get_feedbacks.side_effect = DataApiError("down")

        result = await vm.load_feedbacks()

        assert not result.ok
        assert [f.feedback_id for f in vm.feedbacks] == ["old"]
        toast = vm.notifier.pending[0]
        assert toast.title == "Error"
        assert toast.description == "Failed to fetch feedbacks"
        assert toast.variant == "destructive"
        assert vm.is_loading is False

    @pytest.mark.asyncio
    async def test_failure_uses_server_message(self, vm, mock_api):
        mock_api.get_feedbacks.side_effect = DataApiError(
            "401", status_code=401, server_message="Not Authenticated"
        )

        await vm.load_feedbacks()

        assert vm.notifier.pending[0].description == "Not Authenticated"

    @pytest.mark.asyncio
    async def test_refresh_toast(self, vm):
        await vm.load_feedbacks(refresh=True)

        toast = vm.notifier.pending[0]
        assert toast.title == "Refreshed feedbacks"
        assert toast.description == "Showing latest feedbacks"
        assert toast.variant == "default"

    @pytest.mark.asyncio
    async def test_loading_flag_set_while_in_flight(self, vm, mock_api):
        seen = []

        async def capture():
            seen.append(vm.is_loading)
            return DecodedFeedbackList(items=[])

        mock_api.get_feedbacks.side_effect = capture

        await vm.load_feedbacks()

        assert seen == [True]
        assert vm.is_loading is False

    @pytest.mark.asyncio
    async def test_last_response_wins(self, vm, mock_api):
        first_gate = asyncio.Event()
        calls = []

        async def respond():
            calls.append(len(calls))
            if len(calls) == 1:
                await first_gate.wait()
                return DecodedFeedbackList(items=_feedbacks("first"))
            first_gate.set()
            return DecodedFeedbackList(items=_feedbacks("second"))

        mock_api.get_feedbacks.side_effect = respond

        async def run_first():
            await vm.load_feedbacks()

        async def run_second():
            await asyncio.sleep(0)
            await vm.load_feedbacks()

        await asyncio.gather(run_first(), run_second())

        # The first request resolved last and overwrote the second's result
        assert [f.feedback_id for f in vm.feedbacks] == ["first"]


class TestLoadAcceptance:
    @pytest.mark.asyncio
    async def test_success(self, vm, mock_api):
        mock_api.get_acceptance.return_value = True

        await vm.load_acceptance()

        assert vm.accepting_feedback is True
        assert vm.is_switch_loading is False

    @pytest.mark.asyncio
    async def test_failure_keeps_prior_value(self, vm, mock_api):
        vm.accepting_feedback = True
        mock_api.get_acceptance.side_effect = DataApiError("down")

        await vm.load_acceptance()

        assert vm.accepting_feedback is True
        assert vm.notifier.pending[0].description == "Failed to fetch feedback settings"


class TestToggleAcceptance:
    @pytest.mark.asyncio
    async def test_false_to_true_on_success(self, vm, mock_api):
        vm.accepting_feedback = False

        result = await vm.toggle_acceptance()

        assert result.ok
        mock_api.set_acceptance.assert_awaited_once_with(True)
        assert vm.accepting_feedback is True
        toast = vm.notifier.pending[0]
        assert toast.title == "Feedback acceptance updated"
        assert toast.variant == "default"

    @pytest.mark.asyncio
    async def test_rejected_write_keeps_value(self, vm, mock_api):
        vm.accepting_feedback = False
        mock_api.set_acceptance.side_effect = DataApiError("500", status_code=500)

        result = await vm.toggle_acceptance()

        assert not result.ok
        assert vm.accepting_feedback is False
        assert vm.notifier.pending[0].description == "Failed to update feedback settings"

    @pytest.mark.asyncio
    async def test_local_value_not_changed_before_response(self, vm, mock_api):
        vm.accepting_feedback = True
        seen = []

        async def capture(value):
            seen.append(vm.accepting_feedback)
            return "ok"

        mock_api.set_acceptance.side_effect = capture

        await vm.toggle_acceptance()

        assert seen == [True]
        assert vm.accepting_feedback is False

    @pytest.mark.asyncio
    async def test_unknown_flag_sends_true(self, vm, mock_api):
        assert vm.accepting_feedback is None

        await vm.toggle_acceptance()

        mock_api.set_acceptance.assert_awaited_once_with(True)


class TestRemoveFeedback:
    def test_removes_only_matching_and_keeps_order(self, vm):
        vm.feedbacks = _feedbacks("a", "b", "c", "d")

        vm.remove_feedback("b")

        assert [f.feedback_id for f in vm.feedbacks] == ["a", "c", "d"]

    def test_unknown_id_is_noop(self, vm):
        vm.feedbacks = _feedbacks("a", "b")

        vm.remove_feedback("zzz")

        assert [f.feedback_id for f in vm.feedbacks] == ["a", "b"]

    def test_no_server_call(self, vm, mock_api):
        vm.feedbacks = _feedbacks("a")

        vm.remove_feedback("a")

        mock_api.delete_feedback.assert_not_called()
        assert vm.feedbacks == []


class TestDeleteThroughCard:
    @pytest.mark.asyncio
    async def test_server_confirms_then_local_removal(self, vm, mock_api):
        vm.feedbacks = _feedbacks("a", "b", "c")

        result = await vm.delete_feedback("b")

        assert result.ok
        mock_api.delete_feedback.assert_awaited_once_with("b")
        assert [f.feedback_id for f in vm.feedbacks] == ["a", "c"]
        assert vm.notifier.pending[0].title == "Feedback deleted"

    @pytest.mark.asyncio
    async def test_server_failure_keeps_item(self, vm, mock_api):
        vm.feedbacks = _feedbacks("a", "b")
        mock_api.delete_feedback.side_effect = DataApiError(
            "404", status_code=404, server_message="Feedback not found"
        )

        result = await vm.delete_feedback("b")

        assert not result.ok
        assert [f.feedback_id for f in vm.feedbacks] == ["a", "b"]
        assert vm.notifier.pending[0].description == "Feedback not found"


class TestProfileUrl:
    def test_builds_from_origin_and_username(self, vm):
        assert vm.profile_url == "https://app.example.com/u/alice"

    def test_no_origin_outside_browser_context(self, signed_in, mock_api):
        vm = DashboardViewModel(signed_in, mock_api, origin=None)
        assert vm.profile_url == "/u/alice"

    def test_missing_username(self, mock_api):
        provider = SessionProvider(lambda: Session("t", SessionUser(identifier="x")))
        provider.refresh()
        vm = DashboardViewModel(provider, mock_api, origin="https://app.example.com")

        assert vm.profile_url == "https://app.example.com/u/"

    def test_recomputed_on_session_change(self, mock_api):
        current = {"user": SessionUser(identifier="1", username="alice")}
        provider = SessionProvider(lambda: Session("t", current["user"]))
        provider.refresh()
        vm = DashboardViewModel(provider, mock_api, origin="https://app.example.com")

        current["user"] = SessionUser(identifier="2", username="bob")
        provider.refresh()

        assert vm.profile_url == "https://app.example.com/u/bob"


class TestCopyProfileUrl:
    @pytest.mark.asyncio
    async def test_success(self, vm):
        clipboard = BufferClipboard()

        assert await vm.copy_profile_url(clipboard) is True

        assert clipboard.text == "https://app.example.com/u/alice"
        assert vm.notifier.pending[0].title == "Profile URL copied to clipboard!"

    @pytest.mark.asyncio
    async def test_failure(self, vm):
        clipboard = AsyncMock()
        clipboard.write_text.side_effect = ClipboardError("denied")

        assert await vm.copy_profile_url(clipboard) is False

        toast = vm.notifier.pending[0]
        assert toast.description == "Failed to copy URL"
        assert toast.variant == "destructive"

    def test_offer_shows_link_for_manual_copy(self, vm):
        assert vm.offer_profile_url() == "https://app.example.com/u/alice"

        toast = vm.notifier.pending[0]
        assert toast.title == "Copy this link"
        assert toast.description == "https://app.example.com/u/alice"
        assert toast.variant == "default"


class TestSessionChange:
    def test_user_switch_clears_state(self, mock_api):
        current = {"user": SessionUser(identifier="1", username="alice")}
        provider = SessionProvider(lambda: Session("t", current["user"]))
        provider.refresh()
        vm = DashboardViewModel(provider, mock_api)
        vm.feedbacks = _feedbacks("a")
        vm.accepting_feedback = True

        current["user"] = SessionUser(identifier="2", username="bob")
        provider.refresh()

        assert vm.feedbacks == []
        assert vm.accepting_feedback is None

    def test_close_stops_listening(self, mock_api):
        current = {"user": SessionUser(identifier="1", username="alice")}
        provider = SessionProvider(lambda: Session("t", current["user"]))
        provider.refresh()
        vm = DashboardViewModel(provider, mock_api)
        vm.feedbacks = _feedbacks("a")

        vm.close()
        current["user"] = SessionUser(identifier="2", username="bob")
        provider.refresh()

        assert [f.feedback_id for f in vm.feedbacks] == ["a"]
