"""Shared fixtures for API tests."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from anon_feedback.api.app import create_app
from anon_feedback.api.dependencies import get_feedback_api
from anon_feedback.dashboard.client import FeedbackApiClient
from anon_feedback.dashboard.schemas import DecodedFeedbackList, Feedback

from tests.conftest import SESSION_COOKIE, make_encrypted_token


@pytest.fixture
def mock_feedback_api():
    """Mock FeedbackApiClient with two feedback items and acceptance off."""
    api = AsyncMock(spec=FeedbackApiClient)
    api.get_feedbacks = AsyncMock(return_value=DecodedFeedbackList(items=[
        Feedback(feedback_id="fb_1", content="Great talk"),
        Feedback(feedback_id="fb_2", content="Speak slower"),
    ]))
    api.get_acceptance = AsyncMock(return_value=False)
    api.set_acceptance = AsyncMock(return_value="Feedback acceptance updated")
    api.delete_feedback = AsyncMock(return_value="Feedback deleted")
    return api


@pytest.fixture
def app(auth_env, mock_feedback_api):
    """Application with the data API replaced by a mock."""
    app = create_app()
    app.dependency_overrides[get_feedback_api] = lambda: mock_feedback_api
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Signed-out test client that does not follow redirects."""
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def signed_in_client(app):
    """Test client carrying alice's encrypted session cookie."""
    return TestClient(
        app,
        follow_redirects=False,
        cookies={SESSION_COOKIE: make_encrypted_token()},
    )
