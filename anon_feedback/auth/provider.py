"""Session provider: the explicit session context handed to views.

One provider is created per request at the application root and stored
on ``request.state``. Views read a ``SessionSnapshot`` from it, may
subscribe to changes, and may ask it to re-resolve the session.
"""

import logging
from typing import Callable

from starlette.requests import HTTPConnection

from anon_feedback.auth.resolver import SessionResolver
from anon_feedback.auth.schemas import Session, SessionSnapshot, SessionStatus

logger = logging.getLogger(__name__)

SessionLoader = Callable[[], Session | None]
SessionListener = Callable[[SessionSnapshot], None]


class SessionProvider:
    """Holds the current session state and notifies subscribers of changes.

    The status starts as ``loading`` and only becomes ``authenticated`` or
    ``unauthenticated`` after the first ``refresh()``. A loader that
    raises is treated exactly like one that found no session.
    """

    def __init__(self, loader: SessionLoader) -> None:
        self._loader = loader
        self._snapshot = SessionSnapshot(status=SessionStatus.LOADING)
        self._listeners: list[SessionListener] = []

    @classmethod
    def for_request(
        cls,
        resolver: SessionResolver,
        conn: HTTPConnection,
    ) -> "SessionProvider":
        """Create a provider bound to a request and resolve it once."""
        provider = cls(lambda: resolver.resolve_session(conn))
        provider.refresh()
        return provider

    def snapshot(self) -> SessionSnapshot:
        """Return the current read-only session state."""
        return self._snapshot

    @property
    def status(self) -> SessionStatus:
        return self._snapshot.status

    @property
    def session(self) -> Session | None:
        return self._snapshot.session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def refresh(self) -> SessionSnapshot:
        """Re-resolve the session and notify listeners if the state changed."""
        try:
            session = self._loader()
        except Exception as e:
            logger.warning("Session resolution failed, treating as signed out: %s", e)
            session = None

        if session is not None:
            snapshot = SessionSnapshot(status=SessionStatus.AUTHENTICATED, session=session)
        else:
            snapshot = SessionSnapshot(status=SessionStatus.UNAUTHENTICATED)

        changed = snapshot != self._snapshot
        self._snapshot = snapshot

        if changed:
            for listener in list(self._listeners):
                listener(snapshot)

        return snapshot
