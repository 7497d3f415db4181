# src/auth/session.py
"""Session context handed to journal actions."""
import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

SessionCallback = Callable[["SessionContext | None"], None]


@dataclass(frozen=True)
class SessionContext:
    """An authenticated user as resolved by the auth provider."""

    user_id: str
    access_token: str = ""


class SessionChannel:
    """Publishes session changes from the auth provider to subscribers.

    The auth provider calls publish() on sign-in, token refresh and sign-out
    (with None). Journal components never read the channel; the presentation
    layer does and passes the current SessionContext into each action.
    """

    def __init__(self) -> None:
        self._current: SessionContext | None = None
        self._subscribers: list[SessionCallback] = []

    @property
    def current(self) -> SessionContext | None:
        return self._current

    def subscribe(self, callback: SessionCallback) -> Callable[[], None]:
        """Register a callback and return a function that unregisters it.

        The callback is invoked immediately with the current session.
        """
        self._subscribers.append(callback)
        callback(self._current)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, session: SessionContext | None) -> None:
        """Replace the current session and notify subscribers."""
        self._current = session
        logger.info("Session signed out" if session is None else f"Session active for {session.user_id}")
        for callback in list(self._subscribers):
            callback(session)
