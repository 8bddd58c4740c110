"""Mock authentication and the top-level application controller.

There is no credential store. Any request with every field filled in is
accepted.
"""

import logging
from typing import Callable, List

from core.analysis_session import AnalysisSession

logger = logging.getLogger(__name__)


class AuthGate:
    """Accepts any login or sign-up whose fields are all non-empty."""

    def attempt_login(self, email: str, password: str) -> bool:
        return bool(email) and bool(password)

    def attempt_signup(self, name: str, email: str, password: str) -> bool:
        return bool(name) and bool(email) and bool(password)


class AppController:
    """Holds the logged-in flag and the analysis session shown after login."""

    def __init__(self, session: AnalysisSession, auth: AuthGate = None):
        self._session = session
        self._auth = auth or AuthGate()
        self._authenticated = False
        self._listeners: List[Callable[[bool], None]] = []

    @property
    def session(self) -> AnalysisSession:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def add_listener(self, listener: Callable[[bool], None]):
        """Register a callback receiving the new authenticated flag."""
        self._listeners.append(listener)

    def login(self, email: str, password: str) -> bool:
        if not self._auth.attempt_login(email, password):
            logger.info("Login rejected: missing fields")
            return False
        logger.info("User logged in")
        self._set_authenticated(True)
        return True

    def signup(self, name: str, email: str, password: str) -> bool:
        if not self._auth.attempt_signup(name, email, password):
            logger.info("Sign-up rejected: missing fields")
            return False
        logger.info("User signed up")
        self._set_authenticated(True)
        return True

    def logout(self):
        """Drop authentication and any in-progress analysis."""
        self._session.reset()
        logger.info("User logged out")
        self._set_authenticated(False)

    def _set_authenticated(self, value: bool):
        self._authenticated = value
        for listener in list(self._listeners):
            listener(value)
