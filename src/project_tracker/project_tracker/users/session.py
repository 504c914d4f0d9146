from __future__ import annotations

from typing import Optional

from ..core.enums import DashboardView, SessionState
from .service import AuthService, SessionUser


class ClientSession:
    """Client-held identity: ``anonymous`` or ``authenticated(user)``.

    Nothing is stored server-side; the API stays unauthenticated at the
    transport level and this object only gates which view is shown.
    """

    def __init__(self, auth: AuthService):
        self._auth = auth
        self._identity: Optional[SessionUser] = None

    @property
    def state(self) -> SessionState:
        return SessionState.AUTHENTICATED if self._identity else SessionState.ANONYMOUS

    @property
    def identity(self) -> Optional[SessionUser]:
        return self._identity

    @property
    def view(self) -> Optional[DashboardView]:
        return self._identity.view if self._identity else None

    def login(self, username: str, password: str) -> SessionUser:
        # A failed attempt raises and leaves the current state untouched.
        self._identity = self._auth.authenticate(username, password)
        return self._identity

    def logout(self) -> None:
        self._identity = None
