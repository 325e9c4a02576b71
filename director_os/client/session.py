"""
Client session — who is signed in, with which token, and whether the login
was served offline.

The session is persisted as ``{user, token, isOfflineMode}`` under
``user_session_token`` so a restarted client resumes without logging in again.
"""

from __future__ import annotations

import json
import logging

from director_os.client.exceptions import LocalStoreError
from director_os.client.facade import ResilientDataAccess
from director_os.client.gateway import RemoteGateway
from director_os.client.local_store import LocalStore
from director_os.client.storage import KeyValueStorage

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "user_session_token"


class SessionManager:
    """One signed-in user per client; all logins go through the facade."""

    def __init__(
        self,
        facade: ResilientDataAccess,
        gateway: RemoteGateway,
        storage: KeyValueStorage,
        store: LocalStore,
    ) -> None:
        self.facade = facade
        self.gateway = gateway
        self.storage = storage
        self.store = store
        self._user: dict | None = None
        self._token: str | None = None
        self._offline = False
        # resume a persisted session so the first request carries its credentials
        self._hydrate()

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_offline_mode(self) -> bool:
        return self._offline

    def login(self, username: str) -> dict | None:
        """Sign in ``username``. Returns the user, or None when unknown."""
        payload = self.facade.login(username)
        if payload is None:
            logger.info("Login failed for username=%r", username)
            return None

        self._user = payload["user"]
        self._token = payload.get("token")
        self._offline = self.facade.is_offline_mode
        self.storage.set(SESSION_TOKEN_KEY, json.dumps({
            "user": self._user,
            "token": self._token,
            "isOfflineMode": self._offline,
        }, ensure_ascii=False))
        self.gateway.set_credentials(self._token, self._user)
        logger.info(
            "Signed in", extra={"username": self._user.get("username"), "offline": self._offline},
        )
        return self._user

    def logout(self) -> None:
        """Forget the session everywhere on this client. The server is not told."""
        self._user = None
        self._token = None
        self._offline = False
        self.gateway.set_credentials(None, None)
        self.storage.remove(SESSION_TOKEN_KEY)
        self.store.logout()

    def get_current_user(self) -> dict | None:
        if self._user is not None:
            return self._user
        if self._hydrate():
            return self._user
        return self.store.get_current_user()

    def _hydrate(self) -> bool:
        raw = self.storage.get(SESSION_TOKEN_KEY)
        if raw is None:
            return False
        try:
            saved = json.loads(raw)
        except ValueError as exc:
            raise LocalStoreError(SESSION_TOKEN_KEY, str(exc)) from exc
        self._user = saved.get("user")
        self._token = saved.get("token")
        self._offline = bool(saved.get("isOfflineMode", False))
        self.gateway.set_credentials(self._token, self._user)
        return self._user is not None
