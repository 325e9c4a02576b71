"""
Resilient data access — remote first, local store on failure.

Every operation first runs on the primary (remote) backend. When that raises
RemoteUnavailableError the facade flips ``is_offline_mode``, waits the
fallback delay and replays the same operation on the fallback (local)
backend. Remote failures never reach the caller; anything the fallback
raises (LocalStoreError included) does.

The offline flag describes the most recent call only: the next successful
remote call clears it.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from director_os.client.backends import DataBackend
from director_os.client.exceptions import RemoteUnavailableError
from director_os.config import DEFAULT_FALLBACK_DELAY

logger = logging.getLogger(__name__)


class ResilientDataAccess:
    """Facade over a primary and a fallback DataBackend."""

    def __init__(
        self,
        primary: DataBackend,
        fallback: DataBackend,
        fallback_delay: float = DEFAULT_FALLBACK_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.fallback_delay = fallback_delay
        self._sleep = sleep
        self.is_offline_mode = False

    def _call(self, operation: str, *args):
        try:
            result = getattr(self.primary, operation)(*args)
        except RemoteUnavailableError as exc:
            if not self.is_offline_mode:
                logger.warning(
                    "Remote unavailable, switching to local store: %s", exc,
                    extra={"operation": operation, "offline": True},
                )
            self.is_offline_mode = True
            if self.fallback_delay > 0:
                self._sleep(self.fallback_delay)
            return getattr(self.fallback, operation)(*args)

        if self.is_offline_mode:
            logger.info("Remote reachable again", extra={"operation": operation, "offline": False})
        self.is_offline_mode = False
        return result

    # ── Auth ─────────────────────────────────────────────────────────────────

    def login(self, username: str) -> dict | None:
        """Return ``{user, token}`` for a known username, else None."""
        payload = self._call("login", username)
        if not payload or not payload.get("user"):
            return None
        return payload

    # ── Reads ────────────────────────────────────────────────────────────────

    def get_dashboard(self) -> dict:
        return self._call("get_dashboard")

    def get_users(self) -> list[dict]:
        return self._call("get_users")

    # ── Writes ───────────────────────────────────────────────────────────────

    def upload_metrics(self, metrics: list[dict]) -> bool:
        result = self._call("upload_metrics", metrics)
        return bool(result and result.get("success"))

    def add_user(self, user: dict) -> dict:
        return self._call("add_user", user)

    def delete_user(self, user_id: str) -> bool:
        return bool(self._call("delete_user", user_id).get("success"))

    def add_project(self, project: dict) -> dict:
        return self._call("add_project", project)

    def update_project(self, project: dict) -> dict:
        return self._call("update_project", project)

    def delete_project(self, project_id: str) -> bool:
        return bool(self._call("delete_project", project_id).get("success"))

    def add_pm(self, pm: dict) -> dict:
        return self._call("add_pm", pm)

    def update_pm(self, pm: dict) -> dict:
        return self._call("update_pm", pm)

    def delete_pm(self, pm_id: str) -> bool:
        return bool(self._call("delete_pm", pm_id).get("success"))

    def add_task(self, task: dict) -> dict:
        return self._call("add_task", task)

    def update_task(self, task: dict) -> dict:
        return self._call("update_task", task)

    def delete_task(self, task_id: str) -> bool:
        return bool(self._call("delete_task", task_id).get("success"))

    def update_config(self, config: dict) -> dict:
        return self._call("update_config", config)
