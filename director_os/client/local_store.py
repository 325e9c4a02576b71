"""
Persisted local store — the offline copy of every dashboard collection.

Each collection is one JSON array (or object, for config) under its own
storage key. Collections that were never written read as a fresh copy of the
demo dataset, so a first offline session already has something to show.

Every mutation reads the whole collection, changes it and writes it back.
There is no locking: two writers race and the last one wins.
"""

from __future__ import annotations

import json
import logging

from director_os.client.exceptions import LocalStoreError
from director_os.client.storage import KeyValueStorage
from director_os.seed_data import (
    SEED_CONFIG, SEED_METRICS, SEED_PMS, SEED_PROJECTS, SEED_TASKS, SEED_USERS, seed_copy,
)

logger = logging.getLogger(__name__)

# ── Storage keys ─────────────────────────────────────────────────────────────

PROJECTS_KEY = "DIRECTOR_OS_PROJECTS"
METRICS_KEY = "DIRECTOR_OS_METRICS"
PMS_KEY = "DIRECTOR_OS_PMS"
TASKS_KEY = "DIRECTOR_OS_TASKS"
USERS_KEY = "DIRECTOR_OS_USERS"
CONFIG_KEY = "DIRECTOR_OS_CONFIG"
LOCAL_SESSION_KEY = "DIRECTOR_OS_USER_SESSION"

_SEEDS = {
    PROJECTS_KEY: SEED_PROJECTS,
    METRICS_KEY: SEED_METRICS,
    PMS_KEY: SEED_PMS,
    TASKS_KEY: SEED_TASKS,
    USERS_KEY: SEED_USERS,
    CONFIG_KEY: SEED_CONFIG,
}


def _upsert_by_id(items: list[dict], record: dict) -> list[dict]:
    """Replace the item with ``record['id']`` in place, or append it."""
    for index, item in enumerate(items):
        if item.get("id") == record.get("id"):
            items[index] = record
            return items
    items.append(record)
    return items


class LocalStore:
    """Collections of the dashboard persisted in a ``KeyValueStorage``."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    # ── Raw access ───────────────────────────────────────────────────────────

    def _read(self, key: str):
        raw = self.storage.get(key)
        if raw is None:
            return seed_copy(_SEEDS[key])
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise LocalStoreError(key, str(exc)) from exc

    def _write(self, key: str, value) -> None:
        self.storage.set(key, json.dumps(value, ensure_ascii=False))

    def init(self) -> bool:
        """Seed every collection unless the store was initialised before.

        Returns True when seeding happened.
        """
        if self.storage.get(PROJECTS_KEY) is not None:
            return False
        for key, seed in _SEEDS.items():
            self._write(key, seed_copy(seed))
        logger.info("Local store seeded with demo data")
        return True

    # ── Getters ──────────────────────────────────────────────────────────────

    def get_projects(self) -> list[dict]:
        return self._read(PROJECTS_KEY)

    def get_metrics(self) -> list[dict]:
        return self._read(METRICS_KEY)

    def get_pms(self) -> list[dict]:
        return self._read(PMS_KEY)

    def get_tasks(self) -> list[dict]:
        return self._read(TASKS_KEY)

    def get_users(self) -> list[dict]:
        return self._read(USERS_KEY)

    def get_config(self) -> dict:
        return self._read(CONFIG_KEY)

    # ── Metrics & config ─────────────────────────────────────────────────────

    def save_metrics(self, batch: list[dict]) -> list[dict]:
        """Replace stored metrics of every project code in ``batch`` with the batch rows.

        The replacement is per project code, not per (code, week): uploading
        one week for a project drops that project's other weeks.
        """
        codes = {m["projectCode"] for m in batch}
        kept = [m for m in self.get_metrics() if m["projectCode"] not in codes]
        merged = kept + [dict(m) for m in batch]
        self._write(METRICS_KEY, merged)
        return merged

    def save_config(self, config: dict) -> dict:
        self._write(CONFIG_KEY, config)
        return config

    # ── Generic collection helpers ───────────────────────────────────────────

    def _add(self, key: str, record: dict) -> dict:
        self._write(key, _upsert_by_id(self._read(key), dict(record)))
        return record

    def _update(self, key: str, record: dict) -> dict:
        items = self._read(key)
        if any(item.get("id") == record.get("id") for item in items):
            items = [dict(record) if item.get("id") == record.get("id") else item for item in items]
            self._write(key, items)
        return record

    def _delete(self, key: str, record_id: str) -> bool:
        self._write(key, [item for item in self._read(key) if item.get("id") != record_id])
        return True

    # ── PM profiles ──────────────────────────────────────────────────────────

    def add_pm(self, pm: dict) -> dict:
        return self._add(PMS_KEY, pm)

    def update_pm(self, pm: dict) -> dict:
        return self._update(PMS_KEY, pm)

    def delete_pm(self, pm_id: str) -> bool:
        return self._delete(PMS_KEY, pm_id)

    # ── Users ────────────────────────────────────────────────────────────────

    def add_user(self, user: dict) -> dict:
        return self._add(USERS_KEY, user)

    def update_user(self, user: dict) -> dict:
        return self._update(USERS_KEY, user)

    def delete_user(self, user_id: str) -> bool:
        return self._delete(USERS_KEY, user_id)

    # ── Projects ─────────────────────────────────────────────────────────────

    def add_project(self, project: dict) -> dict:
        return self._add(PROJECTS_KEY, project)

    def update_project(self, project: dict) -> dict:
        return self._update(PROJECTS_KEY, project)

    def delete_project(self, project_id: str) -> bool:
        return self._delete(PROJECTS_KEY, project_id)

    # ── Transformation tasks ─────────────────────────────────────────────────

    def add_task(self, task: dict) -> dict:
        return self._add(TASKS_KEY, task)

    def update_task(self, task: dict) -> dict:
        return self._update(TASKS_KEY, task)

    def delete_task(self, task_id: str) -> bool:
        return self._delete(TASKS_KEY, task_id)

    # ── Local login marker ───────────────────────────────────────────────────

    def login(self, username: str) -> dict | None:
        """Find a user by username and remember it as the local session."""
        user = next((u for u in self.get_users() if u.get("username") == username), None)
        if user is None:
            return None
        self._write(LOCAL_SESSION_KEY, user)
        return user

    def logout(self) -> None:
        self.storage.remove(LOCAL_SESSION_KEY)

    def get_current_user(self) -> dict | None:
        raw = self.storage.get(LOCAL_SESSION_KEY)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise LocalStoreError(LOCAL_SESSION_KEY, str(exc)) from exc
