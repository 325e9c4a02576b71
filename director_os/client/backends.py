"""
Data backends behind the resilient data-access facade.

Both backends expose the same operations and return the same shapes, so the
facade can replay a failed remote call on the local store unchanged:

    login           -> {"user", "token"} or None
    get_dashboard   -> {"projects", "metrics", "pms", "tasks", "config"}
    upload_metrics  -> {"success", "count"}
    get_users       -> [User, ...]
    add_* / update_* -> the record
    delete_*        -> {"success": True}
    update_config   -> SystemConfig
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from director_os.client.exceptions import RemoteUnavailableError
from director_os.client.gateway import GatewayResult, RemoteGateway
from director_os.client.local_store import LocalStore
from director_os.services.analytics import scope_for_user

logger = logging.getLogger(__name__)

OFFLINE_TOKEN = "offline-token"


class DataBackend(ABC):
    """The operations the dashboard needs from a data source."""

    name = "backend"

    @abstractmethod
    def login(self, username: str) -> dict | None: ...

    @abstractmethod
    def get_dashboard(self) -> dict: ...

    @abstractmethod
    def upload_metrics(self, metrics: list[dict]) -> dict: ...

    @abstractmethod
    def get_users(self) -> list[dict]: ...

    @abstractmethod
    def add_user(self, user: dict) -> dict: ...

    @abstractmethod
    def delete_user(self, user_id: str) -> dict: ...

    @abstractmethod
    def add_project(self, project: dict) -> dict: ...

    @abstractmethod
    def update_project(self, project: dict) -> dict: ...

    @abstractmethod
    def delete_project(self, project_id: str) -> dict: ...

    @abstractmethod
    def add_pm(self, pm: dict) -> dict: ...

    @abstractmethod
    def update_pm(self, pm: dict) -> dict: ...

    @abstractmethod
    def delete_pm(self, pm_id: str) -> dict: ...

    @abstractmethod
    def add_task(self, task: dict) -> dict: ...

    @abstractmethod
    def update_task(self, task: dict) -> dict: ...

    @abstractmethod
    def delete_task(self, task_id: str) -> dict: ...

    @abstractmethod
    def update_config(self, config: dict) -> dict: ...


class RemoteBackend(DataBackend):
    """Calls the REST API; any unsuccessful GatewayResult raises RemoteUnavailableError."""

    name = "remote"

    def __init__(self, gateway: RemoteGateway) -> None:
        self.gateway = gateway

    @staticmethod
    def _unwrap(operation: str, result: GatewayResult):
        if not result.ok:
            raise RemoteUnavailableError(operation, result.status_code, result.error)
        return result.data

    def login(self, username):
        return self._unwrap("login", self.gateway.login(username))

    def get_dashboard(self):
        return self._unwrap("get_dashboard", self.gateway.get_dashboard())

    def upload_metrics(self, metrics):
        return self._unwrap("upload_metrics", self.gateway.upload_metrics(metrics))

    def get_users(self):
        return self._unwrap("get_users", self.gateway.get_users())

    def add_user(self, user):
        return self._unwrap("add_user", self.gateway.add_user(user))

    def delete_user(self, user_id):
        return self._unwrap("delete_user", self.gateway.delete_user(user_id))

    def add_project(self, project):
        return self._unwrap("add_project", self.gateway.add_project(project))

    def update_project(self, project):
        return self._unwrap("update_project", self.gateway.update_project(project))

    def delete_project(self, project_id):
        return self._unwrap("delete_project", self.gateway.delete_project(project_id))

    def add_pm(self, pm):
        return self._unwrap("add_pm", self.gateway.add_pm(pm))

    def update_pm(self, pm):
        return self._unwrap("update_pm", self.gateway.update_pm(pm))

    def delete_pm(self, pm_id):
        return self._unwrap("delete_pm", self.gateway.delete_pm(pm_id))

    def add_task(self, task):
        return self._unwrap("add_task", self.gateway.add_task(task))

    def update_task(self, task):
        return self._unwrap("update_task", self.gateway.update_task(task))

    def delete_task(self, task_id):
        return self._unwrap("delete_task", self.gateway.delete_task(task_id))

    def update_config(self, config):
        return self._unwrap("update_config", self.gateway.update_config(config))


class LocalBackend(DataBackend):
    """Serves every operation from the persisted local store.

    Args:
        store:         the LocalStore to read and write.
        user_provider: returns the signed-in user (or None); used to scope
                       the dashboard the same way the server does.
    """

    name = "local"

    def __init__(self, store: LocalStore, user_provider: Callable[[], dict | None] | None = None) -> None:
        self.store = store
        self.user_provider = user_provider or (lambda: None)

    def login(self, username):
        user = self.store.login(username)
        return {"user": user, "token": OFFLINE_TOKEN} if user else None

    def get_dashboard(self):
        bundle = {
            "projects": self.store.get_projects(),
            "metrics": self.store.get_metrics(),
            "pms": self.store.get_pms(),
            "tasks": self.store.get_tasks(),
            "config": self.store.get_config(),
        }
        return scope_for_user(bundle, self.user_provider())

    def upload_metrics(self, metrics):
        self.store.save_metrics(metrics)
        return {"success": True, "count": len(metrics)}

    def get_users(self):
        return self.store.get_users()

    def add_user(self, user):
        return self.store.add_user(user)

    def delete_user(self, user_id):
        return {"success": self.store.delete_user(user_id)}

    def add_project(self, project):
        return self.store.add_project(project)

    def update_project(self, project):
        return self.store.update_project(project)

    def delete_project(self, project_id):
        return {"success": self.store.delete_project(project_id)}

    def add_pm(self, pm):
        return self.store.add_pm(pm)

    def update_pm(self, pm):
        return self.store.update_pm(pm)

    def delete_pm(self, pm_id):
        return {"success": self.store.delete_pm(pm_id)}

    def add_task(self, task):
        return self.store.add_task(task)

    def update_task(self, task):
        return self.store.update_task(task)

    def delete_task(self, task_id):
        return {"success": self.store.delete_task(task_id)}

    def update_config(self, config):
        return self.store.save_config(config)
