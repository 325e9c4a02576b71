"""
Director OS
Tests — resilient data access facade.

Covers:
    - unreachable remote: every operation completes from the local store,
      offline flag set, fallback delay honoured
    - healthy remote: results pass through, offline flag cleared, local
      store untouched
    - errors raised by the fallback propagate
"""

import copy
from unittest.mock import MagicMock

import pytest

from director_os.client.backends import DataBackend, LocalBackend, RemoteBackend
from director_os.client.exceptions import LocalStoreError, RemoteUnavailableError
from director_os.client.facade import ResilientDataAccess
from director_os.client.gateway import RemoteGateway
from director_os.client.local_store import METRICS_KEY

PM = {"id": "pm-9", "name": "Dana", "level": "PM", "tags": [], "customFields": {}}
PROJECT = {
    "id": "proj-9", "projectName": "Secret Client", "projectCode": "Project_Nova",
    "businessType": "BPO", "pmId": "pm-9", "profitTargetRate": 0.1,
    "slaTargetRate": 0.9, "status": "Running", "customFields": {},
}
TASK = {"id": "task-9", "taskName": "OCR", "stage": "Backlog", "progressPercent": 0}
USER = {"id": "u9", "username": "ops", "name": "Ops", "role": "PM", "assignedProjectCodes": []}
METRIC = {
    "id": "m-9", "projectCode": "Project_Alpha", "reportWeek": "2023-10-30",
    "revenueActual": 1, "revenueTarget": 1, "headcount": 1,
    "slaAchieved": 1, "turnoverRate": 0, "riskFlag": False, "riskDetails": "",
}


class EchoBackend(DataBackend):
    """Healthy remote double: answers every call with server-shaped data."""

    name = "echo"

    def login(self, username):
        return {"user": dict(USER, username=username), "token": "jwt"}

    def get_dashboard(self):
        return {"projects": [], "metrics": [], "pms": [], "tasks": [], "config": {}}

    def upload_metrics(self, metrics):
        return {"success": True, "count": len(metrics)}

    def get_users(self):
        return [USER]

    def add_user(self, user):
        return user

    def delete_user(self, user_id):
        return {"success": True}

    def add_project(self, project):
        return project

    def update_project(self, project):
        return project

    def delete_project(self, project_id):
        return {"success": True}

    def add_pm(self, pm):
        return pm

    def update_pm(self, pm):
        return pm

    def delete_pm(self, pm_id):
        return {"success": True}

    def add_task(self, task):
        return task

    def update_task(self, task):
        return task

    def delete_task(self, task_id):
        return {"success": True}

    def update_config(self, config):
        return config


def _all_operations(facade):
    """Run every facade operation once, returning the results by name."""
    return {
        "login": facade.login("director"),
        "get_dashboard": facade.get_dashboard(),
        "upload_metrics": facade.upload_metrics([METRIC]),
        "get_users": facade.get_users(),
        "add_user": facade.add_user(USER),
        "delete_user": facade.delete_user("u9"),
        "add_project": facade.add_project(PROJECT),
        "update_project": facade.update_project(dict(PROJECT, status="Closed")),
        "delete_project": facade.delete_project("proj-9"),
        "add_pm": facade.add_pm(PM),
        "update_pm": facade.update_pm(dict(PM, level="Senior")),
        "delete_pm": facade.delete_pm("pm-9"),
        "add_task": facade.add_task(TASK),
        "update_task": facade.update_task(dict(TASK, stage="Live")),
        "delete_task": facade.delete_task("task-9"),
        "update_config": facade.update_config({"riskThresholds": {"revenueGap": 0.1, "turnoverRate": 0.1},
                                               "resources": {}, "maintenanceMode": False}),
    }


@pytest.fixture()
def sleeps():
    return []


@pytest.fixture()
def offline_facade(dead_session, local_store, sleeps):
    remote = RemoteBackend(RemoteGateway("http://unreachable.test/api", session=dead_session))
    return ResilientDataAccess(remote, LocalBackend(local_store), fallback_delay=0.3, sleep=sleeps.append)


class TestUnreachableRemote:
    def test_every_operation_completes_offline(self, offline_facade, dead_session):
        results = _all_operations(offline_facade)
        assert offline_facade.is_offline_mode is True
        assert len(dead_session.calls) == len(results)

        assert results["login"]["token"] == "offline-token"
        assert results["login"]["user"]["id"] == "u1"
        assert set(results["get_dashboard"]) == {"projects", "metrics", "pms", "tasks", "config"}
        assert results["upload_metrics"] is True
        for name in ("delete_user", "delete_project", "delete_pm", "delete_task"):
            assert results[name] is True
        assert results["add_pm"] == PM
        assert results["update_config"]["riskThresholds"]["revenueGap"] == 0.1

    def test_writes_land_in_local_store(self, offline_facade, local_store):
        offline_facade.add_pm(PM)
        assert PM in local_store.get_pms()
        offline_facade.upload_metrics([METRIC])
        alpha = [m for m in local_store.get_metrics() if m["projectCode"] == "Project_Alpha"]
        assert [m["id"] for m in alpha] == ["m-9"]

    def test_fallback_delay_applied_per_call(self, offline_facade, sleeps):
        offline_facade.get_users()
        offline_facade.get_users()
        assert sleeps == [0.3, 0.3]

    def test_unknown_user_login_returns_none(self, offline_facade):
        assert offline_facade.login("nobody") is None
        assert offline_facade.is_offline_mode is True

    def test_local_dashboard_scoped_for_pm(self, dead_session, local_store):
        pm_user = next(u for u in local_store.get_users() if u["username"] == "pm")
        remote = RemoteBackend(RemoteGateway("http://unreachable.test/api", session=dead_session))
        facade = ResilientDataAccess(
            remote, LocalBackend(local_store, user_provider=lambda: pm_user), sleep=lambda s: None,
        )
        codes = {p["projectCode"] for p in facade.get_dashboard()["projects"]}
        assert codes == {"Project_Alpha", "Project_Sierra"}


class TestHealthyRemote:
    def test_results_pass_through_and_local_untouched(self, local_store, memory_storage):
        snapshot = copy.deepcopy(memory_storage._data)
        fallback = MagicMock(spec=LocalBackend)
        facade = ResilientDataAccess(EchoBackend(), fallback, sleep=lambda s: pytest.fail("slept"))

        results = _all_operations(facade)

        assert facade.is_offline_mode is False
        assert results["login"]["token"] == "jwt"
        assert results["upload_metrics"] is True
        assert results["delete_pm"] is True
        assert fallback.method_calls == []
        assert memory_storage._data == snapshot

    def test_offline_flag_recovers(self, local_store):
        primary = MagicMock(spec=DataBackend)
        primary.get_users.side_effect = [RemoteUnavailableError("get_users"), [USER]]
        facade = ResilientDataAccess(primary, LocalBackend(local_store), sleep=lambda s: None)

        facade.get_users()
        assert facade.is_offline_mode is True
        assert facade.get_users() == [USER]
        assert facade.is_offline_mode is False


class TestFallbackErrors:
    def test_local_store_error_propagates(self, offline_facade, memory_storage):
        memory_storage.set(METRICS_KEY, "{broken")
        with pytest.raises(LocalStoreError):
            offline_facade.get_dashboard()
        assert offline_facade.is_offline_mode is True

    def test_remote_errors_never_escape(self, offline_facade):
        # would raise RemoteUnavailableError if the facade leaked it
        assert isinstance(offline_facade.get_users(), list)

    def test_non_remote_primary_errors_propagate(self, local_store):
        primary = MagicMock(spec=DataBackend)
        primary.get_users.side_effect = KeyError("bug")
        facade = ResilientDataAccess(primary, LocalBackend(local_store), sleep=lambda s: None)
        with pytest.raises(KeyError):
            facade.get_users()
