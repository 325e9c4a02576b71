"""
Director OS
Tests — persisted local store and its storage backends.
"""

import json

import pytest

from director_os.client.exceptions import LocalStoreError
from director_os.client.local_store import (
    LOCAL_SESSION_KEY, METRICS_KEY, PROJECTS_KEY, LocalStore,
)
from director_os.client.storage import JsonFileStorage, MemoryStorage
from director_os.seed_data import SEED_METRICS, SEED_PMS, SEED_PROJECTS


def _metric(metric_id, code, week="2023-10-30"):
    return {
        "id": metric_id, "projectCode": code, "reportWeek": week,
        "revenueActual": 1000, "revenueTarget": 1000, "headcount": 10,
        "slaAchieved": 0.99, "turnoverRate": 0.01, "riskFlag": False, "riskDetails": "",
    }


class TestInitAndGetters:
    def test_unwritten_collections_read_as_seed(self, memory_storage):
        store = LocalStore(memory_storage)
        assert [p["id"] for p in store.get_projects()] == [p["id"] for p in SEED_PROJECTS]
        assert memory_storage.get(PROJECTS_KEY) is None

    def test_getters_return_copies_of_seed(self, memory_storage):
        store = LocalStore(memory_storage)
        store.get_projects()[0]["projectName"] = "mutated"
        assert store.get_projects()[0]["projectName"] == SEED_PROJECTS[0]["projectName"]

    def test_init_seeds_once(self, memory_storage):
        store = LocalStore(memory_storage)
        assert store.init() is True
        store.delete_project("proj-1")
        assert store.init() is False
        assert "proj-1" not in [p["id"] for p in store.get_projects()]

    def test_corrupt_collection_raises(self, memory_storage):
        memory_storage.set(METRICS_KEY, "{not json")
        store = LocalStore(memory_storage)
        with pytest.raises(LocalStoreError):
            store.get_metrics()


class TestSaveMetrics:
    def test_one_record_per_uploaded_code(self, local_store):
        batch = [_metric("new-1", "Project_Alpha"), _metric("new-2", "Project_Tango")]
        local_store.save_metrics(batch)
        metrics = local_store.get_metrics()
        for code, new_id in (("Project_Alpha", "new-1"), ("Project_Tango", "new-2")):
            rows = [m for m in metrics if m["projectCode"] == code]
            assert [m["id"] for m in rows] == [new_id]

    def test_other_codes_untouched(self, local_store):
        local_store.save_metrics([_metric("new-1", "Project_Alpha")])
        ids = {m["id"] for m in local_store.get_metrics()}
        assert {"met-2", "met-3", "met-4"} <= ids
        assert "met-1" not in ids

    def test_replacement_is_per_code_not_per_week(self, local_store):
        local_store.save_metrics([_metric("w1", "Project_Alpha", "2023-10-30")])
        local_store.save_metrics([_metric("w2", "Project_Alpha", "2023-11-06")])
        alpha = [m for m in local_store.get_metrics() if m["projectCode"] == "Project_Alpha"]
        assert [m["id"] for m in alpha] == ["w2"]


class TestCollections:
    def test_add_twice_same_id_is_add_once(self, local_store):
        pm = {"id": "pm-9", "name": "Dana", "level": "PM", "tags": [], "customFields": {}}
        local_store.add_pm(pm)
        size = len(local_store.get_pms())
        local_store.add_pm(dict(pm, name="Dana K."))
        pms = local_store.get_pms()
        assert len(pms) == size
        assert next(p for p in pms if p["id"] == "pm-9")["name"] == "Dana K."

    def test_pm_round_trip(self, local_store):
        pm = {"id": "pm-9", "name": "Dana", "level": "PM", "tags": ["ops"], "customFields": {}}
        local_store.add_pm(pm)
        assert pm in local_store.get_pms()

        local_store.update_pm(dict(pm, level="Senior PM"))
        updated = [p for p in local_store.get_pms() if p["id"] == "pm-9"]
        assert len(updated) == 1 and updated[0]["level"] == "Senior PM"

        assert local_store.delete_pm("pm-9") is True
        assert "pm-9" not in [p["id"] for p in local_store.get_pms()]

    def test_update_missing_id_is_noop(self, local_store):
        before = local_store.get_pms()
        result = local_store.update_pm({"id": "pm-404", "name": "Ghost"})
        assert result["id"] == "pm-404"
        assert local_store.get_pms() == before

    def test_delete_missing_id_still_true(self, local_store):
        assert local_store.delete_project("proj-404") is True
        assert len(local_store.get_projects()) == len(SEED_PROJECTS)

    def test_task_and_user_writes(self, local_store):
        local_store.add_task({"id": "task-9", "taskName": "OCR", "stage": "Backlog", "progressPercent": 0})
        local_store.update_task({"id": "task-9", "taskName": "OCR", "stage": "Live", "progressPercent": 100})
        assert next(t for t in local_store.get_tasks() if t["id"] == "task-9")["stage"] == "Live"

        local_store.add_user({"id": "u9", "username": "ops", "name": "Ops", "role": "PM",
                              "assignedProjectCodes": []})
        assert "ops" in [u["username"] for u in local_store.get_users()]
        local_store.delete_user("u9")
        assert "ops" not in [u["username"] for u in local_store.get_users()]

    def test_save_config_replaces_singleton(self, local_store):
        config = local_store.get_config()
        config["riskThresholds"]["revenueGap"] = 0.2
        local_store.save_config(config)
        assert local_store.get_config()["riskThresholds"]["revenueGap"] == 0.2


class TestLocalLogin:
    def test_login_known_user_sets_marker(self, local_store, memory_storage):
        user = local_store.login("director")
        assert user["id"] == "u1"
        assert json.loads(memory_storage.get(LOCAL_SESSION_KEY))["username"] == "director"
        assert local_store.get_current_user()["id"] == "u1"

    def test_login_unknown_user(self, local_store, memory_storage):
        assert local_store.login("nobody") is None
        assert memory_storage.get(LOCAL_SESSION_KEY) is None

    def test_logout_clears_marker(self, local_store):
        local_store.login("pm")
        local_store.logout()
        assert local_store.get_current_user() is None


class TestJsonFileStorage:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        LocalStore(JsonFileStorage(str(path))).init()
        reopened = LocalStore(JsonFileStorage(str(path)))
        assert len(reopened.get_metrics()) == len(SEED_METRICS)
        assert len(reopened.get_pms()) == len(SEED_PMS)

    def test_remove_key(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "store.json"))
        storage.set("a", "1")
        storage.remove("a")
        assert storage.get("a") is None

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("not json at all", encoding="utf-8")
        with pytest.raises(LocalStoreError):
            JsonFileStorage(str(path)).get(PROJECTS_KEY)

    def test_memory_storage_initial(self):
        storage = MemoryStorage({"k": "v"})
        assert storage.get("k") == "v"
        assert storage.keys() == ["k"]
