"""Admin service layer — users, projects, PM profiles, kanban tasks, config.

Transaction policy: functions add/delete on the session but never commit.
The caller (route handler) commits via ``db_commit_or_error()`` so unique
violations (username, projectCode) surface as HTTP 409.

Write semantics:
  - create/upsert: a record whose id already exists is overwritten, not rejected
  - update:        full-record replace of an existing id (404 when missing)
  - delete:        idempotent, succeeds whether or not the id existed
"""

import logging
import math
import uuid

from director_os.core.exceptions import NotFoundError, ValidationError
from director_os.models import db
from director_os.models.people import PMProfile, User, USER_ROLES
from director_os.models.portfolio import BUSINESS_TYPES, PROJECT_STATUSES, Project
from director_os.models.system_config import GLOBAL_CONFIG_ID, SystemConfig
from director_os.models.transformation import TASK_STAGES, TransformationTask
from director_os.seed_data import SEED_CONFIG, seed_copy

logger = logging.getLogger(__name__)


# ── Validation helpers ───────────────────────────────────────────────────


def _new_id(prefix):
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def _required_str(data, field):
    value = str(data.get(field) or "").strip()
    if not value:
        raise ValidationError(f"{field} is required", details={field: "required"})
    return value


def _choice(data, field, choices, default):
    value = data.get(field) or default
    if value not in choices:
        raise ValidationError(
            f"{field} must be one of {', '.join(choices)}",
            details={field: f"invalid value {value!r}"},
        )
    return value


def _ratio(data, field, default=0.0):
    value = data.get(field, default)
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", details={field: "not a number"})
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", details={field: "not finite"})
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{field} must be between 0 and 1", details={field: "out of range"})
    return value


def _str_map(data, field):
    value = data.get(field) or {}
    if not isinstance(value, dict):
        raise ValidationError(f"{field} must be an object", details={field: "not an object"})
    return {str(k): str(v) for k, v in value.items()}


def _str_list(data, field):
    value = data.get(field) or []
    if not isinstance(value, list):
        raise ValidationError(f"{field} must be a list", details={field: "not a list"})
    return [str(v) for v in value]


# ── Users ────────────────────────────────────────────────────────────────


def list_users():
    return User.query.order_by(User.id).all()


def get_user_by_username(username):
    if not username:
        return None
    return User.query.filter_by(username=username).first()


def upsert_user(data):
    """Create a user, or overwrite the one with the same id."""
    user_id = str(data.get("id") or _new_id("u"))
    user = db.session.get(User, user_id) or User(id=user_id)
    user.username = _required_str(data, "username")
    user.name = str(data.get("name") or "")
    user.role = _choice(data, "role", USER_ROLES, "PM")
    user.avatar_url = data.get("avatarUrl")
    user.assigned_project_codes = _str_list(data, "assignedProjectCodes")
    db.session.add(user)
    return user


def delete_user(user_id):
    user = db.session.get(User, user_id)
    if user:
        db.session.delete(user)
    return True


# ── Projects ─────────────────────────────────────────────────────────────


def _apply_project(project, data):
    project.project_code = _required_str(data, "projectCode")
    project.project_name = data.get("projectName")
    project.business_type = _choice(data, "businessType", BUSINESS_TYPES, "BPO")
    project.pm_id = data.get("pmId")
    project.profit_target_rate = _ratio(data, "profitTargetRate")
    project.sla_target_rate = _ratio(data, "slaTargetRate")
    project.status = _choice(data, "status", PROJECT_STATUSES, "Running")
    project.custom_fields = _str_map(data, "customFields")
    return project


def list_projects():
    return Project.query.order_by(Project.id).all()


def upsert_project(data):
    """Create a project, or overwrite the one with the same id."""
    project_id = str(data.get("id") or _new_id("proj"))
    project = db.session.get(Project, project_id) or Project(id=project_id)
    _apply_project(project, data)
    db.session.add(project)
    return project


def update_project(project_id, data):
    """Replace every field of an existing project."""
    project = db.session.get(Project, project_id)
    if project is None:
        raise NotFoundError(resource="Project", resource_id=project_id)
    return _apply_project(project, data)


def delete_project(project_id):
    project = db.session.get(Project, project_id)
    if project:
        db.session.delete(project)
    return True


# ── PM profiles ──────────────────────────────────────────────────────────


def _apply_pm(pm, data):
    pm.name = _required_str(data, "name")
    pm.level = str(data.get("level") or "")
    # tags are an unordered set; keep first occurrence order for display
    pm.tags = list(dict.fromkeys(_str_list(data, "tags")))
    pm.avatar_url = data.get("avatarUrl")
    pm.custom_fields = _str_map(data, "customFields")
    return pm


def list_pms():
    return PMProfile.query.order_by(PMProfile.id).all()


def upsert_pm(data):
    pm_id = str(data.get("id") or _new_id("pm"))
    pm = db.session.get(PMProfile, pm_id) or PMProfile(id=pm_id)
    _apply_pm(pm, data)
    db.session.add(pm)
    return pm


def update_pm(pm_id, data):
    pm = db.session.get(PMProfile, pm_id)
    if pm is None:
        raise NotFoundError(resource="PMProfile", resource_id=pm_id)
    return _apply_pm(pm, data)


def delete_pm(pm_id):
    pm = db.session.get(PMProfile, pm_id)
    if pm:
        db.session.delete(pm)
    return True


# ── Transformation tasks ─────────────────────────────────────────────────


def _apply_task(task, data):
    task.task_name = _required_str(data, "taskName")
    task.stage = _choice(data, "stage", TASK_STAGES, "Backlog")
    try:
        progress = int(data.get("progressPercent", 0))
    except (TypeError, ValueError):
        raise ValidationError("progressPercent must be an integer",
                              details={"progressPercent": "not an integer"})
    if not 0 <= progress <= 100:
        raise ValidationError("progressPercent must be between 0 and 100",
                              details={"progressPercent": "out of range"})
    task.progress_percent = progress
    task.blocker_notes = data.get("blockerNotes") if task.stage == "Blocked" else None
    return task


def list_tasks():
    return TransformationTask.query.order_by(TransformationTask.id).all()


def upsert_task(data):
    task_id = str(data.get("id") or _new_id("task"))
    task = db.session.get(TransformationTask, task_id) or TransformationTask(id=task_id)
    _apply_task(task, data)
    db.session.add(task)
    return task


def update_task(task_id, data):
    task = db.session.get(TransformationTask, task_id)
    if task is None:
        raise NotFoundError(resource="TransformationTask", resource_id=task_id)
    return _apply_task(task, data)


def delete_task(task_id):
    task = db.session.get(TransformationTask, task_id)
    if task:
        db.session.delete(task)
    return True


# ── System config singleton ──────────────────────────────────────────────


def get_config():
    """Return the config dict, creating the singleton row from defaults if absent."""
    row = db.session.get(SystemConfig, GLOBAL_CONFIG_ID)
    if row is None:
        row = SystemConfig(id=GLOBAL_CONFIG_ID, data=seed_copy(SEED_CONFIG))
        db.session.add(row)
    return row.to_dict()


def replace_config(data):
    """Replace the whole config document after validating its shape."""
    thresholds = data.get("riskThresholds")
    resources = data.get("resources")
    if not isinstance(thresholds, dict):
        raise ValidationError("riskThresholds is required", details={"riskThresholds": "required"})
    if not isinstance(resources, dict):
        raise ValidationError("resources is required", details={"resources": "required"})

    document = {
        "riskThresholds": {
            "revenueGap": _ratio(thresholds, "revenueGap"),
            "turnoverRate": _ratio(thresholds, "turnoverRate"),
        },
        "resources": {
            "templateUrl": str(resources.get("templateUrl") or ""),
            "guideUrl": str(resources.get("guideUrl") or ""),
        },
        "maintenanceMode": bool(data.get("maintenanceMode", False)),
    }

    row = db.session.get(SystemConfig, GLOBAL_CONFIG_ID)
    if row is None:
        row = SystemConfig(id=GLOBAL_CONFIG_ID)
        db.session.add(row)
    row.data = document
    logger.info("System config replaced: thresholds=%s maintenance=%s",
                document["riskThresholds"], document["maintenanceMode"])
    return document
