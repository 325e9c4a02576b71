"""
Director OS
Admin blueprint — master data CRUD for the director console.

Endpoints summary:
    USERS     /api/users              GET, POST (upsert by id)
              /api/users/<id>         DELETE

    PROJECTS  /api/projects           GET, POST (upsert by id)
              /api/projects/<id>      PUT, DELETE

    PMS       /api/pms                GET, POST (upsert by id)
              /api/pms/<id>           PUT, DELETE

    TASKS     /api/tasks              GET, POST (upsert by id)
              /api/tasks/<id>         PUT, DELETE

    CONFIG    /api/config             GET, PUT (replace singleton)

Deletes are idempotent and always answer {"success": true}.
"""

import logging

from flask import Blueprint, jsonify, request

from director_os.blueprints import register_domain_error_handlers
from director_os.services import admin_service
from director_os.utils.helpers import db_commit_or_error

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/api")
register_domain_error_handlers(admin_bp)


def _payload(record_id=None):
    data = request.get_json(silent=True) or {}
    if record_id is not None:
        # the path id is authoritative on PUT
        data["id"] = record_id
    return data


def _commit_and_return(record, status=200):
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(record.to_dict()), status


def _commit_deleted():
    err = db_commit_or_error()
    if err:
        return err
    return jsonify({"success": True}), 200


# ═══════════════════════════════════════════════════════════════════════════
#  USERS
# ═══════════════════════════════════════════════════════════════════════════

@admin_bp.route("/users", methods=["GET"])
def list_users():
    return jsonify([u.to_dict() for u in admin_service.list_users()]), 200


@admin_bp.route("/users", methods=["POST"])
def create_user():
    return _commit_and_return(admin_service.upsert_user(_payload()))


@admin_bp.route("/users/<user_id>", methods=["DELETE"])
def delete_user(user_id):
    admin_service.delete_user(user_id)
    return _commit_deleted()


# ═══════════════════════════════════════════════════════════════════════════
#  PROJECTS
# ═══════════════════════════════════════════════════════════════════════════

@admin_bp.route("/projects", methods=["GET"])
def list_projects():
    return jsonify([p.to_dict() for p in admin_service.list_projects()]), 200


@admin_bp.route("/projects", methods=["POST"])
def create_project():
    return _commit_and_return(admin_service.upsert_project(_payload()))


@admin_bp.route("/projects/<project_id>", methods=["PUT"])
def update_project(project_id):
    return _commit_and_return(admin_service.update_project(project_id, _payload(project_id)))


@admin_bp.route("/projects/<project_id>", methods=["DELETE"])
def delete_project(project_id):
    admin_service.delete_project(project_id)
    return _commit_deleted()


# ═══════════════════════════════════════════════════════════════════════════
#  PM PROFILES
# ═══════════════════════════════════════════════════════════════════════════

@admin_bp.route("/pms", methods=["GET"])
def list_pms():
    return jsonify([pm.to_dict() for pm in admin_service.list_pms()]), 200


@admin_bp.route("/pms", methods=["POST"])
def create_pm():
    return _commit_and_return(admin_service.upsert_pm(_payload()))


@admin_bp.route("/pms/<pm_id>", methods=["PUT"])
def update_pm(pm_id):
    return _commit_and_return(admin_service.update_pm(pm_id, _payload(pm_id)))


@admin_bp.route("/pms/<pm_id>", methods=["DELETE"])
def delete_pm(pm_id):
    admin_service.delete_pm(pm_id)
    return _commit_deleted()


# ═══════════════════════════════════════════════════════════════════════════
#  TRANSFORMATION TASKS
# ═══════════════════════════════════════════════════════════════════════════

@admin_bp.route("/tasks", methods=["GET"])
def list_tasks():
    return jsonify([t.to_dict() for t in admin_service.list_tasks()]), 200


@admin_bp.route("/tasks", methods=["POST"])
def create_task():
    return _commit_and_return(admin_service.upsert_task(_payload()))


@admin_bp.route("/tasks/<task_id>", methods=["PUT"])
def update_task(task_id):
    return _commit_and_return(admin_service.update_task(task_id, _payload(task_id)))


@admin_bp.route("/tasks/<task_id>", methods=["DELETE"])
def delete_task(task_id):
    admin_service.delete_task(task_id)
    return _commit_deleted()


# ═══════════════════════════════════════════════════════════════════════════
#  SYSTEM CONFIG
# ═══════════════════════════════════════════════════════════════════════════

@admin_bp.route("/config", methods=["GET"])
def get_config():
    config = admin_service.get_config()
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(config), 200


@admin_bp.route("/config", methods=["PUT"])
def update_config():
    config = admin_service.replace_config(_payload())
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(config), 200
