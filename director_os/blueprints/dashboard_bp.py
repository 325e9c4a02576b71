"""
Dashboard blueprint — bundled read and weekly metrics upload.

Endpoints:
    GET  /api/dashboard   — {projects, metrics, pms, tasks, config}
    POST /api/upload      — upsert {"metrics": [WeeklyMetric, ...]}

Scoping: the caller is identified by the bearer token issued at login, or by
the ``x-user-name`` / ``x-user-role`` hints. PM users only receive projects
and metrics for their assigned project codes.
"""

import logging

from flask import Blueprint, jsonify, request

from director_os.blueprints import register_domain_error_handlers
from director_os.services import dashboard_service
from director_os.services.token_service import username_from_request_headers
from director_os.utils.helpers import db_commit_or_error

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")
register_domain_error_handlers(dashboard_bp)


@dashboard_bp.route("/dashboard", methods=["GET"])
def get_dashboard():
    caller = dashboard_service.resolve_caller(
        username=username_from_request_headers(request.headers),
        role_hint=request.headers.get("x-user-role"),
    )
    return jsonify(dashboard_service.get_dashboard_bundle(caller)), 200


@dashboard_bp.route("/upload", methods=["POST"])
def upload():
    data = request.get_json(silent=True)
    # accepts {"metrics": [...]} or a bare list
    if isinstance(data, dict):
        data = data.get("metrics")
    count = dashboard_service.upload_metrics(data)
    err = db_commit_or_error()
    if err:
        return err
    return jsonify({"success": True, "count": count}), 200
