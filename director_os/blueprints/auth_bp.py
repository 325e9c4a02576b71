"""
Auth blueprint — username login for the dashboard.

Endpoints:
    POST /api/login   — resolve a username to {user, token}; 401 when unknown
"""

import logging

from flask import Blueprint, jsonify, request

from director_os.services import dashboard_service
from director_os.utils.errors import E, api_error

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    username = (data.get("username") or "").strip()
    if not username:
        return api_error(E.VALIDATION_REQUIRED, "username is required")

    result = dashboard_service.login(username)
    if result is None:
        return api_error(E.AUTH_UNKNOWN_USER, "User not found")
    return jsonify(result), 200
