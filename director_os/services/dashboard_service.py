"""Dashboard service — bundled read, login lookup and weekly metrics upload.

The bundle is the single read the client makes on startup:
``{projects, metrics, pms, tasks, config}``. PM users are scoped down to their
assigned project codes with the same helper the offline client uses, so the
online and offline views agree.
"""

import logging
import math
import uuid

from director_os.core.exceptions import ValidationError
from director_os.models import db
from director_os.models.people import PMProfile, User
from director_os.models.portfolio import Project, WeeklyMetric
from director_os.models.transformation import TransformationTask
from director_os.services import admin_service
from director_os.services.analytics import scope_for_user
from director_os.services.token_service import generate_session_token
from director_os.utils.helpers import iso_week

logger = logging.getLogger(__name__)


def login(username):
    """Resolve ``username`` to ``{user, token}``, or None when unknown."""
    user = admin_service.get_user_by_username((username or "").strip())
    if user is None:
        logger.info("Login rejected for unknown username=%r", username)
        return None
    logger.info("Login ok", extra={"username": user.username})
    return {"user": user.to_dict(), "token": generate_session_token(user)}


def get_dashboard_bundle(user=None):
    """Assemble the dashboard payload, narrowed for PM users.

    Args:
        user: wire-shaped user dict of the caller, or None for an unscoped read.
    """
    bundle = {
        "projects": [p.to_dict() for p in Project.query.order_by(Project.id).all()],
        "metrics": [
            m.to_dict()
            for m in WeeklyMetric.query.order_by(WeeklyMetric.report_week, WeeklyMetric.project_code).all()
        ],
        "pms": [pm.to_dict() for pm in PMProfile.query.order_by(PMProfile.id).all()],
        "tasks": [t.to_dict() for t in TransformationTask.query.order_by(TransformationTask.id).all()],
        "config": admin_service.get_config(),
    }
    return scope_for_user(bundle, user)


def _number(row, field, *, integer=False, ratio=False):
    value = row.get(field, 0)
    try:
        value = int(value) if integer else float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be a number", details={field: "not a number"})
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", details={field: "not finite"})
    if value < 0:
        raise ValidationError(f"{field} must not be negative", details={field: "negative"})
    if ratio and value > 1:
        raise ValidationError(f"{field} must be between 0 and 1", details={field: "out of range"})
    return value


def _validate_metric(row):
    if not isinstance(row, dict):
        raise ValidationError("Each metric must be an object")
    code = str(row.get("projectCode") or "").strip()
    if not code:
        raise ValidationError("projectCode is required", details={"projectCode": "required"})
    week = iso_week(row.get("reportWeek"))
    if not week:
        raise ValidationError("reportWeek must be an ISO date", details={"reportWeek": "invalid"})
    return {
        "id": row.get("id"),
        "project_code": code,
        "report_week": week,
        "revenue_actual": _number(row, "revenueActual"),
        "revenue_target": _number(row, "revenueTarget"),
        "headcount": _number(row, "headcount", integer=True),
        "sla_achieved": _number(row, "slaAchieved", ratio=True),
        "turnover_rate": _number(row, "turnoverRate", ratio=True),
        "risk_flag": bool(row.get("riskFlag", False)),
        "risk_details": str(row.get("riskDetails") or ""),
    }


def upload_metrics(batch):
    """Upsert a batch of weekly metrics keyed by (projectCode, reportWeek).

    The whole batch is validated before anything is written. An existing row
    for the same project and week keeps its id and takes the new numbers.
    The caller commits.

    Returns:
        number of rows written.
    """
    if not isinstance(batch, list):
        raise ValidationError("Request body must be a list of metrics")

    rows = [_validate_metric(r) for r in batch]
    for row in rows:
        metric_id = row.pop("id")
        metric = WeeklyMetric.query.filter_by(
            project_code=row["project_code"], report_week=row["report_week"],
        ).first()
        if metric is None:
            # a client id already taken by another week gets a fresh one
            if metric_id and db.session.get(WeeklyMetric, str(metric_id)) is not None:
                metric_id = None
            metric = WeeklyMetric(id=str(metric_id or f"met-{uuid.uuid4().hex[:8]}"))
            db.session.add(metric)
        for key, value in row.items():
            setattr(metric, key, value)
        # later rows in the same batch must see earlier ones
        db.session.flush()

    logger.info("Metrics uploaded: %d rows", len(rows))
    return len(rows)


def resolve_caller(username=None, role_hint=None):
    """Map request hints to a wire-shaped user for scoping, or None.

    A known username wins over the role hint. An unknown username with a PM
    hint gets an empty scope rather than the full portfolio.
    """
    if username:
        user = admin_service.get_user_by_username(username)
        if user is not None:
            return user.to_dict()
    if role_hint == "PM":
        return {"role": "PM", "assignedProjectCodes": []}
    return None
