"""Load the demo dataset into an empty database."""

import logging

from director_os.models import db
from director_os.models.people import PMProfile, User
from director_os.models.portfolio import Project, WeeklyMetric
from director_os.models.system_config import GLOBAL_CONFIG_ID, SystemConfig
from director_os.models.transformation import TransformationTask
from director_os.seed_data import (
    SEED_CONFIG, SEED_METRICS, SEED_PMS, SEED_PROJECTS, SEED_TASKS, SEED_USERS, seed_copy,
)

logger = logging.getLogger(__name__)


def seed_database(force=False):
    """Insert the demo rows. Skips silently when users already exist unless ``force``.

    With ``force`` every managed table is emptied first.

    Returns:
        dict of inserted row counts per collection (empty when skipped).
    """
    if not force and db.session.query(User.id).first() is not None:
        logger.info("Seed skipped: database already populated")
        return {}

    if force:
        for model in (WeeklyMetric, Project, PMProfile, TransformationTask, User, SystemConfig):
            db.session.query(model).delete()

    for u in SEED_USERS:
        db.session.add(User(
            id=u["id"], username=u["username"], name=u["name"], role=u["role"],
            avatar_url=u.get("avatarUrl"),
            assigned_project_codes=list(u["assignedProjectCodes"]),
        ))
    for pm in SEED_PMS:
        db.session.add(PMProfile(
            id=pm["id"], name=pm["name"], level=pm["level"],
            tags=list(pm["tags"]), avatar_url=pm.get("avatarUrl"),
            custom_fields=dict(pm["customFields"]),
        ))
    for p in SEED_PROJECTS:
        db.session.add(Project(
            id=p["id"], project_code=p["projectCode"], project_name=p["projectName"],
            business_type=p["businessType"], pm_id=p["pmId"],
            profit_target_rate=p["profitTargetRate"], sla_target_rate=p["slaTargetRate"],
            status=p["status"], custom_fields=dict(p["customFields"]),
        ))
    for m in SEED_METRICS:
        db.session.add(WeeklyMetric(
            id=m["id"], project_code=m["projectCode"], report_week=m["reportWeek"],
            revenue_actual=m["revenueActual"], revenue_target=m["revenueTarget"],
            headcount=m["headcount"], sla_achieved=m["slaAchieved"],
            turnover_rate=m["turnoverRate"], risk_flag=m["riskFlag"],
            risk_details=m["riskDetails"],
        ))
    for t in SEED_TASKS:
        db.session.add(TransformationTask(
            id=t["id"], task_name=t["taskName"], stage=t["stage"],
            progress_percent=t["progressPercent"], blocker_notes=t.get("blockerNotes"),
        ))
    db.session.add(SystemConfig(id=GLOBAL_CONFIG_ID, data=seed_copy(SEED_CONFIG)))
    db.session.commit()

    counts = {
        "users": len(SEED_USERS),
        "pms": len(SEED_PMS),
        "projects": len(SEED_PROJECTS),
        "metrics": len(SEED_METRICS),
        "tasks": len(SEED_TASKS),
    }
    logger.info("Demo data seeded: %s", counts)
    return counts
