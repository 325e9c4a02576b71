"""
Director OS
Portfolio domain models.

Models:
    - Project: an outsourced business-process engagement (BPO / HRO / RPO)
    - WeeklyMetric: one reporting-week snapshot of a project's numbers

WeeklyMetric references its project by ``project_code`` only (soft
reference, no FK) so that a metrics batch can be uploaded before the
project master data exists.
"""

from datetime import datetime, timezone

from director_os.models import db


# ── Constants ────────────────────────────────────────────────────────────────

BUSINESS_TYPES = ("BPO", "HRO", "RPO")
PROJECT_STATUSES = ("Running", "Ramp-up", "Closed")


class Project(db.Model):
    """Project master record. ``project_name`` is sensitive, ``project_code`` is not."""

    __tablename__ = "projects"

    id = db.Column(db.String(64), primary_key=True)
    project_code = db.Column(db.String(100), nullable=False, unique=True, index=True)
    project_name = db.Column(db.String(200), nullable=True)
    business_type = db.Column(db.String(10), nullable=False, default="BPO",
                              comment="BPO | HRO | RPO")
    pm_id = db.Column(db.String(64), nullable=True, index=True)
    profit_target_rate = db.Column(db.Float, nullable=False, default=0.0)
    sla_target_rate = db.Column(db.Float, nullable=False, default=0.0)
    status = db.Column(db.String(20), nullable=False, default="Running",
                       comment="Running | Ramp-up | Closed")
    custom_fields = db.Column(db.JSON, nullable=False, default=dict)

    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict:
        """Serialize to the wire shape shared with the local store."""
        return {
            "id": self.id,
            "projectName": self.project_name,
            "projectCode": self.project_code,
            "businessType": self.business_type,
            "pmId": self.pm_id,
            "profitTargetRate": self.profit_target_rate,
            "slaTargetRate": self.sla_target_rate,
            "status": self.status,
            "customFields": dict(self.custom_fields or {}),
        }

    def __repr__(self) -> str:
        return f"<Project {self.id}: {self.project_code}>"


class WeeklyMetric(db.Model):
    """Weekly operating numbers for one project."""

    __tablename__ = "weekly_metrics"

    id = db.Column(db.String(64), primary_key=True)
    project_code = db.Column(db.String(100), nullable=False, index=True)
    report_week = db.Column(db.String(10), nullable=False, comment="ISO date YYYY-MM-DD")
    revenue_actual = db.Column(db.Float, nullable=False, default=0.0)
    revenue_target = db.Column(db.Float, nullable=False, default=0.0)
    headcount = db.Column(db.Integer, nullable=False, default=0)
    sla_achieved = db.Column(db.Float, nullable=False, default=0.0)
    turnover_rate = db.Column(db.Float, nullable=False, default=0.0)
    risk_flag = db.Column(db.Boolean, nullable=False, default=False)
    risk_details = db.Column(db.Text, nullable=False, default="")

    uploaded_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.UniqueConstraint("project_code", "report_week", name="uq_metrics_project_week"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "projectCode": self.project_code,
            "reportWeek": self.report_week,
            "revenueActual": self.revenue_actual,
            "revenueTarget": self.revenue_target,
            "headcount": self.headcount,
            "slaAchieved": self.sla_achieved,
            "turnoverRate": self.turnover_rate,
            "riskFlag": bool(self.risk_flag),
            "riskDetails": self.risk_details or "",
        }

    def __repr__(self) -> str:
        return f"<WeeklyMetric {self.project_code} @ {self.report_week}>"
