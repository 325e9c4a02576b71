"""
Director OS
System configuration singleton (risk thresholds, resource links, maintenance mode).

Exactly one row exists, keyed ``global``; the JSON document is stored as-is so
new settings do not need a schema change.
"""

from datetime import datetime, timezone

from director_os.models import db

GLOBAL_CONFIG_ID = "global"


class SystemConfig(db.Model):
    __tablename__ = "system_config"

    id = db.Column(db.String(20), primary_key=True, default=GLOBAL_CONFIG_ID)
    data = db.Column(db.JSON, nullable=False, default=dict)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict:
        return dict(self.data or {})

    def __repr__(self) -> str:
        return f"<SystemConfig {self.id}>"
