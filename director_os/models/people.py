"""
Director OS
People models: dashboard users and PM talent profiles.
"""

from datetime import datetime, timezone

from director_os.models import db

USER_ROLES = ("DIRECTOR", "PM")


class User(db.Model):
    """A dashboard login. PM users only see their assigned project codes."""

    __tablename__ = "users"

    id = db.Column(db.String(64), primary_key=True)
    username = db.Column(db.String(100), nullable=False, unique=True, index=True)
    name = db.Column(db.String(200), nullable=False, default="")
    role = db.Column(db.String(20), nullable=False, default="PM", comment="DIRECTOR | PM")
    avatar_url = db.Column(db.String(500), nullable=True)
    assigned_project_codes = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "role": self.role,
            "assignedProjectCodes": list(self.assigned_project_codes or []),
        }
        if self.avatar_url:
            data["avatarUrl"] = self.avatar_url
        return data

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.username} ({self.role})>"


class PMProfile(db.Model):
    """Project manager talent profile with free-form capability tags."""

    __tablename__ = "pm_profiles"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(200), nullable=False, default="")
    level = db.Column(db.String(100), nullable=False, default="")
    tags = db.Column(db.JSON, nullable=False, default=list)
    avatar_url = db.Column(db.String(500), nullable=True)
    custom_fields = db.Column(db.JSON, nullable=False, default=dict)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "tags": list(self.tags or []),
            "customFields": dict(self.custom_fields or {}),
        }
        if self.avatar_url:
            data["avatarUrl"] = self.avatar_url
        return data

    def __repr__(self) -> str:
        return f"<PMProfile {self.id}: {self.name}>"
