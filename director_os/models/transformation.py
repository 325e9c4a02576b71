"""
Director OS
Transformation kanban model.

Stage flow: Backlog → In Progress → (Blocked | Testing) → Live.
Blocked and Testing are parallel branches, not an ordered pair.
"""

from director_os.models import db

TASK_STAGES = ("Backlog", "In Progress", "Blocked", "Testing", "Live")


class TransformationTask(db.Model):
    """One card on the transformation kanban."""

    __tablename__ = "transformation_tasks"

    id = db.Column(db.String(64), primary_key=True)
    task_name = db.Column(db.String(200), nullable=False)
    stage = db.Column(db.String(20), nullable=False, default="Backlog")
    progress_percent = db.Column(db.Integer, nullable=False, default=0)
    blocker_notes = db.Column(db.Text, nullable=True)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "taskName": self.task_name,
            "stage": self.stage,
            "progressPercent": self.progress_percent,
        }
        # blocker notes only mean something on a blocked card
        if self.stage == "Blocked" and self.blocker_notes:
            data["blockerNotes"] = self.blocker_notes
        return data

    def __repr__(self) -> str:
        return f"<TransformationTask {self.id}: {self.stage}>"
