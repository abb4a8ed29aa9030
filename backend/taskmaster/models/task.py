from datetime import datetime, timezone

from taskmaster.extensions import db

PRIORITIES = ("low", "medium", "high")
DEFAULT_PRIORITY = "medium"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utcnow():
    # Naive UTC, matching what DATETIME columns store
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def _fmt(value):
    return value.strftime(TIMESTAMP_FORMAT) if value else None


class Task(db.Model):
    """A to-do item owned by one user, placed in that user's list by sort_order."""
    __tablename__ = "tasks"
    __table_args__ = (db.Index("ix_tasks_user_sort", "user_id", "sort_order"),)

    id = db.Column("task_id", db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.user_id"), nullable=False)
    text = db.Column(db.Text, nullable=False)
    priority = db.Column(db.Enum(*PRIORITIES, name="task_priority"), nullable=False, default=DEFAULT_PRIORITY)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    completed_at = db.Column(db.DateTime, nullable=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        # id goes out as a string; the web client keys tasks by string ids
        return {
            "id": str(self.id),
            "text": self.text,
            "priority": self.priority,
            "completed": bool(self.completed),
            "created_at": _fmt(self.created_at),
            "completed_at": _fmt(self.completed_at),
            "sort_order": self.sort_order,
        }
