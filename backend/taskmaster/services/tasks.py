"""Task reads and writes. Every statement is filtered by the owning user's id."""
import logging
from typing import Any, Dict, List, Mapping, Sequence

from sqlalchemy import delete, func, update
from sqlalchemy.exc import SQLAlchemyError

from taskmaster.errors import NotFoundError, StoreError, ValidationError
from taskmaster.extensions import db
from taskmaster.models import Task
from taskmaster.models.task import utcnow
from taskmaster.services.params import clean_text, is_priority, normalize_priority, parse_bool, parse_id, parse_int

logger = logging.getLogger(__name__)

SORT_ORDER_KEYS = ("sortOrder", "sort_order")


def list_tasks(user_id: int) -> List[Dict[str, Any]]:
    try:
        tasks = (
            Task.query.filter_by(user_id=user_id)
            .order_by(Task.sort_order.asc(), Task.created_at.desc())
            .all()
        )
        return [t.to_dict() for t in tasks]
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Get tasks failed for user ID %s", user_id)
        raise StoreError("Error fetching tasks.")


def next_sort_order(user_id: int) -> int:
    max_order = db.session.query(func.max(Task.sort_order)).filter(Task.user_id == user_id).scalar()
    return 0 if max_order is None else int(max_order) + 1


def add_task(user_id: int, text: Any, priority: Any = None) -> Dict[str, Any]:
    """Append a task at the end of the user's list and return it as stored."""
    text = clean_text(text)
    if not text:
        raise ValidationError("Task text cannot be empty.")
    priority = normalize_priority(priority)

    try:
        task = Task(
            user_id=user_id,
            text=text,
            priority=priority,
            completed=False,
            sort_order=next_sort_order(user_id),
            created_at=utcnow(),
        )
        db.session.add(task)
        db.session.flush()
        # Read back what the store actually holds before committing
        db.session.refresh(task)
        created = task.to_dict()
        db.session.commit()
        return created
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Add task failed for user ID %s", user_id)
        raise StoreError("Error adding task.")


def _collect_updates(fields: Mapping[str, Any]) -> Dict[str, Any]:
    values = {}

    if "text" in fields:
        text = clean_text(fields["text"])
        if not text:
            raise ValidationError("Task text cannot be empty.")
        values["text"] = text

    if "priority" in fields and is_priority(fields["priority"]):
        values["priority"] = fields["priority"]

    if "completed" in fields:
        completed = parse_bool(fields["completed"])
        if completed is not None:
            values["completed"] = completed
            values["completed_at"] = utcnow() if completed else None

    for key in SORT_ORDER_KEYS:
        if key not in fields:
            continue
        sort_order = parse_int(fields[key])
        if sort_order is not None and sort_order >= 0:
            values["sort_order"] = sort_order
            break

    return values


def update_task(user_id: int, task_id: int, fields: Mapping[str, Any]) -> None:
    """Apply the recognised fields present in `fields`; unknown or invalid values are ignored."""
    values = _collect_updates(fields)
    if not values:
        raise ValidationError("No valid update fields provided.")

    try:
        result = db.session.execute(
            update(Task)
            .where(Task.id == task_id, Task.user_id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Update task failed for task ID %s, user ID %s", task_id, user_id)
        raise StoreError("Error updating task.")

    if result.rowcount == 0:
        raise NotFoundError("Task not found or no changes detected.")


def reorder_tasks(user_id: int, ordered_ids: Sequence[Any]) -> None:
    """Set each listed task's sort_order to its position in ordered_ids, all or nothing."""
    if not isinstance(ordered_ids, (list, tuple)) or not ordered_ids:
        raise ValidationError("Valid ordered task IDs array required.")

    try:
        for index, raw_id in enumerate(ordered_ids):
            task_id = parse_id(raw_id)
            if task_id is None:
                logger.warning("Invalid task ID %r found during reorder for user ID %s", raw_id, user_id)
                continue
            db.session.execute(
                update(Task)
                .where(Task.id == task_id, Task.user_id == user_id)
                .values(sort_order=index)
                .execution_options(synchronize_session=False)
            )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Reorder tasks failed for user ID %s", user_id)
        raise StoreError("Error reordering tasks.")


def delete_task(user_id: int, task_id: int) -> None:
    try:
        result = db.session.execute(
            delete(Task)
            .where(Task.id == task_id, Task.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Delete task failed for task ID %s, user ID %s", task_id, user_id)
        raise StoreError("Error deleting task.")

    if result.rowcount == 0:
        raise NotFoundError("Task not found or already deleted.")


def delete_all_tasks(user_id: int) -> int:
    try:
        result = db.session.execute(
            delete(Task).where(Task.user_id == user_id).execution_options(synchronize_session=False)
        )
        db.session.commit()
        return result.rowcount
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Delete all tasks failed for user ID %s", user_id)
        raise StoreError("Error deleting all user tasks.")
