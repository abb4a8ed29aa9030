import logging
from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from taskmaster.errors import ApiError, StoreError, ValidationError
from taskmaster.extensions import db
from taskmaster.services import tasks as task_service
from taskmaster.services.params import clean_text, parse_id
from taskmaster.services.users import get_or_create_user

logger = logging.getLogger(__name__)
api_bp = Blueprint("api", __name__, url_prefix="/api")


def read_payload():
    """Request fields from a JSON body, or from form + query parameters otherwise."""
    if request.is_json:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}
    payload = {}
    for key in request.values.keys():
        values = request.values.getlist(key)
        # orderedIds[]=3&orderedIds[]=1 arrives as a list under "orderedIds"
        if key.endswith("[]"):
            payload[key[:-2]] = values
        else:
            payload[key] = values[-1]
    return payload


def require_user_id(payload):
    user_id = parse_id(payload.get("userId"))
    if user_id is None:
        raise ValidationError("User ID required.")
    return user_id


def require_task_id(payload):
    task_id = parse_id(payload.get("taskId"))
    if task_id is None:
        raise ValidationError("Task ID required.")
    return task_id


def get_user_and_tasks(payload):
    username = clean_text(request.args.get("username", payload.get("username")))
    if not username:
        raise ValidationError("Username is required.")
    user_id = get_or_create_user(username)
    if not user_id:
        raise StoreError("Could not retrieve or create user.")
    tasks = task_service.list_tasks(user_id)
    return jsonify({"success": True, "userId": user_id, "tasks": tasks})


def add_task(payload):
    user_id = require_user_id(payload)
    task = task_service.add_task(user_id, payload.get("text"), payload.get("priority"))
    return jsonify({"success": True, "task": task})


def update_task(payload):
    user_id = require_user_id(payload)
    task_id = require_task_id(payload)
    task_service.update_task(user_id, task_id, payload)
    return jsonify({"success": True, "message": "Task updated successfully."})


def reorder_tasks(payload):
    user_id = require_user_id(payload)
    task_service.reorder_tasks(user_id, payload.get("orderedIds"))
    return jsonify({"success": True, "message": "Tasks reordered successfully."})


def delete_task(payload):
    user_id = require_user_id(payload)
    task_id = require_task_id(payload)
    task_service.delete_task(user_id, task_id)
    return jsonify({"success": True, "message": "Task deleted successfully."})


def delete_all_user_tasks(payload):
    user_id = require_user_id(payload)
    count = task_service.delete_all_tasks(user_id)
    return jsonify({"success": True, "message": "All tasks for user deleted.", "deletedCount": count})


ACTIONS = {
    "getUserAndTasks": get_user_and_tasks,
    "addTask": add_task,
    "updateTask": update_task,
    "reorderTasks": reorder_tasks,
    "deleteTask": delete_task,
    "deleteAllUserTasks": delete_all_user_tasks,
}

# Off unless ENABLE_DELETE_ALL is set
GATED_ACTIONS = {"deleteAllUserTasks": "ENABLE_DELETE_ALL"}


def resolve_action(name):
    if not isinstance(name, str) or name not in ACTIONS:
        return None
    flag = GATED_ACTIONS.get(name)
    if flag and not current_app.config.get(flag):
        return None
    return ACTIONS[name]


@api_bp.errorhandler(ApiError)
def handle_api_error(err):
    return jsonify(err.to_dict()), err.status_code


@api_bp.errorhandler(Exception)
def handle_unexpected(err):
    if isinstance(err, HTTPException):
        return err
    logger.exception("Unhandled error in API request")
    return jsonify({"success": False, "message": "Internal server error."}), 500


@api_bp.get("/health")
def health():
    return jsonify({"status": "ok"})


@api_bp.route("", methods=["GET", "POST"])
def dispatch():
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Database connection error")
        raise StoreError("Database connection failed. Please check server logs.")

    payload = read_payload()
    handler = resolve_action(payload.get("action"))
    if handler is None:
        raise ValidationError("Invalid action specified.")
    return handler(payload)
