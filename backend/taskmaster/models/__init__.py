from taskmaster.models.user import User
from taskmaster.models.task import Task, PRIORITIES, DEFAULT_PRIORITY

__all__ = ["User", "Task", "PRIORITIES", "DEFAULT_PRIORITY"]
