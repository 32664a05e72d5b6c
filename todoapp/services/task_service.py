import logging
from dataclasses import dataclass, field
from typing import List

from todoapp.errors import NotFound, NotFoundOrUnauthorized, ValidationError
from todoapp.models.task_model import Task, TaskFilter, TaskStatus

logger = logging.getLogger(__name__)

TITLE_MAX = 100
DESCRIPTION_MAX = 500


@dataclass
class TaskListing:
    filter: TaskFilter
    pending_count: int
    completed_count: int
    tasks: List[Task] = field(default_factory=list)


def _text(value, label):
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    return value.strip()


def validate_task_input(title, description):
    title = _text(title, "Title")
    description = _text(description, "Description")
    if not title:
        raise ValidationError("Title is required")
    if len(title) > TITLE_MAX:
        raise ValidationError(f"Title must be at most {TITLE_MAX} characters")
    if len(description) > DESCRIPTION_MAX:
        raise ValidationError(f"Description must be at most {DESCRIPTION_MAX} characters")
    return title, description


def parse_status(value):
    try:
        return TaskStatus.parse(value)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(f"Status must be one of: {allowed}") from None


class TaskService:
    """Task use cases for one signed-in user at a time."""

    def __init__(self, task_store):
        self.tasks = task_store

    def list_tasks(self, identity, status_filter=None):
        active = TaskFilter.parse(status_filter)
        listing = TaskListing(
            filter=active,
            tasks=self.tasks.list_by_owner(identity.user_id, active),
            pending_count=self.tasks.count_by_owner_and_status(identity.user_id, TaskStatus.PENDING),
            completed_count=self.tasks.count_by_owner_and_status(identity.user_id, TaskStatus.COMPLETED),
        )
        logger.info("User %s viewed tasks - Filter: %s", identity.username, active.value)
        return listing

    def create_task(self, identity, title, description=None):
        title, description = validate_task_input(title, description)
        task = self.tasks.create(title, description, identity.user_id)
        logger.info("Task created by %s: %s", identity.username, title)
        return task

    def update_status(self, identity, task_id, new_status):
        status = parse_status(new_status)
        task = self.tasks.update_status_owned(task_id, identity.user_id, status)
        if task is None:
            raise NotFoundOrUnauthorized()
        logger.info("Task status updated by %s: %s -> %s", identity.username, task.title, status.value)
        return task

    def get_task_details(self, identity, task_id):
        task = self.tasks.find_one_owned(task_id, identity.user_id)
        if task is None:
            raise NotFound()
        return task
