import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for
from pymongo.errors import PyMongoError

from todoapp.errors import NotFound, TodoAppError
from todoapp.models.task_model import TaskStatus
from todoapp.services.task_service import TaskService
from todoapp.stores.task_store import TaskStore
from todoapp.utils.auth import form_payload, login_required
from todoapp.utils.db import get_db

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)

STATUS_MESSAGES = {
    TaskStatus.COMPLETED: "Task marked as completed!",
    TaskStatus.PENDING: "Task marked as pending!",
    TaskStatus.DELETED: "Task deleted successfully!",
}


def _service():
    return TaskService(TaskStore(get_db()))


@tasks_bp.get("")
@login_required
def list_tasks(identity):
    try:
        listing = _service().list_tasks(identity, request.args.get("filter"))
    except PyMongoError:
        logger.exception("Get tasks error")
        flash("Failed to load tasks", "error")
        return redirect(url_for("index"))
    return render_template("todos/index.html", title="My Tasks", listing=listing)


@tasks_bp.get("/create")
@login_required
def create_task_form(identity):
    return render_template("todos/create.html", title="Create Task")


@tasks_bp.post("/create")
@login_required
def create_task(identity):
    payload = form_payload()
    try:
        _service().create_task(identity, payload.get("title"), payload.get("description"))
    except TodoAppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("tasks.create_task_form"))
    except PyMongoError:
        logger.exception("Create task error")
        flash("Failed to create task", "error")
        return redirect(url_for("tasks.create_task_form"))

    flash("Task created successfully!", "success")
    return redirect(url_for("tasks.list_tasks"))


@tasks_bp.get("/<task_id>")
@login_required
def task_details(identity, task_id):
    try:
        task = _service().get_task_details(identity, task_id)
    except NotFound as exc:
        flash(exc.message, "error")
        return redirect(url_for("tasks.list_tasks"))
    except PyMongoError:
        logger.exception("Get task details error")
        flash("Failed to load task details", "error")
        return redirect(url_for("tasks.list_tasks"))
    return render_template("todos/details.html", title="Task Details", task=task)


# Browsers cannot send PATCH from a form, so POST is accepted as well.
@tasks_bp.route("/<task_id>/status", methods=["PATCH", "POST"])
@login_required
def update_task_status(identity, task_id):
    payload = form_payload()
    try:
        task = _service().update_status(identity, task_id, payload.get("status"))
    except TodoAppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("tasks.list_tasks"))
    except PyMongoError:
        logger.exception("Update task status error")
        flash("Failed to update task", "error")
        return redirect(url_for("tasks.list_tasks"))

    flash(STATUS_MESSAGES[task.status], "success")
    return redirect(url_for("tasks.list_tasks"))
