import pytest
from bson import ObjectId

from todoapp.errors import NotFound, NotFoundOrUnauthorized, ValidationError
from todoapp.models.task_model import TaskFilter, TaskStatus


def test_create_task_owned_by_caller(task_service, alice, db):
    task = task_service.create_task(alice, "  Buy milk  ", "  two litres ")

    assert task.title == "Buy milk"
    assert task.description == "two litres"
    assert task.status is TaskStatus.PENDING
    assert db.tasks.find_one({"_id": ObjectId(task.id)})["user_id"] == alice.user_id


def test_create_task_without_description(task_service, alice):
    task = task_service.create_task(alice, "Title only")
    assert task.description == ""


@pytest.mark.parametrize(
    "title,description",
    [("", "no title"), ("   ", ""), ("x" * 101, ""), ("ok", "y" * 501)],
)
def test_create_task_validation_persists_nothing(task_service, alice, db, title, description):
    with pytest.raises(ValidationError):
        task_service.create_task(alice, title, description)
    assert db.tasks.count_documents({}) == 0


def test_list_tasks_counts_ignore_filter(task_service, alice, bob):
    first = task_service.create_task(alice, "one")
    task_service.create_task(alice, "two")
    gone = task_service.create_task(alice, "three")
    task_service.create_task(bob, "bob's")
    task_service.update_status(alice, first.id, "completed")
    task_service.update_status(alice, gone.id, "deleted")

    listing = task_service.list_tasks(alice, "pending")

    assert listing.filter is TaskFilter.PENDING
    assert [t.title for t in listing.tasks] == ["two"]
    assert listing.pending_count == 1
    assert listing.completed_count == 1


def test_deleted_tasks_never_listed(task_service, alice):
    task = task_service.create_task(alice, "temp")
    task_service.update_status(alice, task.id, "deleted")

    for name in ("all", "pending", "completed"):
        assert task_service.list_tasks(alice, name).tasks == []


@pytest.mark.parametrize("value", [None, "", "everything", "deleted"])
def test_unknown_filter_falls_back_to_all(task_service, alice, value):
    task_service.create_task(alice, "one")

    listing = task_service.list_tasks(alice, value)

    assert listing.filter is TaskFilter.ALL
    assert len(listing.tasks) == 1


def test_update_status_twice_is_idempotent(task_service, alice):
    task = task_service.create_task(alice, "repeat")

    first = task_service.update_status(alice, task.id, "completed")
    second = task_service.update_status(alice, task.id, "completed")

    assert first.status is second.status is TaskStatus.COMPLETED


def test_update_status_rejects_unknown_status(task_service, alice, db):
    task = task_service.create_task(alice, "keep")

    with pytest.raises(ValidationError):
        task_service.update_status(alice, task.id, "archived")

    assert db.tasks.find_one({"_id": ObjectId(task.id)})["status"] == "pending"


def test_other_user_cannot_update(task_service, alice, bob, db):
    task = task_service.create_task(alice, "private")

    with pytest.raises(NotFoundOrUnauthorized) as excinfo:
        task_service.update_status(bob, task.id, "deleted")

    assert excinfo.value.message == "Task not found or unauthorized"
    assert db.tasks.find_one({"_id": ObjectId(task.id)})["status"] == "pending"


def test_update_missing_task_matches_foreign_task(task_service, alice, bob):
    task = task_service.create_task(alice, "private")

    with pytest.raises(NotFoundOrUnauthorized) as foreign:
        task_service.update_status(bob, task.id, "completed")
    with pytest.raises(NotFoundOrUnauthorized) as missing:
        task_service.update_status(bob, str(ObjectId()), "completed")

    assert foreign.value.message == missing.value.message


def test_get_task_details(task_service, alice, bob):
    task = task_service.create_task(alice, "details", "more")

    assert task_service.get_task_details(alice, task.id).description == "more"
    with pytest.raises(NotFound):
        task_service.get_task_details(bob, task.id)
    with pytest.raises(NotFound):
        task_service.get_task_details(alice, "not-an-id")


@pytest.mark.parametrize("value", ["COMPLETED", " completed ", "Completed", None, 1, ["completed"]])
def test_update_status_requires_exact_status(task_service, alice, db, value):
    task = task_service.create_task(alice, "strict")

    with pytest.raises(ValidationError):
        task_service.update_status(alice, task.id, value)

    assert db.tasks.find_one({"_id": ObjectId(task.id)})["status"] == "pending"


@pytest.mark.parametrize("title,description", [(123, ""), ("ok", ["list"]), ({"a": 1}, None)])
def test_create_task_rejects_non_string_fields(task_service, alice, db, title, description):
    with pytest.raises(ValidationError):
        task_service.create_task(alice, title, description)
    assert db.tasks.count_documents({}) == 0
