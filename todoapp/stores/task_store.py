from datetime import datetime

from pymongo import DESCENDING, ReturnDocument

from todoapp.models.task_model import Task, TaskFilter, TaskStatus
from todoapp.utils.db import to_object_id


class TaskStore:
    """Task documents in the ``tasks`` collection.

    Every read and write is scoped by ``user_id``, so a task owned by someone
    else looks exactly like a task that does not exist.
    """

    def __init__(self, db):
        self.collection = db["tasks"]

    def list_by_owner(self, user_id, status_filter=TaskFilter.ALL):
        query = {"user_id": user_id, "status": {"$ne": TaskStatus.DELETED.value}}
        if status_filter == TaskFilter.PENDING:
            query["status"] = TaskStatus.PENDING.value
        elif status_filter == TaskFilter.COMPLETED:
            query["status"] = TaskStatus.COMPLETED.value

        cursor = self.collection.find(query).sort("created_at", DESCENDING)
        return [Task.from_doc(d) for d in cursor]

    def count_by_owner_and_status(self, user_id, status):
        return self.collection.count_documents({"user_id": user_id, "status": TaskStatus.parse(status).value})

    def create(self, title, description, user_id):
        now = datetime.utcnow()
        task = Task(
            title=title,
            description=description,
            user_id=user_id,
            status=TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        res = self.collection.insert_one(task.to_doc())
        task.id = str(res.inserted_id)
        return task

    def find_one_owned(self, task_id, user_id):
        oid = to_object_id(task_id)
        if oid is None:
            return None
        doc = self.collection.find_one({"_id": oid, "user_id": user_id})
        return Task.from_doc(doc) if doc else None

    def update_status_owned(self, task_id, user_id, new_status):
        oid = to_object_id(task_id)
        if oid is None:
            return None
        # Ownership check and write happen in one conditional update.
        doc = self.collection.find_one_and_update(
            {"_id": oid, "user_id": user_id},
            {"$set": {"status": TaskStatus.parse(new_status).value, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return Task.from_doc(doc) if doc else None
