import logging

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from todoapp.errors import InfrastructureError

logger = logging.getLogger(__name__)


def init_app(app, client=None):
    """Attach a MongoDB database to ``app`` and make sure indexes exist.

    When no client is passed one is built from ``MONGO_URI`` and pinged up
    front; an unreachable server aborts startup.
    """
    if client is None:
        client = MongoClient(
            app.config["MONGO_URI"],
            serverSelectionTimeoutMS=app.config["MONGO_TIMEOUT_MS"],
        )
        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            logger.error("Database connection failed: %s", exc)
            raise InfrastructureError("Database connection failed") from exc
        logger.info("Connected to MongoDB successfully")

    db = client[app.config["MONGO_DB_NAME"]]
    ensure_indexes(db)

    app.extensions["mongo_client"] = client
    app.db = db
    return db


def ensure_indexes(db):
    # Username uniqueness is enforced here and nowhere else.
    db.users.create_index([("username", ASCENDING)], unique=True)
    db.tasks.create_index(
        [("user_id", ASCENDING), ("status", ASCENDING), ("created_at", DESCENDING)]
    )


def get_db():
    return current_app.db


def to_object_id(value):
    """Return an ObjectId for ``value`` or None if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None
