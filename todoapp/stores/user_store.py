from datetime import datetime

from pymongo.errors import DuplicateKeyError
from werkzeug.security import check_password_hash

from todoapp.errors import DuplicateUsername
from todoapp.models.user_model import User


class UserStore:
    """Credential records in the ``users`` collection."""

    def __init__(self, db):
        self.collection = db["users"]

    def find_by_username(self, username):
        doc = self.collection.find_one({"username": username})
        return User.from_doc(doc) if doc else None

    def create(self, username, password_hash):
        # The unique index on username is the only duplicate check.
        user = User(username=username, password_hash=password_hash, created_at=datetime.utcnow())
        doc = {
            "username": user.username,
            "password_hash": user.password_hash,
            "created_at": user.created_at,
        }
        try:
            res = self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateUsername() from exc
        user.id = str(res.inserted_id)
        return user

    @staticmethod
    def verify_password(user, password):
        return check_password_hash(user.password_hash, password)
