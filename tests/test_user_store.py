import pytest
from werkzeug.security import generate_password_hash

from todoapp.errors import DuplicateUsername


def test_create_and_find_by_username(user_store):
    created = user_store.create("alice123", generate_password_hash("secret1"))

    found = user_store.find_by_username("alice123")
    assert found is not None
    assert found.id == created.id
    assert found.username == "alice123"


def test_find_unknown_username_returns_none(user_store):
    assert user_store.find_by_username("nobody") is None


def test_duplicate_username_rejected_by_unique_index(user_store, db):
    user_store.create("alice123", generate_password_hash("secret1"))

    with pytest.raises(DuplicateUsername):
        user_store.create("alice123", generate_password_hash("other1"))

    assert db.users.count_documents({"username": "alice123"}) == 1


def test_verify_password(user_store):
    user = user_store.create("alice123", generate_password_hash("secret1"))

    assert user_store.verify_password(user, "secret1")
    assert not user_store.verify_password(user, "secret2")
    assert not user_store.verify_password(user, "")
