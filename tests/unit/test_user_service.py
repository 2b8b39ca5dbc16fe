from uuid import uuid4

import pytest

from urlshortener.errors import NotFound


def test_create_user_stores_identity(users, user_store):
    user = users.create_user()
    assert user_store.find_by_id(user.id) == user
    assert users.user_exists(user.id)
    assert users.get_user(user.id) == user


def test_each_session_gets_a_new_identity(users):
    assert users.create_user().id != users.create_user().id


def test_unknown_user(users):
    missing = uuid4()
    assert not users.user_exists(missing)
    with pytest.raises(NotFound, match="User not found"):
        users.get_user(missing)
