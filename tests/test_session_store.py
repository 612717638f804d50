from datetime import datetime, timezone

from taskflow.domain.entities import UserProfile


def _profile():
    return UserProfile(
        id="u-1",
        username="Alice",
        email="alice@example.com",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_token_roundtrip(sessions):
    assert sessions.get_token() is None

    sessions.set_token("mock-jwt-abc")

    assert sessions.get_token() == "mock-jwt-abc"


def test_current_user_roundtrip(sessions):
    sessions.set_current_user(_profile())

    assert sessions.get_current_user() == _profile()


def test_current_user_blob_has_no_password_hash(storage, sessions):
    sessions.set_current_user(_profile())

    assert "passwordHash" not in storage.get_item("current_user")


def test_clear_auth_removes_both_and_is_idempotent(storage, sessions):
    sessions.set_token("t")
    sessions.set_current_user(_profile())

    sessions.clear_auth()
    sessions.clear_auth()

    assert sessions.get_token() is None
    assert sessions.get_current_user() is None
    assert storage.keys() == []


def test_unparsable_session_data_reads_as_absent(storage, sessions):
    storage.set_item("token", "{broken")
    storage.set_item("current_user", '{"id": "u-1"}')

    assert sessions.get_token() is None
    assert sessions.get_current_user() is None


def test_non_string_token_reads_as_absent(storage, sessions):
    storage.set_item("token", "42")

    assert sessions.get_token() is None
