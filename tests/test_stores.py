"""Token store and repo selection store — upsert and lookup."""
from unittest.mock import MagicMock

import pytest

from bugsync.core.errors import ConfigurationError, InvalidRepo
from bugsync.models import UserToken
from bugsync.services.repo_settings import get_repo, save_repo, split_full_name
from bugsync.services.token_store import get_token_for_user, get_token_record, save_token
from bugsync.services.upsert import upsert


def test_save_and_get_token(db_session):
    save_token(db_session, "u1", "gho_abc", "bearer", "repo")
    assert get_token_for_user(db_session, "u1") == "gho_abc"
    row = get_token_record(db_session, "u1")
    assert row.token_type == "bearer"
    assert row.scope == "repo"


def test_token_overwritten_on_second_save(db_session):
    save_token(db_session, "u1", "old", "bearer", "repo")
    assert get_token_for_user(db_session, "u1") == "old"
    save_token(db_session, "u1", "new", "bearer", None)
    assert get_token_for_user(db_session, "u1") == "new"
    assert get_token_record(db_session, "u1").scope == ""


def test_unknown_user_has_no_token(db_session):
    assert get_token_for_user(db_session, "ghost") is None
    assert get_token_record(db_session, "ghost") is None


def test_repo_round_trip(db_session):
    save_repo(db_session, "u", "acme", "widgets")
    assert get_repo(db_session, "u") == {"repo_owner": "acme", "repo_name": "widgets"}


def test_repo_selection_upserts(db_session):
    save_repo(db_session, "u", "acme", "widgets")
    assert get_repo(db_session, "u")["repo_name"] == "widgets"
    save_repo(db_session, "u", "acme", "gadgets")
    assert get_repo(db_session, "u") == {"repo_owner": "acme", "repo_name": "gadgets"}


def test_repo_missing(db_session):
    assert get_repo(db_session, "nobody") is None


def test_split_full_name():
    assert split_full_name("acme/widgets") == ("acme", "widgets")
    assert split_full_name("acme/widgets/extra") == ("acme", "widgets/extra")


@pytest.mark.parametrize("bad", [None, "", "acme", "/widgets", "acme/"])
def test_split_full_name_rejects(bad):
    with pytest.raises(InvalidRepo):
        split_full_name(bad)


def test_upsert_rejects_unsupported_database():
    db = MagicMock()
    db.get_bind.return_value.dialect.name = "mysql"
    with pytest.raises(ConfigurationError) as excinfo:
        upsert(db, UserToken, "user_id", {"user_id": "u", "access_token": "t"})
    assert excinfo.value.status_code == 500
    db.execute.assert_not_called()
