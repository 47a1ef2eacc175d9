# bugsync/services/repo_settings.py
from sqlalchemy.orm import Session

from bugsync.core.errors import InvalidRepo
from bugsync.models import UserRepoSelection
from bugsync.services.upsert import upsert


def split_full_name(full_name: str | None) -> tuple[str, str]:
    """Split "owner/name" into its two halves."""
    if not full_name or "/" not in full_name:
        raise InvalidRepo(full_name)
    owner, name = (part.strip() for part in full_name.split("/", 1))
    if not owner or not name:
        raise InvalidRepo(full_name)
    return owner, name


def save_repo(db: Session, user_id: str, owner: str, name: str):
    upsert(
        db,
        UserRepoSelection,
        "user_id",
        {"user_id": user_id, "repo_owner": owner, "repo_name": name},
    )


def get_repo(db: Session, user_id: str) -> dict | None:
    row = db.query(UserRepoSelection).filter(UserRepoSelection.user_id == user_id).first()
    if not row:
        return None
    return {"repo_owner": row.repo_owner, "repo_name": row.repo_name}
