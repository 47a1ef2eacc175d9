# bugsync/services/token_store.py
from sqlalchemy.orm import Session

from bugsync.models import UserToken
from bugsync.services.upsert import upsert


def save_token(db: Session, user_id: str, access_token: str, token_type: str | None, scope: str | None):
    # One token per user; a new OAuth callback overwrites the previous one.
    upsert(
        db,
        UserToken,
        "user_id",
        {
            "user_id": user_id,
            "access_token": access_token,
            "token_type": token_type,
            "scope": scope or "",
        },
    )


def get_token_record(db: Session, user_id: str) -> UserToken | None:
    return db.query(UserToken).filter(UserToken.user_id == user_id).first()


def get_token_for_user(db: Session, user_id: str) -> str | None:
    token_obj = get_token_record(db, user_id)
    return token_obj.access_token if token_obj else None
