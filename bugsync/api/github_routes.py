# bugsync/api/github_routes.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from bugsync.core.db import get_db
from bugsync.core.errors import MissingUserId, NotAuthenticated
from bugsync.github_client import GitHubClient
from bugsync.services.repo_settings import save_repo, split_full_name
from bugsync.services.token_store import get_token_for_user, get_token_record

router = APIRouter(tags=["github"])

# ----- Pydantic schemas -----


class RepoOut(BaseModel):
    id: int
    name: str
    full_name: str
    private: bool
    owner: str | None = None


class SaveRepoIn(BaseModel):
    userId: str | None = None
    repo: str | None = None        # "owner/name"


class SaveRepoOut(BaseModel):
    ok: bool
    userId: str
    repo_owner: str
    repo_name: str


class TokenDebugOut(BaseModel):
    found: bool
    userId: str | None = None
    scope: str | None = None


# ----- Routes -----


@router.get("/github/repos", response_model=list[RepoOut])
async def list_repos(userId: str | None = None, db: Session = Depends(get_db)):
    if not userId:
        raise MissingUserId("Missing userId query param")

    token = get_token_for_user(db, userId)
    if not token:
        raise NotAuthenticated()

    repos = await GitHubClient(token).get_repos()

    return [
        RepoOut(
            id=r["id"],
            name=r["name"],
            full_name=r["full_name"],
            private=r["private"],
            owner=(r.get("owner") or {}).get("login"),
        )
        for r in repos or []
    ]


@router.post("/save-repo", response_model=SaveRepoOut)
def save_repo_selection(payload: SaveRepoIn, db: Session = Depends(get_db)):
    if not payload.userId:
        raise MissingUserId()
    owner, name = split_full_name(payload.repo)
    save_repo(db, payload.userId, owner, name)
    return SaveRepoOut(ok=True, userId=payload.userId, repo_owner=owner, repo_name=name)


# dev-only: reports whether a token exists, never the token itself
@router.get("/debug/token", response_model=TokenDebugOut, response_model_exclude_none=True)
def debug_token(userId: str | None = None, db: Session = Depends(get_db)):
    if not userId:
        raise MissingUserId("missing userId")
    row = get_token_record(db, userId)
    if not row:
        return TokenDebugOut(found=False)
    return TokenDebugOut(found=True, userId=row.user_id, scope=row.scope)
