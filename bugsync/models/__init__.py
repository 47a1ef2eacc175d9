from bugsync.models.user_token import UserToken
from bugsync.models.user_settings import UserRepoSelection

__all__ = ["UserToken", "UserRepoSelection"]
