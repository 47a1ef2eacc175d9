# bugsync/models/user_token.py
from sqlalchemy import Column, String
from bugsync.core.db import Base


class UserToken(Base):
    __tablename__ = "user_tokens"

    user_id = Column(String, primary_key=True)       # flat id from Cliq / browser UI
    access_token = Column(String, nullable=False)
    token_type = Column(String, nullable=True)       # e.g. "bearer"
    scope = Column(String, nullable=True)            # e.g. "repo"
