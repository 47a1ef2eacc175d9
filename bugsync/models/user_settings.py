# bugsync/models/user_settings.py
from sqlalchemy import Column, String
from bugsync.core.db import Base


class UserRepoSelection(Base):
    __tablename__ = "user_settings"

    user_id = Column(String, primary_key=True)
    repo_owner = Column(String, nullable=False)
    repo_name = Column(String, nullable=False)
