# bugsync/core/config.py
import logging
import os
from dotenv import load_dotenv

load_dotenv()  # load from .env


class Settings:
    APP_BASE_URL: str = os.getenv("APP_BASE_URL", "")
    BACKEND_BASE_URL: str = os.getenv("BACKEND_BASE_URL", "http://localhost:3000")
    PORT: int = int(os.getenv("PORT", "3000"))

    GITHUB_CLIENT_ID: str = os.getenv("GITHUB_CLIENT_ID", "")
    GITHUB_CLIENT_SECRET: str = os.getenv("GITHUB_CLIENT_SECRET", "")
    GITHUB_OAUTH_SCOPES: str = os.getenv("GITHUB_OAUTH_SCOPES", "repo")

    # Global fallback used by issue-status lookups that are not user-scoped
    GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "")
    REPO_OWNER: str = os.getenv("REPO_OWNER", "")
    REPO_NAME: str = os.getenv("REPO_NAME", "")

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./bugsync.sqlite")
    SNIPPETS_PATH: str = os.getenv("SNIPPETS_PATH", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def oauth_callback_url(self) -> str:
        return f"{self.APP_BASE_URL}/auth/github/callback"

    def configure_logging(self) -> None:
        """Configure root logging from LOG_LEVEL."""
        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL.upper(), logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def warn_missing(self, logger: logging.Logger) -> None:
        if not self.APP_BASE_URL:
            logger.warning("APP_BASE_URL is not set. GitHub OAuth redirects may fail.")
        if not self.GITHUB_CLIENT_ID or not self.GITHUB_CLIENT_SECRET:
            logger.warning("GITHUB_CLIENT_ID or GITHUB_CLIENT_SECRET is not set.")


settings = Settings()
