from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def repo_root() -> Path:
    """
    Description: Resolve repository root from within src/ package.
    Input: None
    Output: Absolute Path to repo root
    """
    # src/jobquest/config.py -> src/jobquest -> src -> repo root
    return Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Description: Central configuration loader for JobQuest.
    Input: .env in repo root + environment variables
    Output: Strongly typed settings object shared by the API and the dashboard
    """

    model_config = SettingsConfigDict(
        env_file=str(repo_root() / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    DATABASE_URL: str = "sqlite:///outputs/jobquest.db"

    # API listen address
    HOST: str = "127.0.0.1"
    PORT: int = 5000

    # Dashboard -> API location; derived from HOST/PORT when unset
    API_URL: Optional[str] = None

    # Runtime
    LOG_LEVEL: str = "INFO"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    @property
    def api_url(self) -> str:
        """Base URL the dashboard uses to reach the API."""
        if self.API_URL:
            return self.API_URL.rstrip("/")
        host = self.HOST
        if host in ("0.0.0.0", "::", ""):
            host = "127.0.0.1"
        if ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{self.PORT}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Description: Cached settings accessor for FastAPI/Streamlit.
    Input: None
    Output: Settings
    """
    return Settings()
