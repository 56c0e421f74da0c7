"""
Configuration management for the application.
Loads settings from environment variables and the project .env file.
"""

import os
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from loguru import logger

# This file is at waltz/config/settings.py, so project root is 3 levels up
_project_root = Path(__file__).resolve().parent.parent.parent

PROJECT_ROOT = _project_root

_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(dotenv_path=_env_file, override=True)
    logger.debug(f"Loaded .env from: {_env_file}")
else:
    load_dotenv(override=False)


@dataclass
class DatabaseConfig:
    """Relational store configuration (MySQL by default)"""
    host: str = field(default_factory=lambda: os.getenv("DB_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("DB_PORT", "3306")))
    user: str = field(default_factory=lambda: os.getenv("DB_USER", "waltz"))
    password: str = field(default_factory=lambda: os.getenv("DB_PWD", ""))
    database: str = field(default_factory=lambda: os.getenv("DB_NAME", "waltz"))
    url: Optional[str] = field(default_factory=lambda: os.getenv("DB_URL"))

    def get_connection_string(self) -> str:
        """
        Build the SQLAlchemy connection string.

        DB_URL wins when set (e.g. ``sqlite:///waltz.db`` for local runs).
        """
        if self.url:
            return self.url
        return (
            f"mysql+pymysql://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
            "?charset=utf8mb4"
        )

    def describe(self) -> str:
        """Connection description safe for logging (no password)"""
        if self.url:
            return self.url.split("@")[-1]
        return f"{self.database} @ {self.host}:{self.port}"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_project_root / ".env"),
        env_file_encoding="utf-8",
        extra="allow",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=False)
    log_dir: str = Field(default="data/logs")

    # Database
    db_echo: bool = Field(default=False)  # Echo generated SQL
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)
    db_pool_recycle: int = Field(default=3600)

    # API
    api_title: str = Field(default="Waltz Overlay Diagram API")
    api_version: str = Field(default="1.0.0")
    cors_origins: List[str] = Field(default=["http://localhost:8000", "http://127.0.0.1:8000"])


settings = Settings()

# Resolve log directory to absolute
_log_dir = Path(settings.log_dir)
if not _log_dir.is_absolute():
    _log_dir = _project_root / _log_dir

LOG_DIR = _log_dir
