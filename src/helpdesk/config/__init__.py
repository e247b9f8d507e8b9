"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="helpdesk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port", ge=1, le=65535)
    api_prefix: str = Field(default="/api", description="Prefix for all REST routes")

    # ========== Database ==========
    database_url: str = Field(
        default="sqlite+aiosqlite:///./helpdesk.db",
        description="Async SQLAlchemy connection URL (sqlite+aiosqlite or postgresql+asyncpg)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Sample data ==========
    seed_data_path: Path = Field(
        default=Path("data/sample_data.yaml"),
        description="YAML file with sample tickets and comments for init_db"
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production", "test"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Normalize to a leading slash and no trailing slash ('' for root)."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# ========== Constants ==========

class Priority(str):
    """Ticket priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TicketStatus(str):
    """Ticket lifecycle statuses."""
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class SLALabel(str):
    """Fixed SLA status labels; the remaining-hours label is formatted."""
    COMPLETED = "Completed"
    OVERDUE = "Overdue"
    DUE_SOON = "Due Soon"
    REMAINING = "{hours}h remaining"


DEFAULT_CATEGORY = "general"
DEFAULT_ASSIGNEE = "Unassigned"
DEFAULT_SLA_HOURS = 24
MAX_SLA_HOURS = 2**31 - 1
DUE_SOON_WINDOW_HOURS = 2
TICKET_ID_PREFIX = "TKT-"


# ========== Lists for validation ==========

VALID_PRIORITIES = [
    Priority.LOW, Priority.MEDIUM,
    Priority.HIGH, Priority.URGENT
]
VALID_STATUSES = [
    TicketStatus.OPEN, TicketStatus.IN_PROGRESS,
    TicketStatus.RESOLVED, TicketStatus.CLOSED
]
COMPLETED_STATUSES = [TicketStatus.RESOLVED, TicketStatus.CLOSED]
ACTIVE_STATUSES = [TicketStatus.OPEN, TicketStatus.IN_PROGRESS]
