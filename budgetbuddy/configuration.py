"""Mini README: Centralised configuration models and helpers for Budget Buddy.

Structure:
    * BudgetBuddySettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``BUDGETBUDDY_``), pick the starting monthly budget, and choose the port
    the HTTP interface binds to. Validation runs once per process.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class BudgetBuddySettings(BaseSettings):
    """Runtime configuration for the Budget Buddy service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and reload behaviour.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    default_monthly_budget: float = Field(
        3000.0,
        description="Monthly budget a fresh store starts with before the user changes it.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING, ...).",
    )

    class Config:
        env_prefix = "BUDGETBUDDY_"
        env_file = ".env"
        case_sensitive = False

    @validator("log_level")
    def _normalise_log_level(cls, value: str) -> str:
        """Upper-case the level name and reject names logging does not know."""

        normalised = value.strip().upper()
        if not isinstance(logging.getLevelName(normalised), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalised


@lru_cache()
def get_settings() -> BudgetBuddySettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return BudgetBuddySettings()
