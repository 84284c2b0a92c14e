"""Application settings using Pydantic Settings.

Centralized configuration for the S corp tax wizard. Everything can be
overridden through environment variables or a .env file.

Submission requires SUBMISSION_ACCESS_KEY to be set; without it the wizard
still works but completed data cannot be sent.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class WizardSettings(BaseSettings):
    """Wizard state storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WIZARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    storage_key: str = Field(default="taxData", description="Key holding the state snapshot")
    sqlite_path: Path = Field(
        default=Path("data/wizard_state.db"),
        description="Path to SQLite database file for snapshots"
    )


class SubmissionSettings(BaseSettings):
    """Outbound submission configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SUBMISSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    endpoint_url: str = Field(
        default="https://api.web3forms.com/submit",
        description="Form submission endpoint"
    )
    access_key: Optional[str] = Field(default=None, description="Form service access key")
    subject: str = Field(
        default="New S Corp Tax Data Submission",
        description="Subject line attached to each submission"
    )
    default_from_name: str = Field(
        default="S Corp Tax Calculator User",
        description="Sender name when no full name was entered"
    )
    timeout_seconds: float = Field(default=10.0, gt=0, description="Request timeout")

    # Rate limiting
    max_submissions: int = Field(default=3, ge=1, description="Submissions allowed per window")
    window_seconds: int = Field(default=3600, ge=1, description="Rate limit window in seconds")


@lru_cache
def get_wizard_settings() -> WizardSettings:
    """
    Get cached wizard settings instance.

    Returns:
        WizardSettings: Cached settings loaded from environment.
    """
    return WizardSettings()


@lru_cache
def get_submission_settings() -> SubmissionSettings:
    """
    Get cached submission settings instance.

    Returns:
        SubmissionSettings: Cached settings loaded from environment.
    """
    settings = SubmissionSettings()
    if not settings.access_key:
        logger.warning("SUBMISSION_ACCESS_KEY is not set; submissions will be refused")
    return settings
