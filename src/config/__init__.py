"""Configuration module for the tax wizard."""

from .settings import (
    SubmissionSettings,
    WizardSettings,
    get_submission_settings,
    get_wizard_settings,
)

__all__ = [
    "SubmissionSettings",
    "WizardSettings",
    "get_submission_settings",
    "get_wizard_settings",
]
