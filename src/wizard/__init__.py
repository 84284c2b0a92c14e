"""S Corp Tax Wizard.

Four-step guided collection of personal information, income, S corporation
expenses and a reasonable owner salary, with progress saved after every
change.
"""

from wizard.store import TaxDataStore
from wizard.step_validator import (
    is_step_complete,
    validate_personal_info,
    validate_income,
    validate_expenses,
    validate_salary,
)
from wizard.controller import TaxWizard, WizardStep, WIZARD_STEPS
from wizard.submission import (
    SubmissionResult,
    TaxDataSubmitter,
    Web3FormsSubmitter,
    build_submission_payload,
)

__all__ = [
    "TaxDataStore",
    "is_step_complete",
    "validate_personal_info",
    "validate_income",
    "validate_expenses",
    "validate_salary",
    "TaxWizard",
    "WizardStep",
    "WIZARD_STEPS",
    "SubmissionResult",
    "TaxDataSubmitter",
    "Web3FormsSubmitter",
    "build_submission_payload",
    "create_tax_wizard",
]


def create_tax_wizard(session_id: str = "global") -> TaxWizard:
    """
    Build a wizard backed by the configured snapshot persistence.

    Returns:
        TaxWizard: Wizard resuming from the saved state, if any.
    """
    from database.wizard_persistence import get_wizard_persistence

    store = TaxDataStore(persistence=get_wizard_persistence())
    return TaxWizard(store, session_id=session_id)
