"""
Tax Wizard Controller.

Drives the four-step S corp tax wizard:

    Personal Information -> Income -> Expenses -> Reasonable Salary -> Complete

Forward movement is gated on the step validator. Submitting a step stores
its section, marks it completed and advances the cursor. The wizard is
complete once the last step is submitted and every step's data holds up.
Users can jump back to any completed step but never past the first
incomplete one, and cannot submit a step they cannot reach.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from calculator.reasonable_salary import SalaryWorksheet
from config.settings import SubmissionSettings, get_submission_settings
from models.tax_data import (
    ExpensesData,
    IncomeData,
    PersonalInfo,
    SalaryData,
    TaxDataState,
)
from utils.rate_limiter import RateLimitConfig, RateLimiter, RateLimitExceededError
from wizard.step_validator import is_step_complete
from wizard.store import TaxDataStore
from wizard.submission import (
    SubmissionResult,
    TaxDataSubmitter,
    build_submission_payload,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WizardStep:
    """Static description of one wizard step."""
    id: int
    title: str
    description: str
    section: Type[BaseModel]


WIZARD_STEPS = (
    WizardStep(1, "Personal Information", "Enter your personal and contact details", PersonalInfo),
    WizardStep(2, "Income", "Enter your income details", IncomeData),
    WizardStep(3, "Expenses", "Enter your business expenses", ExpensesData),
    WizardStep(4, "Reasonable Salary", "Calculate your reasonable salary", SalaryData),
)
TOTAL_STEPS = len(WIZARD_STEPS)
ALL_STEPS = [step.id for step in WIZARD_STEPS]

SectionInput = Union[BaseModel, Mapping[str, Any]]


class TaxWizard:
    """
    Step sequencing for the tax wizard.

    The wizard does not hold state of its own; everything lives in the
    TaxDataStore it is given, so a restored store resumes where the user
    left off.
    """

    def __init__(
        self,
        store: TaxDataStore,
        rate_limiter: Optional[RateLimiter] = None,
        submission_settings: Optional[SubmissionSettings] = None,
        session_id: str = "global",
    ):
        """
        Initialize the wizard.

        Args:
            store: Store owning the aggregate state
            rate_limiter: Submission limiter; built from submission settings
                when omitted
            submission_settings: Settings for outbound submissions
            session_id: Identifier used for rate limiting
        """
        self._store = store
        self._submission_settings = submission_settings
        self._rate_limiter = rate_limiter
        self._session_id = session_id

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def store(self) -> TaxDataStore:
        return self._store

    @property
    def state(self) -> TaxDataState:
        return self._store.state

    @property
    def current_step(self) -> int:
        return self._store.current_step

    @property
    def completed_steps(self) -> List[int]:
        return self._store.completed_steps

    @property
    def steps(self) -> List[WizardStep]:
        return list(WIZARD_STEPS)

    @property
    def is_complete(self) -> bool:
        """True once every step has been marked completed."""
        completed = set(self._store.completed_steps)
        return all(step in completed for step in ALL_STEPS)

    @property
    def progress_percentage(self) -> float:
        """Cursor position as a percentage: step 1 is 0, the last step 100."""
        return (self.current_step - 1) / (TOTAL_STEPS - 1) * 100

    def is_step_reachable(self, step: int) -> bool:
        """
        Whether direct selection of step is allowed.

        Reachable steps are the completed ones, the current one, and the
        lowest incomplete step that directly follows a completed step.
        """
        completed = self._store.completed_steps
        if step in completed or step == self.current_step:
            return True
        following = [
            s + 1 for s in completed
            if s + 1 <= TOTAL_STEPS and s + 1 not in completed
        ]
        return bool(following) and step == min(following)

    def get_step_status(self) -> List[Dict[str, Any]]:
        """Per-step summary for rendering the step indicator."""
        completed = self._store.completed_steps
        return [
            {
                "id": step.id,
                "title": step.title,
                "description": step.description,
                "is_current": step.id == self.current_step,
                "is_completed": step.id in completed,
                "is_reachable": self.is_step_reachable(step.id),
                "is_valid": is_step_complete(step.id, self.state),
            }
            for step in WIZARD_STEPS
        ]

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    def submit_step(self, step: int, data: SectionInput) -> bool:
        """
        Store a step's section data and move on if it is complete.

        The section is stored even when incomplete so partial progress is
        kept. An incomplete section leaves the cursor where it is. Steps
        that cannot be selected directly are refused without any change,
        and so is data that does not fit the step's section.

        Args:
            step: Step number the data belongs to
            data: Section model or a mapping of its fields

        Returns:
            True if the step was completed, False if it cannot advance.
        """
        if step < 1 or step > TOTAL_STEPS:
            logger.warning(f"Ignoring submission for unknown step {step}")
            return False
        if not self.is_step_reachable(step):
            logger.warning(
                f"Ignoring submission for step {step}; "
                f"step {self.current_step} must be completed first"
            )
            return False

        try:
            section = self._coerce_section(step, data)
        except ValidationError as e:
            logger.warning(f"Invalid data for step {step}: {e.error_count()} error(s)")
            return False
        if step == 4:
            section = self._with_salary_range(section)
        self._store_section(step, section)

        if not is_step_complete(step, self.state):
            logger.info(f"Step {step} is incomplete; staying on step {self.current_step}")
            return False

        self._store.add_completed_step(step)
        if step < TOTAL_STEPS:
            self._store.set_current_step(step + 1)
        elif self.complete():
            logger.info("Tax wizard completed")
        return True

    def go_to_step(self, step: int) -> bool:
        """
        Jump directly to a step.

        Returns:
            True if the cursor moved; False if the step is not reachable
            (the request is ignored).
        """
        if not self.is_step_reachable(step):
            logger.debug(f"Step {step} is not reachable from {self.current_step}")
            return False
        self._store.set_current_step(step)
        return True

    def next_step(self) -> bool:
        """Advance one step if the current step is complete."""
        current = self.current_step
        if current >= TOTAL_STEPS or not is_step_complete(current, self.state):
            return False
        self._store.set_current_step(current + 1)
        return True

    def previous_step(self) -> int:
        """Go back one step, stopping at step 1. Completion is untouched."""
        if self.current_step > 1:
            self._store.set_current_step(self.current_step - 1)
        return self.current_step

    def complete(self) -> bool:
        """Mark the wizard complete if every step's data is complete."""
        if not self._all_steps_valid():
            return False
        self._store.set_completed_steps(ALL_STEPS)
        return True

    def reset(self) -> None:
        """Discard all collected data and the saved snapshot."""
        self._store.reset()

    # =========================================================================
    # SALARY
    # =========================================================================

    def salary_worksheet(self) -> SalaryWorksheet:
        """Worksheet seeded from the stored salary section."""
        return SalaryWorksheet.from_salary_data(self._store.salary)

    def _with_salary_range(self, data: SalaryData) -> SalaryData:
        """Record the calculated range and default the selection if missing."""
        worksheet = SalaryWorksheet.from_salary_data(data)
        derived = worksheet.to_salary_data()
        update = {
            "calculated_min_salary": derived.calculated_min_salary,
            "calculated_max_salary": derived.calculated_max_salary,
        }
        if not data.selected_salary:
            update["selected_salary"] = derived.selected_salary
        logger.debug(f"Reasonable salary range {worksheet.range_label}")
        return data.model_copy(update=update)

    # =========================================================================
    # SUBMISSION
    # =========================================================================

    def _get_submission_settings(self) -> SubmissionSettings:
        if self._submission_settings is None:
            self._submission_settings = get_submission_settings()
        return self._submission_settings

    def _get_rate_limiter(self) -> RateLimiter:
        if self._rate_limiter is None:
            settings = self._get_submission_settings()
            self._rate_limiter = RateLimiter(RateLimitConfig(
                max_requests=settings.max_submissions,
                window_seconds=settings.window_seconds,
            ))
        return self._rate_limiter

    def submit(self, submitter: TaxDataSubmitter) -> SubmissionResult:
        """
        Send the completed wizard through submitter.

        Refused when the wizard is not complete or the rate limit has been
        reached.
        """
        if not self.is_complete or not self._all_steps_valid():
            return SubmissionResult(success=False, message="All steps must be completed first")

        limiter = self._get_rate_limiter()
        try:
            limiter.enforce(self._session_id)
        except RateLimitExceededError as e:
            minutes = max(1, round(e.retry_after / 60))
            unit = "minute" if minutes == 1 else "minutes"
            return SubmissionResult(
                success=False,
                message=f"Rate limit exceeded. Please try again in {minutes} {unit}.",
            )

        payload = build_submission_payload(self.state, self._get_submission_settings())
        result = submitter.submit(payload)
        if result.success:
            limiter.record_request(self._session_id)
        return result

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _all_steps_valid(self) -> bool:
        return all(is_step_complete(step, self.state) for step in ALL_STEPS)

    def _coerce_section(self, step: int, data: SectionInput) -> BaseModel:
        model = WIZARD_STEPS[step - 1].section
        if isinstance(data, model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump()
        return model.model_validate(data)

    def _store_section(self, step: int, section: BaseModel) -> None:
        if step == 1:
            self._store.set_personal_info(section)
        elif step == 2:
            self._store.set_income(section)
        elif step == 3:
            self._store.set_expenses(section)
        else:
            self._store.set_salary(section)
