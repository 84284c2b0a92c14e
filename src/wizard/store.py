"""
Tax Data Store.

Holds the aggregate wizard state and exposes the closed set of transitions
that may change it. Each transition is a pure function (state, payload) ->
new state; TaxDataStore applies them to the state it owns and writes the
result through to persistence.

Transitions do not validate section payloads. Callers check
wizard.step_validator before moving the cursor forward. Completion
transitions ignore step numbers outside 1..4.
"""

import logging
from typing import Iterable, List, Optional

from database.wizard_persistence import WizardStatePersistence
from models.tax_data import (
    ExpensesData,
    IncomeData,
    PersonalInfo,
    SalaryData,
    TaxDataState,
    is_wizard_step,
)

logger = logging.getLogger(__name__)


# =========================================================================
# PURE TRANSITIONS
# =========================================================================

def set_personal_info(state: TaxDataState, data: PersonalInfo) -> TaxDataState:
    return state.model_copy(update={"personal_info": data})


def set_income(state: TaxDataState, data: IncomeData) -> TaxDataState:
    return state.model_copy(update={"income": data})


def set_expenses(state: TaxDataState, data: ExpensesData) -> TaxDataState:
    return state.model_copy(update={"expenses": data})


def set_salary(state: TaxDataState, data: SalaryData) -> TaxDataState:
    return state.model_copy(update={"salary": data})


def set_current_step(state: TaxDataState, step: int) -> TaxDataState:
    """Move the cursor. Not clamped; callers keep it within 1..4."""
    return state.model_copy(update={"current_step": step})


def set_completed_steps(state: TaxDataState, steps: Iterable[int]) -> TaxDataState:
    """Replace the completed set wholesale. Duplicates and unknown steps are dropped."""
    kept = dict.fromkeys(s for s in steps if is_wizard_step(s))
    return state.model_copy(update={"completed_steps": list(kept)})


def add_completed_step(state: TaxDataState, step: int) -> TaxDataState:
    """
    Mark one step completed.

    Returns state itself if the step is already marked or is not a
    wizard step.
    """
    if step in state.completed_steps:
        return state
    if not is_wizard_step(step):
        logger.warning(f"Ignoring completion of unknown step {step}")
        return state
    return state.model_copy(update={"completed_steps": [*state.completed_steps, step]})


def reset_state() -> TaxDataState:
    return TaxDataState()


# =========================================================================
# STORE
# =========================================================================

class TaxDataStore:
    """
    Owner of the wizard's aggregate state.

    The store is created once per session, either from a persisted
    snapshot or empty. Pass persistence=None for a purely in-memory store.
    """

    def __init__(
        self,
        persistence: Optional[WizardStatePersistence] = None,
        initial_state: Optional[TaxDataState] = None,
    ):
        """
        Initialize the store.

        Args:
            persistence: Snapshot persistence for write-through saves.
            initial_state: Explicit starting state. When omitted the state
                is loaded from persistence, or defaults if there is none.
        """
        self._persistence = persistence
        if initial_state is not None:
            self._state = initial_state
        elif persistence is not None:
            self._state = persistence.load()
        else:
            self._state = TaxDataState()

    def _apply(self, new_state: TaxDataState) -> TaxDataState:
        """Adopt new_state and save it. A no-op transition saves nothing."""
        if new_state is self._state:
            return new_state
        self._state = new_state
        if self._persistence is not None:
            self._persistence.save(new_state)
        return new_state

    # Selectors

    @property
    def state(self) -> TaxDataState:
        return self._state

    @property
    def personal_info(self) -> Optional[PersonalInfo]:
        return self._state.personal_info

    @property
    def income(self) -> Optional[IncomeData]:
        return self._state.income

    @property
    def expenses(self) -> Optional[ExpensesData]:
        return self._state.expenses

    @property
    def salary(self) -> Optional[SalaryData]:
        return self._state.salary

    @property
    def current_step(self) -> int:
        return self._state.current_step

    @property
    def completed_steps(self) -> List[int]:
        return list(self._state.completed_steps)

    # Transitions

    def set_personal_info(self, data: PersonalInfo) -> TaxDataState:
        return self._apply(set_personal_info(self._state, data))

    def set_income(self, data: IncomeData) -> TaxDataState:
        return self._apply(set_income(self._state, data))

    def set_expenses(self, data: ExpensesData) -> TaxDataState:
        return self._apply(set_expenses(self._state, data))

    def set_salary(self, data: SalaryData) -> TaxDataState:
        return self._apply(set_salary(self._state, data))

    def set_current_step(self, step: int) -> TaxDataState:
        return self._apply(set_current_step(self._state, step))

    def set_completed_steps(self, steps: Iterable[int]) -> TaxDataState:
        return self._apply(set_completed_steps(self._state, steps))

    def add_completed_step(self, step: int) -> TaxDataState:
        return self._apply(add_completed_step(self._state, step))

    def reset(self) -> TaxDataState:
        """Return to the default state and delete the saved snapshot."""
        self._state = reset_state()
        if self._persistence is not None:
            self._persistence.clear()
        logger.info("Wizard state reset")
        return self._state
