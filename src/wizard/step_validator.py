"""
Step completion predicates.

Each predicate takes a (possibly missing) section record and decides
whether the step has enough data for the wizard to move past it.

The income and expense checks only require that some amount was entered;
they do not require any particular field.
"""

from typing import Optional

from models.tax_data import (
    ExpensesData,
    IncomeData,
    PersonalInfo,
    SalaryData,
    TaxDataState,
)

# Values that count as "nothing entered" for amount fields
EMPTY_AMOUNTS = frozenset({"", "0", "0.00"})


def _has_amount(value: Optional[str]) -> bool:
    return bool(value) and value not in EMPTY_AMOUNTS


def validate_personal_info(data: Optional[PersonalInfo]) -> bool:
    """All nine fields, filing status included, must be filled in."""
    if data is None:
        return False
    return all([
        data.full_name,
        data.email,
        data.phone,
        data.street,
        data.city,
        data.state,
        data.zip_code,
        data.tax_id,
        data.filing_status,
    ])


def validate_income(data: Optional[IncomeData]) -> bool:
    """At least one income amount other than blank or zero."""
    if data is None:
        return False
    return any(_has_amount(value) for value in data.model_dump().values())


def validate_expenses(data: Optional[ExpensesData]) -> bool:
    """At least one expense amount other than blank or zero. Notes don't count."""
    if data is None:
        return False
    return any(
        _has_amount(getattr(data, name)) for name in ExpensesData.currency_fields()
    )


def validate_salary(data: Optional[SalaryData]) -> bool:
    """Industry, experience, location, hours and a selected salary are required."""
    if data is None:
        return False
    return all([
        data.industry,
        data.experience_level,
        data.location,
        data.hours_per_week,
        data.selected_salary,
    ])


def is_step_complete(step: int, state: TaxDataState) -> bool:
    """
    Check one wizard step against the current state.

    Args:
        step: Step number, 1 through 4
        state: Aggregate wizard state

    Returns:
        True if the step's section is complete; False for unknown steps.
    """
    if step == 1:
        return validate_personal_info(state.personal_info)
    if step == 2:
        return validate_income(state.income)
    if step == 3:
        return validate_expenses(state.expenses)
    if step == 4:
        return validate_salary(state.salary)
    return False
