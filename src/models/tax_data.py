"""
Tax wizard data model.

Section records collected by the four wizard steps, plus the aggregate
state that holds all of them together with the wizard cursor.

Currency amounts are kept as the decimal-formatted strings the user typed
(e.g. "1500.00"). Arithmetic parses them with calculator.decimal_math and
never writes back into unrelated fields.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class FilingStatus(str, Enum):
    """IRS filing status options"""
    SINGLE = "single"
    MARRIED_JOINT = "married_joint"
    MARRIED_SEPARATE = "married_separate"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_WIDOW = "qualifying_widow"


class PersonalInfo(BaseModel):
    """Step 1: taxpayer contact and identity details."""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    tax_id: str = Field(default="", description="SSN in XXX-XX-XXXX form")
    filing_status: Optional[FilingStatus] = None

    @field_validator("filing_status", mode="before")
    @classmethod
    def blank_status_is_none(cls, v):
        if v == "":
            return None
        return v


class IncomeData(BaseModel):
    """Step 2: personal and S corporation income."""
    # Personal income
    w2_wages: str = ""
    interest_income: str = ""
    dividend_income: str = ""
    other_income: str = ""

    # S corporation income
    business_revenue: str = ""
    pass_through_income: str = ""
    distributions: str = ""


class ExpensesData(BaseModel):
    """Step 3: S corporation expenses."""
    # Business operating expenses
    rent: str = ""
    utilities: str = ""
    supplies: str = ""
    insurance: str = ""
    advertising: str = ""
    maintenance: str = ""

    # Owner withdrawals
    owner_withdrawals: str = ""

    # Distributions
    shareholder_distributions: str = ""

    # Employee expenses
    employee_salaries: str = ""
    employee_benefits: str = ""
    payroll_taxes: str = ""

    # Travel and vehicle
    business_travel: str = ""
    mileage: str = ""
    vehicle_expenses: str = ""

    # Professional services
    accounting: str = ""
    legal: str = ""
    consulting: str = ""

    other_expenses: str = ""

    notes: str = ""

    @classmethod
    def currency_fields(cls) -> List[str]:
        """Names of the amount fields (everything except free-text notes)."""
        return [name for name in cls.model_fields if name != "notes"]


class SalaryData(BaseModel):
    """Step 4: reasonable salary inputs and the chosen salary."""
    industry: str = ""
    experience_level: str = ""
    location: str = ""
    hours_per_week: Optional[int] = None
    comparable_salary_note: str = ""
    selected_salary: str = ""

    # Range the selection was made from, recorded at submission
    calculated_min_salary: str = ""
    calculated_max_salary: str = ""


FIRST_STEP = 1
LAST_STEP = 4


def is_wizard_step(step: int) -> bool:
    return FIRST_STEP <= step <= LAST_STEP


class TaxDataState(BaseModel):
    """
    Aggregate wizard state.

    Single source of truth for everything the wizard collects. Only the
    transitions in wizard.store produce new instances; current_step is not
    range-checked here (callers keep it within 1..4).
    """
    personal_info: Optional[PersonalInfo] = None
    income: Optional[IncomeData] = None
    expenses: Optional[ExpensesData] = None
    salary: Optional[SalaryData] = None
    current_step: int = 1
    completed_steps: List[int] = Field(default_factory=list)

    @field_validator("completed_steps")
    @classmethod
    def completed_steps_are_a_set(cls, v: List[int]) -> List[int]:
        """Drop steps outside 1..4 and duplicates, keeping order."""
        return list(dict.fromkeys(s for s in v if is_wizard_step(s)))
