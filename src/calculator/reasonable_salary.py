"""
Reasonable S Corp Salary Calculator.

The IRS expects S corporation owner-employees to pay themselves a
reasonable salary before taking distributions. This module derives an
annual salary range from industry, experience, geography and hours worked,
and a default selection in the middle of that range.

All arithmetic is done in Decimal so the same inputs always produce the
same outputs.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional, Tuple, Union

from calculator.decimal_math import (
    format_whole_dollars,
    parse_currency,
    round_to_nearest,
    to_decimal,
)
from models.tax_data import SalaryData

logger = logging.getLogger(__name__)

SalaryRange = Tuple[int, int]

FULL_TIME_HOURS = 40
SALARY_INCREMENT = 1000

# Base annual salary ranges by industry (USD)
INDUSTRY_SALARY_RANGES: Dict[str, SalaryRange] = {
    "technology": (60000, 150000),
    "healthcare": (50000, 180000),
    "financial": (65000, 160000),
    "construction": (45000, 120000),
    "retail": (40000, 100000),
    "manufacturing": (45000, 110000),
    "consulting": (70000, 170000),
    "marketing": (50000, 130000),
    "legal": (70000, 190000),
    "education": (40000, 90000),
    "real-estate": (50000, 140000),
    "food-service": (35000, 80000),
    "other": (45000, 120000),
}
DEFAULT_SALARY_RANGE: SalaryRange = (45000, 120000)

EXPERIENCE_MULTIPLIERS: Dict[str, Decimal] = {
    "entry": Decimal("0.8"),
    "mid": Decimal("1.0"),
    "senior": Decimal("1.3"),
    "expert": Decimal("1.6"),
}

LOCATION_MULTIPLIERS: Dict[str, Decimal] = {
    "northeast": Decimal("1.15"),
    "southeast": Decimal("0.95"),
    "midwest": Decimal("0.9"),
    "southwest": Decimal("0.95"),
    "west": Decimal("1.25"),
    "rural": Decimal("0.8"),
    "suburban": Decimal("1.0"),
    "urban": Decimal("1.2"),
    "international": Decimal("1.0"),
}

NEUTRAL_MULTIPLIER = Decimal("1.0")

# Display labels for the option lists
INDUSTRY_OPTIONS: Dict[str, str] = {
    "technology": "Technology & Software",
    "healthcare": "Healthcare & Medical",
    "financial": "Financial Services",
    "construction": "Construction & Contracting",
    "retail": "Retail & E-commerce",
    "manufacturing": "Manufacturing",
    "consulting": "Consulting Services",
    "marketing": "Marketing & Advertising",
    "legal": "Legal Services",
    "education": "Education & Training",
    "real-estate": "Real Estate",
    "food-service": "Food Service & Hospitality",
    "other": "Other",
}

EXPERIENCE_OPTIONS: Dict[str, str] = {
    "entry": "Entry Level (0-2 years)",
    "mid": "Mid-Level (3-5 years)",
    "senior": "Senior Level (6-10 years)",
    "expert": "Expert Level (10+ years)",
}

LOCATION_OPTIONS: Dict[str, str] = {
    "northeast": "Northeast US",
    "southeast": "Southeast US",
    "midwest": "Midwest US",
    "southwest": "Southwest US",
    "west": "West Coast",
    "rural": "Rural Areas",
    "suburban": "Suburban Areas",
    "urban": "Major Urban Centers",
    "international": "International",
}


def compute_salary_range(
    industry: str,
    experience_level: str,
    location: str,
    hours_per_week: Union[int, float, Decimal],
) -> SalaryRange:
    """
    Calculate the reasonable salary range.

    Each bound is base * experience * location * (hours / 40), rounded to
    the nearest 1,000. Unknown keys fall back to the default range and a
    neutral multiplier. Hours are not clamped.

    Args:
        industry: Industry key (see INDUSTRY_SALARY_RANGES)
        experience_level: entry, mid, senior or expert
        location: Region key (see LOCATION_MULTIPLIERS)
        hours_per_week: Hours worked per week

    Returns:
        (low, high) annual salary

    Examples:
        >>> compute_salary_range("technology", "mid", "urban", 40)
        (72000, 180000)
        >>> compute_salary_range("technology", "entry", "rural", 20)
        (19000, 48000)
    """
    base_low, base_high = INDUSTRY_SALARY_RANGES.get(industry, DEFAULT_SALARY_RANGE)
    exp_multi = EXPERIENCE_MULTIPLIERS.get(experience_level, NEUTRAL_MULTIPLIER)
    loc_multi = LOCATION_MULTIPLIERS.get(location, NEUTRAL_MULTIPLIER)

    # Pro-rated for part-time
    hours_multiplier = to_decimal(hours_per_week) / FULL_TIME_HOURS

    factor = exp_multi * loc_multi * hours_multiplier
    low = round_to_nearest(base_low * factor, SALARY_INCREMENT)
    high = round_to_nearest(base_high * factor, SALARY_INCREMENT)
    return int(low), int(high)


def default_salary_point(salary_range: SalaryRange) -> int:
    """
    Middle of the range, rounded half-up to a whole dollar.

    Examples:
        >>> default_salary_point((19000, 48000))
        33500
    """
    low, high = salary_range
    return int(round_to_nearest(Decimal(low + high) / 2, 1))


@dataclass
class SalaryWorksheet:
    """
    Live salary selection for step 4.

    Changing any of industry, experience level, location or hours
    recomputes the range and moves the selection back to the midpoint.
    The user may then pick another value inside the range in steps of
    1,000.
    """
    industry: str = ""
    experience_level: str = ""
    location: str = ""
    hours_per_week: Optional[int] = FULL_TIME_HOURS
    comparable_salary_note: str = ""
    salary_range: SalaryRange = (0, 0)
    selected_salary: int = 0

    def __post_init__(self):
        self.recalculate()

    @classmethod
    def from_salary_data(cls, data: Optional[SalaryData]) -> "SalaryWorksheet":
        """Seed a worksheet from a stored section, keeping its selection."""
        if data is None:
            return cls()
        worksheet = cls(
            industry=data.industry,
            experience_level=data.experience_level,
            location=data.location,
            hours_per_week=data.hours_per_week or FULL_TIME_HOURS,
            comparable_salary_note=data.comparable_salary_note,
        )
        if data.selected_salary:
            selected = parse_currency(data.selected_salary)
            if selected is None:
                logger.warning(
                    f"Ignoring unparsable selected salary {data.selected_salary!r}"
                )
            else:
                worksheet.selected_salary = int(selected)
        return worksheet

    @property
    def range_label(self) -> str:
        """Range for display, e.g. "$72,000 - $180,000"."""
        low, high = self.salary_range
        return f"{format_whole_dollars(low)} - {format_whole_dollars(high)}"

    @property
    def effective_hours(self) -> int:
        """Hours used for the calculation; missing or zero means full time."""
        return self.hours_per_week or FULL_TIME_HOURS

    def recalculate(self) -> SalaryRange:
        """Recompute the range and reset the selection to its midpoint."""
        self.salary_range = compute_salary_range(
            self.industry,
            self.experience_level,
            self.location,
            self.effective_hours,
        )
        self.selected_salary = default_salary_point(self.salary_range)
        return self.salary_range

    def set_industry(self, industry: str) -> SalaryRange:
        self.industry = industry
        return self.recalculate()

    def set_experience_level(self, experience_level: str) -> SalaryRange:
        self.experience_level = experience_level
        return self.recalculate()

    def set_location(self, location: str) -> SalaryRange:
        self.location = location
        return self.recalculate()

    def set_hours_per_week(self, hours_per_week: Optional[int]) -> SalaryRange:
        self.hours_per_week = hours_per_week
        return self.recalculate()

    def select_salary(self, value: Union[int, Decimal]) -> int:
        """
        Choose a salary within the current range.

        Values outside the range are clamped to it; values inside are
        snapped to the nearest 1,000 step counted from the low bound.
        """
        low, high = self.salary_range
        offset = round_to_nearest(to_decimal(value) - low, SALARY_INCREMENT)
        chosen = int(low + offset)
        if high >= low:
            chosen = max(low, min(high, chosen))
        self.selected_salary = chosen
        return chosen

    def to_salary_data(self) -> SalaryData:
        """Section record for the aggregate store."""
        low, high = self.salary_range
        return SalaryData(
            industry=self.industry,
            experience_level=self.experience_level,
            location=self.location,
            hours_per_week=self.hours_per_week,
            comparable_salary_note=self.comparable_salary_note,
            selected_salary=str(self.selected_salary),
            calculated_min_salary=str(low),
            calculated_max_salary=str(high),
        )
