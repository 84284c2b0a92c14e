from .reasonable_salary import (
    compute_salary_range,
    default_salary_point,
    SalaryWorksheet,
    INDUSTRY_OPTIONS,
    EXPERIENCE_OPTIONS,
    LOCATION_OPTIONS,
)

__all__ = [
    "compute_salary_range",
    "default_salary_point",
    "SalaryWorksheet",
    "INDUSTRY_OPTIONS",
    "EXPERIENCE_OPTIONS",
    "LOCATION_OPTIONS",
]
