from .tax_data import (
    FilingStatus,
    PersonalInfo,
    IncomeData,
    ExpensesData,
    SalaryData,
    TaxDataState,
)

__all__ = [
    'FilingStatus',
    'PersonalInfo',
    'IncomeData',
    'ExpensesData',
    'SalaryData',
    'TaxDataState',
]
