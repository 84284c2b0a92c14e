"""Pytest configuration and fixtures for test suite."""

import sys
import tempfile
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def temp_db():
    """Create a temporary database path for testing."""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def personal_info():
    """A fully filled-in personal information section."""
    from models.tax_data import PersonalInfo, FilingStatus
    return PersonalInfo(
        full_name="Jane Doe",
        email="jane@example.com",
        phone="(555) 123-4567",
        street="12 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
        tax_id="123-45-6789",
        filing_status=FilingStatus.SINGLE,
    )


@pytest.fixture
def income():
    """Income section with a single non-zero amount."""
    from models.tax_data import IncomeData
    return IncomeData(business_revenue="250000.00", w2_wages="0.00")


@pytest.fixture
def expenses():
    """Expenses section with a couple of amounts."""
    from models.tax_data import ExpensesData
    return ExpensesData(rent="24000", accounting="1500.50", notes="Home office")


@pytest.fixture
def salary():
    """Salary section as chosen on the worksheet."""
    from models.tax_data import SalaryData
    return SalaryData(
        industry="technology",
        experience_level="mid",
        location="urban",
        hours_per_week=40,
        comparable_salary_note="Similar roles pay 120k",
        selected_salary="126000",
    )
