"""
Tax Data Submission.

Sends a completed wizard to the form service as one flat record. The
projection flattens the four sections into string fields and adds the
service metadata (access key, subject, sender name).

Submitters never raise: every outcome comes back as a SubmissionResult.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

import requests

from config.settings import SubmissionSettings
from models.tax_data import ExpensesData, TaxDataState

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of a submission attempt."""
    success: bool
    message: str = ""
    status_code: Optional[int] = None


def build_submission_payload(
    state: TaxDataState,
    settings: SubmissionSettings,
) -> Dict[str, str]:
    """
    Flatten the wizard state into the submission record.

    Missing sections and fields become empty strings.

    Args:
        state: Aggregate wizard state
        settings: Submission settings supplying the metadata fields

    Returns:
        Flat dict of string fields
    """
    personal = state.personal_info
    income = state.income
    expenses = state.expenses
    salary = state.salary

    full_name = personal.full_name if personal else ""
    address = (
        f"{personal.street if personal else ''}, "
        f"{personal.city if personal else ''}, "
        f"{personal.state if personal else ''} "
        f"{personal.zip_code if personal else ''}"
    )
    filing_status = personal.filing_status.value if personal and personal.filing_status else ""

    payload = {
        "access_key": settings.access_key or "",
        "subject": settings.subject,
        "from_name": full_name or settings.default_from_name,
        # Personal information
        "full_name": full_name,
        "email": personal.email if personal else "",
        "phone": personal.phone if personal else "",
        "address": address,
        "tax_id": personal.tax_id if personal else "",
        "filing_status": filing_status,
        # Income information
        "total_income": income.business_revenue if income else "",
        "business_income": income.business_revenue if income else "",
        "investment_income": income.dividend_income if income else "",
        "other_income": income.other_income if income else "",
    }

    # Expenses information
    for name in ExpensesData.currency_fields():
        payload[name] = getattr(expenses, name) if expenses else ""

    # Salary information
    payload.update({
        "industry": salary.industry if salary else "",
        "experience_level": salary.experience_level if salary else "",
        "location": salary.location if salary else "",
        "hours_per_week": str(salary.hours_per_week) if salary and salary.hours_per_week else "",
        "comparable_salary": salary.comparable_salary_note if salary else "",
        "selected_salary": salary.selected_salary if salary else "",
    })
    return payload


class TaxDataSubmitter(Protocol):
    """Anything that can deliver a flattened submission record."""

    def submit(self, payload: Dict[str, str]) -> SubmissionResult:
        ...


class Web3FormsSubmitter:
    """Posts submissions to a Web3Forms-compatible JSON endpoint."""

    def __init__(self, settings: SubmissionSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self._session = session or requests.Session()

    def submit(self, payload: Dict[str, str]) -> SubmissionResult:
        """
        Send payload and report the outcome.

        Success requires a 2xx response whose JSON body has success=true.
        """
        if not payload.get("access_key"):
            logger.warning("[SUBMISSION] Refused: no access key configured")
            return SubmissionResult(success=False, message="Access key is required")

        try:
            response = self._session.post(
                self.settings.endpoint_url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self.settings.timeout_seconds,
            )
        except requests.Timeout:
            logger.warning(
                f"[SUBMISSION] Timeout after {self.settings.timeout_seconds}s"
            )
            return SubmissionResult(success=False, message="Request timed out")
        except requests.RequestException as e:
            logger.error(f"[SUBMISSION] Error | error={e}")
            return SubmissionResult(success=False, message=str(e))

        try:
            body = response.json()
        except ValueError:
            body = {}

        if 200 <= response.status_code < 300 and body.get("success"):
            logger.info(f"[SUBMISSION] Delivered | status={response.status_code}")
            return SubmissionResult(
                success=True,
                message=body.get("message", ""),
                status_code=response.status_code,
            )

        message = body.get("message") or f"HTTP {response.status_code}"
        logger.warning(
            f"[SUBMISSION] Failed | status={response.status_code} | message={message}"
        )
        return SubmissionResult(
            success=False,
            message=message,
            status_code=response.status_code,
        )
