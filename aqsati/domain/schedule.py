"""Repayment schedule projection for equal monthly installments"""

from typing import Any, List, Optional

from aqsati.domain.models import ScheduledInstallment
from aqsati.utils.date_utils import DateLike, add_months, parse_date

NOT_AVAILABLE = "N/A"


def project_end_date(start_date: DateLike, months: Any) -> str:
    """
    Project the plan end date: start_date plus `months` calendar months.

    Returns YYYY-MM-DD, or NOT_AVAILABLE when the start date is missing or
    unparseable or months is not a finite number. Fractional months are
    truncated toward zero. Never raises.

    Example:
        ("2024-01-31", 1) → "2024-02-29"
        ("", 5) → "N/A"
    """
    start = parse_date(start_date)
    if start is None:
        return NOT_AVAILABLE

    try:
        whole_months = int(float(months))
        return add_months(start, whole_months).isoformat()
    except (TypeError, ValueError, OverflowError):
        return NOT_AVAILABLE


def monthly_installment(total: float, months: int) -> Optional[float]:
    """Nominal amount due per month, None when the month count is not positive"""
    if months <= 0:
        return None
    return total / months


def build_schedule(total: float, months: int, start_date: DateLike) -> List[ScheduledInstallment]:
    """
    Generate the monthly due schedule for a contract.

    - One entry per month, due at the start of each covered month
    - Amounts rounded to cents; last entry absorbs the rounding remainder

    Example:
        1000 over 3 months → [333.33, 333.33, 333.34]
    """
    start = parse_date(start_date)
    if start is None or total <= 0 or months <= 0:
        return []

    total_cents = round(total * 100)
    base_cents = total_cents // months
    remainder = total_cents % months

    schedule = []
    for i in range(months):
        # Offset from start, not from the previous due date
        due_date = add_months(start, i)
        amount_cents = base_cents + (remainder if i == months - 1 else 0)
        schedule.append(ScheduledInstallment(due_date=due_date, amount=amount_cents / 100))

    return schedule
