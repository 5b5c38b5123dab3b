"""Payment status classification - core business logic for client standing"""

from datetime import date, datetime
from typing import Dict, Union

from aqsati.domain.models import Client, ClientStatus, StatusTier
from aqsati.utils.date_utils import parse_date, start_of_day, whole_months_between

STATUS_COLORS: Dict[StatusTier, str] = {
    StatusTier.PAID: "green",
    StatusTier.CURRENT: "blue",
    StatusTier.LATE: "red",
}

STATUS_LABELS: Dict[str, Dict[StatusTier, str]] = {
    "en": {
        StatusTier.PAID: "Paid",
        StatusTier.CURRENT: "Current",
        StatusTier.LATE: "Late",
    },
    "ar": {
        StatusTier.PAID: "مدفوع",
        StatusTier.CURRENT: "ساري",
        StatusTier.LATE: "متأخر",
    },
}


def status_for(tier: StatusTier) -> ClientStatus:
    return ClientStatus(tier=tier, color=STATUS_COLORS[tier])


def status_label(tier: StatusTier, locale: str = "en") -> str:
    """Human-readable label for a tier; unknown locales fall back to English"""
    labels = STATUS_LABELS.get(locale, STATUS_LABELS["en"])
    return labels[tier]


def classify_status(client: Client, paid_amount: float, now: Union[date, datetime]) -> ClientStatus:
    """
    Classify a client's payment standing as of `now`.

    Rules (first match wins):
    - Remaining <= 0: PAID, regardless of dates
    - Start date unparseable or month count not positive: CURRENT
    - Plan not started yet (today before start date): CURRENT
    - Paid less than (months_passed + 1) installments: LATE
    - Otherwise: CURRENT

    The +1 makes each month's installment due at the start of that month,
    so the first installment is due on the start date itself.
    """
    remaining = client.total - paid_amount
    if remaining <= 0:
        return status_for(StatusTier.PAID)

    if client.months <= 0:
        return status_for(StatusTier.CURRENT)

    monthly = client.total / client.months
    today = start_of_day(now)
    start = parse_date(client.start_date)

    if start is None:
        return status_for(StatusTier.CURRENT)

    months_passed = whole_months_between(start, today)
    if months_passed < 0:
        return status_for(StatusTier.CURRENT)

    expected_amount = (months_passed + 1) * monthly

    if paid_amount < expected_amount:
        return status_for(StatusTier.LATE)

    return status_for(StatusTier.CURRENT)
