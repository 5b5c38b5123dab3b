"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional


class StatusTier(str, Enum):
    """Payment standing of a client"""

    PAID = "paid"
    CURRENT = "current"
    LATE = "late"


@dataclass
class Client:
    """Client contract: total owed, split into equal monthly installments"""

    id: str
    name: str
    phone: str
    total: float
    months: int
    start_date: str  # YYYY-MM-DD


@dataclass
class Installment:
    """Payment actually received from a client"""

    id: str
    client_id: str
    amount: float
    date: date


@dataclass
class ClientDraft:
    """Validated client data not yet persisted (form or CSV row)"""

    name: str
    phone: str
    total: float
    months: int
    start_date: str  # YYYY-MM-DD


@dataclass(frozen=True)
class ClientStatus:
    """Output of status classification"""

    tier: StatusTier
    color: str


@dataclass
class ScheduledInstallment:
    """Single due entry in a monthly repayment schedule"""

    due_date: date
    amount: float


@dataclass
class ClientSummary:
    """Per-client row: contract terms plus derived figures"""

    client: Client
    paid: float
    remaining: float
    monthly_installment: Optional[float]
    end_date: str
    status: ClientStatus


@dataclass
class PortfolioTotals:
    """Aggregated figures across all clients of an owner"""

    total_receivables: float
    total_paid: float
    total_outstanding: float
    client_count: int


@dataclass
class ReminderContext:
    """Payment details used to draft a reminder message"""

    name: str
    phone: str
    total: float
    paid: float
    remaining: float
    months: int
    start_date: str
    end_date: str


@dataclass
class ReportClientLine:
    """One client line in a portfolio report"""

    name: str
    total: float
    paid: float
    remaining: float
    status: str


@dataclass
class ReportContext:
    """Portfolio data used to draft a summary report"""

    totals: PortfolioTotals
    clients: List[ReportClientLine]
