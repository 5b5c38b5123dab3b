"""Portfolio aggregation - paid sums, client rows and totals"""

from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Union

from aqsati.domain.models import Client, ClientSummary, Installment, PortfolioTotals, StatusTier
from aqsati.domain.schedule import monthly_installment, project_end_date
from aqsati.domain.status import classify_status


def paid_by_client(installments: Iterable[Installment]) -> Dict[str, float]:
    """Sum payment amounts per client in a single pass"""
    totals: Dict[str, float] = defaultdict(float)
    for inst in installments:
        totals[inst.client_id] += inst.amount
    return dict(totals)


def summarize_client(client: Client, paid: float, now: Union[date, datetime]) -> ClientSummary:
    return ClientSummary(
        client=client,
        paid=paid,
        remaining=client.total - paid,
        monthly_installment=monthly_installment(client.total, client.months),
        end_date=project_end_date(client.start_date, client.months),
        status=classify_status(client, paid, now),
    )


def summarize_clients(
    clients: Iterable[Client],
    installments: Iterable[Installment],
    now: Union[date, datetime],
) -> List[ClientSummary]:
    """Build one summary row per client, preserving client order"""
    paid = paid_by_client(installments)
    return [summarize_client(c, paid.get(c.id, 0.0), now) for c in clients]


def portfolio_totals(clients: List[Client], installments: List[Installment]) -> PortfolioTotals:
    """
    Aggregate receivables across all clients.

    Outstanding is receivables minus everything paid, so overpayments by
    one client reduce the outstanding figure of the whole portfolio.
    """
    total_receivables = sum(c.total for c in clients)
    total_paid = sum(inst.amount for inst in installments)

    return PortfolioTotals(
        total_receivables=total_receivables,
        total_paid=total_paid,
        total_outstanding=total_receivables - total_paid,
        client_count=len(clients),
    )


def late_clients(summaries: Iterable[ClientSummary]) -> List[ClientSummary]:
    """Clients eligible for a payment reminder"""
    return [s for s in summaries if s.status.tier == StatusTier.LATE and s.remaining > 0]


def filter_clients(clients: List[Client], term: str | None) -> List[Client]:
    """Match by case-insensitive name substring or phone substring"""
    if not term:
        return list(clients)

    needle = term.lower()
    return [c for c in clients if needle in c.name.lower() or term in c.phone]
