"""Unit tests for portfolio aggregation"""

from datetime import datetime
from aqsati.domain.models import Client, Installment, StatusTier
from aqsati.domain.portfolio import (
    filter_clients,
    late_clients,
    paid_by_client,
    portfolio_totals,
    summarize_client,
    summarize_clients,
)


def _client(client_id: str, name: str, phone: str, total: float, months: int = 10) -> Client:
    return Client(id=client_id, name=name, phone=phone, total=total, months=months, start_date="2024-01-01")


def test_paid_by_client(sample_installments: list[Installment]):
    assert paid_by_client(sample_installments) == {"c1": 300.0, "c2": 500.0}
    assert paid_by_client([]) == {}


def test_summarize_client(sample_client: Client):
    summary = summarize_client(sample_client, 400.0, datetime(2024, 4, 20))

    assert summary.paid == 400.0
    assert summary.remaining == 800.0
    assert summary.monthly_installment == 100.0
    assert summary.end_date == "2025-01-01"
    assert summary.status.tier == StatusTier.CURRENT


def test_summarize_clients_uses_paid_sums(sample_client: Client, sample_installments: list[Installment]):
    other = _client("c2", "Sara", "01198765432", 500.0)
    idle = _client("c3", "Omar", "01212345678", 1000.0)

    summaries = summarize_clients([sample_client, other, idle], sample_installments, datetime(2024, 4, 20))

    assert [s.client.id for s in summaries] == ["c1", "c2", "c3"]
    assert [s.paid for s in summaries] == [300.0, 500.0, 0.0]
    assert summaries[0].status.tier == StatusTier.LATE  # 300 paid, 400 expected
    assert summaries[1].status.tier == StatusTier.PAID
    assert summaries[2].status.tier == StatusTier.LATE


def test_portfolio_totals(sample_client: Client, sample_installments: list[Installment]):
    other = _client("c2", "Sara", "01198765432", 500.0)

    totals = portfolio_totals([sample_client, other], sample_installments)

    assert totals.total_receivables == 1700.0
    assert totals.total_paid == 800.0
    assert totals.total_outstanding == 900.0
    assert totals.client_count == 2


def test_portfolio_totals_empty():
    totals = portfolio_totals([], [])
    assert totals.total_receivables == 0
    assert totals.client_count == 0


def test_late_clients_selection(sample_client: Client, sample_installments: list[Installment]):
    paid_off = _client("c2", "Sara", "01198765432", 500.0)
    not_started = Client(id="c4", name="Hana", phone="01512345678", total=600, months=6, start_date="2024-09-01")

    summaries = summarize_clients([sample_client, paid_off, not_started], sample_installments, datetime(2024, 4, 20))

    assert [s.client.id for s in late_clients(summaries)] == ["c1"]


def test_filter_clients():
    clients = [
        _client("a", "Ahmed Ali", "01012345678", 100),
        _client("b", "Sara Hassan", "01198765432", 100),
    ]

    assert filter_clients(clients, None) == clients
    assert filter_clients(clients, "") == clients
    assert [c.id for c in filter_clients(clients, "ahmed")] == ["a"]
    assert [c.id for c in filter_clients(clients, "HASSAN")] == ["b"]
    assert [c.id for c in filter_clients(clients, "987")] == ["b"]
    assert filter_clients(clients, "zzz") == []
