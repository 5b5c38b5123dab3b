"""Portfolio statistics and AI summary report endpoints"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from aqsati.api.dependencies import get_genai_client, get_now, get_owner_id, get_request_id
from aqsati.api.v1.schemas import StatsResponse, SummaryReportResponse
from aqsati.config import settings
from aqsati.domain.exceptions import MessagingServiceError
from aqsati.domain.messaging import report_context
from aqsati.domain.models import PortfolioTotals
from aqsati.domain.portfolio import portfolio_totals, summarize_clients
from aqsati.infrastructure.clients.genai import GenAIClient
from aqsati.infrastructure.database.repositories import ClientRepository, InstallmentRepository, to_client, to_installment
from aqsati.infrastructure.database.session import get_db

router = APIRouter()


def _stats(totals: PortfolioTotals) -> StatsResponse:
    return StatsResponse(
        total_receivables=totals.total_receivables,
        total_paid=totals.total_paid,
        total_outstanding=totals.total_outstanding,
        client_count=totals.client_count,
    )


@router.get("/reports/stats", response_model=StatsResponse)
def get_stats(owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    """Total receivables, collected and outstanding amounts, client count"""
    clients = [to_client(r) for r in ClientRepository(db).list_clients(owner_id)]
    installments = [to_installment(r) for r in InstallmentRepository(db).list_for_owner(owner_id)]
    return _stats(portfolio_totals(clients, installments))


@router.post("/reports/summary", response_model=SummaryReportResponse)
async def create_summary_report(
    request: Request,
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
    genai_client: GenAIClient = Depends(get_genai_client),
):
    """
    Draft a financial analysis of the owner's portfolio.

    Flow:
    1. Aggregate totals and per-client status
    2. Ask the generative language model for a report
    3. Return the report together with the totals it was based on
    """
    request_id = get_request_id(request)

    clients = [to_client(r) for r in ClientRepository(db).list_clients(owner_id)]
    installments = [to_installment(r) for r in InstallmentRepository(db).list_for_owner(owner_id)]
    totals = portfolio_totals(clients, installments)
    summaries = summarize_clients(clients, installments, now)

    try:
        report = await genai_client.generate_summary_report(
            report_context(totals, summaries, settings.status_locale),
            settings.status_locale,
        )
    except MessagingServiceError as e:
        logging.error(f"Report generation failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Report service unavailable")

    return SummaryReportResponse(report=report, stats=_stats(totals))
