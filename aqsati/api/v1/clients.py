"""Client CRUD endpoints with derived status rows"""

import time
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from aqsati.api.dependencies import get_now, get_owner_id, get_request_id, load_client
from aqsati.api.v1.schemas import ClientRequest, ClientResponse, ScheduleItem, ScheduleResponse
from aqsati.config import settings
from aqsati.domain.models import ClientSummary
from aqsati.domain.portfolio import filter_clients, summarize_client, summarize_clients
from aqsati.domain.schedule import build_schedule, monthly_installment, project_end_date
from aqsati.domain.status import status_label
from aqsati.infrastructure.database.repositories import (
    ClientRepository,
    InstallmentRepository,
    to_client,
    to_installment,
)
from aqsati.infrastructure.database.session import get_db
from aqsati.infrastructure.observability.logging import log_portfolio_view
from aqsati.infrastructure.observability.metrics import record_statuses

router = APIRouter()


def client_response(summary: ClientSummary) -> ClientResponse:
    client = summary.client
    return ClientResponse(
        id=client.id,
        name=client.name,
        phone=client.phone,
        total=client.total,
        months=client.months,
        start_date=client.start_date,
        paid=summary.paid,
        remaining=summary.remaining,
        monthly_installment=summary.monthly_installment,
        end_date=summary.end_date,
        status=summary.status.tier,
        status_label=status_label(summary.status.tier, settings.status_locale),
        status_color=summary.status.color,
    )


def _summary_for(db: Session, owner_id: str, client_id: str, now: datetime) -> ClientSummary:
    db_client = load_client(db, owner_id, client_id)
    paid = sum(inst.amount for inst in InstallmentRepository(db).list_for_client(db_client.id))
    return summarize_client(to_client(db_client), float(paid), now)


@router.get("/clients", response_model=List[ClientResponse])
def list_clients(
    request: Request,
    search: Optional[str] = Query(None, description="Name or phone fragment"),
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    """
    List clients with paid/remaining amounts, end date and status.

    Paid sums are aggregated once over all the owner's installments.
    """
    start_time = time.time()

    clients = [to_client(r) for r in ClientRepository(db).list_clients(owner_id)]
    installments = [to_installment(r) for r in InstallmentRepository(db).list_for_owner(owner_id)]
    summaries = summarize_clients(filter_clients(clients, search), installments, now)

    record_statuses(summaries)
    log_portfolio_view(get_request_id(request), owner_id, summaries, (time.time() - start_time) * 1000)

    return [client_response(s) for s in summaries]


@router.post("/clients", response_model=ClientResponse, status_code=201)
def create_client(
    request_body: ClientRequest,
    request: Request,
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    try:
        db_client = ClientRepository(db).create_client(owner_id, request_body.to_draft())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to create client: {e}", extra={"request_id": get_request_id(request)})
        raise

    summary = summarize_client(to_client(db_client), 0.0, now)
    record_statuses([summary])
    return client_response(summary)


@router.get("/clients/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: str,
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    summary = _summary_for(db, owner_id, client_id, now)
    record_statuses([summary])
    return client_response(summary)


@router.put("/clients/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: str,
    request_body: ClientRequest,
    request: Request,
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    """Replace the contract terms of an existing client"""
    db_client = load_client(db, owner_id, client_id)
    try:
        ClientRepository(db).update_client(db_client, request_body.to_draft())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to update client: {e}", extra={"request_id": get_request_id(request)})
        raise

    return client_response(_summary_for(db, owner_id, client_id, now))


@router.delete("/clients/{client_id}", status_code=204)
def delete_client(
    client_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Delete a client together with all of its payments"""
    db_client = load_client(db, owner_id, client_id)
    ClientRepository(db).delete_client(db_client)
    db.commit()
    return Response(status_code=204)


@router.get("/clients/{client_id}/schedule", response_model=ScheduleResponse)
def get_schedule(
    client_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Monthly due schedule; each installment is due at the start of its month"""
    client = to_client(load_client(db, owner_id, client_id))

    return ScheduleResponse(
        client_id=client.id,
        monthly_installment=monthly_installment(client.total, client.months),
        end_date=project_end_date(client.start_date, client.months),
        installments=[
            ScheduleItem(due_date=item.due_date, amount=item.amount)
            for item in build_schedule(client.total, client.months, client.start_date)
        ],
    )
