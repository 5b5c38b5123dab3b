"""Payment recording and history endpoints"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from aqsati.api.dependencies import get_now, get_owner_id, load_client, parse_uuid
from aqsati.api.v1.schemas import InstallmentRequest, InstallmentResponse
from aqsati.domain.exceptions import InstallmentNotFoundError
from aqsati.domain.models import Installment
from aqsati.infrastructure.database.repositories import InstallmentRepository, to_installment
from aqsati.infrastructure.database.session import get_db
from aqsati.infrastructure.observability.metrics import payments_recorded_counter

router = APIRouter()


def _response(inst: Installment) -> InstallmentResponse:
    return InstallmentResponse(id=inst.id, client_id=inst.client_id, amount=inst.amount, date=inst.date)


@router.post("/clients/{client_id}/installments", response_model=InstallmentResponse, status_code=201)
def record_installment(
    client_id: str,
    request_body: InstallmentRequest,
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    """Record a payment received from a client (defaults to today's date)"""
    db_client = load_client(db, owner_id, client_id)
    paid_on = request_body.date or now.date()

    db_installment = InstallmentRepository(db).add_installment(db_client.id, request_body.amount, paid_on)
    db.commit()
    payments_recorded_counter.inc()

    return _response(to_installment(db_installment))


@router.get("/clients/{client_id}/installments", response_model=List[InstallmentResponse])
def list_installments(
    client_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Payment history for a client, newest first"""
    db_client = load_client(db, owner_id, client_id)
    return [_response(to_installment(r)) for r in InstallmentRepository(db).list_for_client(db_client.id)]


@router.delete("/clients/{client_id}/installments/{installment_id}", status_code=204)
def delete_installment(
    client_id: str,
    installment_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    db_client = load_client(db, owner_id, client_id)
    repo = InstallmentRepository(db)

    db_installment = repo.get_installment(db_client.id, parse_uuid(installment_id, "installment"))
    if db_installment is None:
        raise InstallmentNotFoundError(f"Installment {installment_id} not found")

    repo.delete_installment(db_installment)
    db.commit()
    return Response(status_code=204)
