"""AI-drafted payment reminders with WhatsApp deep links"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from aqsati.api.dependencies import get_genai_client, get_now, get_owner_id, get_request_id, load_client
from aqsati.api.v1.schemas import BulkReminderResponse, ReminderResponse
from aqsati.config import settings
from aqsati.domain.exceptions import MessagingServiceError
from aqsati.domain.messaging import reminder_context, whatsapp_link
from aqsati.domain.models import ClientSummary
from aqsati.domain.portfolio import late_clients, summarize_client, summarize_clients
from aqsati.infrastructure.clients.genai import GenAIClient
from aqsati.infrastructure.database.repositories import ClientRepository, InstallmentRepository, to_client, to_installment
from aqsati.infrastructure.database.session import get_db
from aqsati.infrastructure.observability.logging import log_reminders

router = APIRouter()


async def _draft(genai_client: GenAIClient, summary: ClientSummary) -> ReminderResponse:
    message = await genai_client.generate_reminder_message(reminder_context(summary), settings.status_locale)
    return ReminderResponse(
        client_id=summary.client.id,
        name=summary.client.name,
        phone=summary.client.phone,
        message=message,
        whatsapp_url=whatsapp_link(summary.client.phone, message),
    )


@router.post("/clients/{client_id}/reminder", response_model=ReminderResponse)
async def create_reminder(
    client_id: str,
    request: Request,
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
    genai_client: GenAIClient = Depends(get_genai_client),
):
    """Draft a reminder for one client, whatever their current status"""
    db_client = load_client(db, owner_id, client_id)
    paid = sum(inst.amount for inst in InstallmentRepository(db).list_for_client(db_client.id))
    summary = summarize_client(to_client(db_client), float(paid), now)

    try:
        return await _draft(genai_client, summary)
    except MessagingServiceError as e:
        logging.error(f"Reminder generation failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Message service unavailable")


@router.post("/reminders/late", response_model=BulkReminderResponse)
async def create_late_reminders(
    request: Request,
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
    genai_client: GenAIClient = Depends(get_genai_client),
):
    """
    Draft reminders for every late client with an outstanding balance.

    Drafting stops at the first service failure; nothing partial is returned.
    """
    request_id = get_request_id(request)

    clients = [to_client(r) for r in ClientRepository(db).list_clients(owner_id)]
    installments = [to_installment(r) for r in InstallmentRepository(db).list_for_owner(owner_id)]
    targets = late_clients(summarize_clients(clients, installments, now))

    reminders = []
    try:
        for summary in targets:
            reminders.append(await _draft(genai_client, summary))
    except MessagingServiceError as e:
        logging.error(f"Bulk reminder generation failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Message service unavailable")

    log_reminders(request_id, owner_id, len(targets), len(reminders))
    return BulkReminderResponse(late_count=len(targets), reminders=reminders)
