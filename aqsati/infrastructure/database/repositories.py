"""Data access layer for clients and installments"""

import uuid
from datetime import date
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from aqsati.infrastructure.database.models import ClientRecord, InstallmentRecord
from aqsati.domain.models import Client, ClientDraft, Installment


def to_client(record: ClientRecord) -> Client:
    return Client(
        id=str(record.id),
        name=record.name,
        phone=record.phone,
        total=float(record.total),
        months=record.months,
        start_date=record.start_date.isoformat(),
    )


def to_installment(record: InstallmentRecord) -> Installment:
    return Installment(
        id=str(record.id),
        client_id=str(record.client_id),
        amount=float(record.amount),
        date=record.date,
    )


class ClientRepository:
    """Repository for client contracts, always scoped by owner"""

    def __init__(self, db: Session):
        self.db = db

    def create_client(self, owner_id: str, draft: ClientDraft) -> ClientRecord:
        db_client = ClientRecord(
            owner_id=owner_id,
            name=draft.name,
            phone=draft.phone,
            total=draft.total,
            months=draft.months,
            start_date=date.fromisoformat(draft.start_date),
        )
        self.db.add(db_client)
        self.db.flush()  # Get ID without committing
        return db_client

    def create_clients(self, owner_id: str, drafts: Iterable[ClientDraft]) -> List[ClientRecord]:
        """Batch insert; caller commits or rolls back the whole batch"""
        return [self.create_client(owner_id, draft) for draft in drafts]

    def get_client(self, owner_id: str, client_id: uuid.UUID) -> Optional[ClientRecord]:
        return (
            self.db.query(ClientRecord)
            .filter(ClientRecord.id == client_id, ClientRecord.owner_id == owner_id)
            .first()
        )

    def list_clients(self, owner_id: str) -> List[ClientRecord]:
        return (
            self.db.query(ClientRecord)
            .filter(ClientRecord.owner_id == owner_id)
            .order_by(ClientRecord.name, ClientRecord.created_at)
            .all()
        )

    def update_client(self, db_client: ClientRecord, draft: ClientDraft) -> ClientRecord:
        db_client.name = draft.name
        db_client.phone = draft.phone
        db_client.total = draft.total
        db_client.months = draft.months
        db_client.start_date = date.fromisoformat(draft.start_date)
        self.db.flush()
        return db_client

    def delete_client(self, db_client: ClientRecord) -> None:
        """Delete client; installments go with it through the ORM cascade"""
        self.db.delete(db_client)
        self.db.flush()


class InstallmentRepository:
    """Repository for recorded payments"""

    def __init__(self, db: Session):
        self.db = db

    def add_installment(self, client_id: uuid.UUID, amount: float, paid_on: date) -> InstallmentRecord:
        db_installment = InstallmentRecord(client_id=client_id, amount=amount, date=paid_on)
        self.db.add(db_installment)
        self.db.flush()
        return db_installment

    def list_for_client(self, client_id: uuid.UUID) -> List[InstallmentRecord]:
        """Payment history, newest first"""
        return (
            self.db.query(InstallmentRecord)
            .filter(InstallmentRecord.client_id == client_id)
            .order_by(InstallmentRecord.date.desc(), InstallmentRecord.created_at.desc())
            .all()
        )

    def list_for_owner(self, owner_id: str) -> List[InstallmentRecord]:
        return (
            self.db.query(InstallmentRecord)
            .join(ClientRecord, InstallmentRecord.client_id == ClientRecord.id)
            .filter(ClientRecord.owner_id == owner_id)
            .all()
        )

    def get_installment(self, client_id: uuid.UUID, installment_id: uuid.UUID) -> Optional[InstallmentRecord]:
        return (
            self.db.query(InstallmentRecord)
            .filter(InstallmentRecord.id == installment_id, InstallmentRecord.client_id == client_id)
            .first()
        )

    def delete_installment(self, db_installment: InstallmentRecord) -> None:
        self.db.delete(db_installment)
        self.db.flush()
