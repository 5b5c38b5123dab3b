"""Dependency injection for FastAPI endpoints"""

import uuid
from datetime import datetime

from fastapi import Header, HTTPException, Request
from sqlalchemy.orm import Session

from aqsati.domain.exceptions import ClientNotFoundError
from aqsati.infrastructure.clients.genai import GenAIClient
from aqsati.infrastructure.database.models import ClientRecord
from aqsati.infrastructure.database.repositories import ClientRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_owner_id(x_user_id: str | None = Header(default=None)) -> str:
    """Authenticated user id, set by the upstream identity provider"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-ID header")
    return x_user_id


def get_now() -> datetime:
    """Current instant used for status classification"""
    return datetime.now()


def get_genai_client() -> GenAIClient:
    """Provide generative language client instance"""
    return GenAIClient()


def parse_uuid(value: str, label: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")


def load_client(db: Session, owner_id: str, client_id: str) -> ClientRecord:
    """Fetch an owner's client or raise ClientNotFoundError"""
    db_client = ClientRepository(db).get_client(owner_id, parse_uuid(client_id, "client"))
    if db_client is None:
        raise ClientNotFoundError(f"Client {client_id} not found")
    return db_client
