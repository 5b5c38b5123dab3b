"""CSV export and import of clients"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from aqsati.api.dependencies import get_now, get_owner_id, get_request_id
from aqsati.api.v1.schemas import ImportResponse
from aqsati.config import settings
from aqsati.domain.csv_transfer import export_clients_csv, export_filename, parse_clients_csv
from aqsati.domain.exceptions import CsvImportError
from aqsati.infrastructure.database.repositories import ClientRepository, to_client
from aqsati.infrastructure.database.session import get_db
from aqsati.infrastructure.observability.metrics import clients_imported_counter

router = APIRouter()


@router.get("/export/clients")
def export_clients(
    owner_id: str = Depends(get_owner_id),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    """Download all clients as CSV (name, phone, total, months, startDate)"""
    clients = [to_client(r) for r in ClientRepository(db).list_clients(owner_id)]
    return Response(
        content=export_clients_csv(clients),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(now.date())}"'},
    )


@router.post("/import/clients", response_model=ImportResponse, status_code=201)
async def import_clients(
    request: Request,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """
    Import clients from a CSV request body.

    The whole file is validated first; any invalid row rejects the import
    with the full list of row errors.
    """
    request_id = get_request_id(request)
    body = await request.body()

    try:
        drafts = parse_clients_csv(body.decode("utf-8"), settings.phone_pattern)
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail={"message": "CSV must be UTF-8 encoded", "errors": []})
    except CsvImportError as e:
        logging.warning(f"CSV import rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})

    try:
        records = ClientRepository(db).create_clients(owner_id, drafts)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"CSV import failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    clients_imported_counter.inc(len(records))
    return ImportResponse(imported=len(records), client_ids=[str(r.id) for r in records])
