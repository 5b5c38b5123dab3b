"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
import datetime
from datetime import date
from typing import List, Optional

from aqsati.config import settings
from aqsati.domain.models import ClientDraft, StatusTier


class ClientRequest(BaseModel):
    """Request body for creating or replacing a client"""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, description="Client display name")
    phone: str = Field(..., pattern=settings.phone_pattern, description="Mobile number")
    total: float = Field(..., gt=0, description="Full amount owed under the contract")
    months: int = Field(..., gt=0, description="Number of equal monthly installments")
    start_date: date = Field(..., description="First installment's due month")

    def to_draft(self) -> ClientDraft:
        return ClientDraft(
            name=self.name,
            phone=self.phone,
            total=self.total,
            months=self.months,
            start_date=self.start_date.isoformat(),
        )


class ClientResponse(BaseModel):
    """Client row with derived payment figures and status"""

    id: str
    name: str
    phone: str
    total: float
    months: int
    start_date: date
    paid: float
    remaining: float
    monthly_installment: Optional[float] = None
    end_date: str  # YYYY-MM-DD or "N/A"
    status: StatusTier
    status_label: str
    status_color: str


class ScheduleItem(BaseModel):
    """Single due entry in a monthly schedule"""

    due_date: date
    amount: float


class ScheduleResponse(BaseModel):
    """Response for GET /v1/clients/{client_id}/schedule"""

    client_id: str
    monthly_installment: Optional[float] = None
    end_date: str
    installments: List[ScheduleItem]


class InstallmentRequest(BaseModel):
    """Request body for recording a payment"""

    amount: float = Field(..., gt=0, description="Amount received")
    date: Optional[datetime.date] = Field(None, description="Payment date, defaults to today")


class InstallmentResponse(BaseModel):
    """Recorded payment"""

    id: str
    client_id: str
    amount: float
    date: datetime.date


class StatsResponse(BaseModel):
    """Response for GET /v1/reports/stats"""

    total_receivables: float
    total_paid: float
    total_outstanding: float
    client_count: int


class SummaryReportResponse(BaseModel):
    """Response for POST /v1/reports/summary"""

    report: str
    stats: StatsResponse


class ReminderResponse(BaseModel):
    """Drafted reminder for one client"""

    client_id: str
    name: str
    phone: str
    message: str
    whatsapp_url: str


class BulkReminderResponse(BaseModel):
    """Response for POST /v1/reminders/late"""

    late_count: int
    reminders: List[ReminderResponse]


class ImportResponse(BaseModel):
    """Response for POST /v1/import/clients"""

    imported: int
    client_ids: List[str]
