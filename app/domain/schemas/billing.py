from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from app.domain.models import BillingResult, DayRecord, PanelStatus
from app.domain.schemas.panel import PanelEvent, PanelRecord


class BillingRequest(BaseModel):
    year: int = Field(..., ge=1900, le=9999, description="Billing year (YYYY)")
    month: int = Field(..., ge=1, le=12, description="Billing month (1-12)")
    panels: List[PanelRecord] = Field(default_factory=list)


class BillingResultResponse(BaseModel):
    panel_id: str
    year: int
    month: int
    billed_days: int
    total_days_in_month: int
    amount: float
    client: Optional[str] = None
    municipality: Optional[str] = None
    status: Optional[PanelStatus] = None
    install_date: Optional[str] = None

    @classmethod
    def from_result(cls, result: BillingResult) -> "BillingResultResponse":
        panel = result.panel
        return cls(
            panel_id=result.panel_id,
            year=result.year,
            month=result.month,
            billed_days=result.billed_days,
            total_days_in_month=result.total_days_in_month,
            amount=float(result.amount),
            client=panel.client if panel else None,
            municipality=panel.municipality if panel else None,
            status=panel.status if panel else None,
            install_date=panel.install_date if panel else None,
        )


class DayRecordResponse(BaseModel):
    date: date
    is_billable: bool
    status: PanelStatus
    status_label: str
    note: str

    @classmethod
    def from_record(cls, record: DayRecord) -> "DayRecordResponse":
        return cls(
            date=record.date,
            is_billable=record.is_billable,
            status=record.status,
            status_label=record.status_label,
            note=record.note,
        )


class RosterBillingResponse(BaseModel):
    year: int
    month: int
    currency: str
    rows: List[BillingResultResponse]
    total_billed_days: int
    total_amount: float


class PanelBillingResponse(BaseModel):
    summary: BillingResultResponse
    ledger: List[DayRecordResponse]


class PanelStatusRequest(BaseModel):
    panels: List[PanelRecord] = Field(default_factory=list)
    events: List[PanelEvent] = Field(default_factory=list)


class PanelStatusResponse(BaseModel):
    panel_id: str
    status: PanelStatus
    last_status_update: Optional[str] = None
