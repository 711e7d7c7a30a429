"""
Panel records as supplied by the surrounding application.

Records are open key/value bags (imports carry arbitrary extra spreadsheet
columns). Billing only ever reads the narrow PanelSnapshot produced by
``to_snapshot``.
"""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.models import PanelEventType, PanelSnapshot, PanelStatus
from app.utils.dates import parse_and_validate_date
from app.utils.money import parse_monthly_rate


def _date_text(value: Any) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return None


class PanelRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    panel_id: str = Field(..., min_length=1, alias="codigoParada")
    install_date: Optional[str] = Field(None, alias="fechaInstalacion")
    deinstall_date: Optional[str] = Field(None, alias="fechaDesinstalacion")
    reinstall_date: Optional[str] = Field(None, alias="fechaReinstalacion")
    monthly_rate: Optional[Any] = Field(None, alias="importeMensual")

    client: Optional[str] = Field(None, alias="cliente")
    municipality: Optional[str] = Field(None, alias="municipioMarquesina")
    address: Optional[str] = Field(None, alias="direccion")

    status: PanelStatus = PanelStatus.UNKNOWN
    last_status_update: Optional[str] = Field(None, alias="lastStatusUpdate")
    imported_at: Optional[str] = Field(None, alias="fechaImportacion")

    @field_validator(
        "install_date",
        "deinstall_date",
        "reinstall_date",
        "last_status_update",
        "imported_at",
        mode="before",
    )
    @classmethod
    def _keep_text_dates(cls, value: Any) -> Optional[str]:
        # Non-text cells are dropped here; text is validated when billing reads it
        return _date_text(value)

    def to_snapshot(self) -> PanelSnapshot:
        return PanelSnapshot(
            panel_id=self.panel_id,
            install_date=parse_and_validate_date(self.install_date),
            deinstall_date=parse_and_validate_date(self.deinstall_date),
            reinstall_date=parse_and_validate_date(self.reinstall_date),
            monthly_rate=parse_monthly_rate(self.monthly_rate),
        )


class PanelEvent(BaseModel):
    """Deinstallation / reinstallation entry from the caller's event log"""
    model_config = ConfigDict(populate_by_name=True)

    panel_id: str = Field(..., min_length=1, alias="panelId")
    event_type: PanelEventType = Field(..., alias="tipo")
    event_date: Optional[str] = Field(None, alias="fecha")
    notes: Optional[str] = None

    @field_validator("event_date", mode="before")
    @classmethod
    def _keep_text_date(cls, value: Any) -> Optional[str]:
        return _date_text(value)
