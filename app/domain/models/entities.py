"""
Domain Models - Entities
Pure billing objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from app.domain.schemas.panel import PanelRecord


class PanelStatus(str, Enum):
    """Lifecycle status of a PIV panel"""
    INSTALLED = "installed"
    REMOVED = "removed"
    MAINTENANCE = "maintenance"
    PENDING_INSTALLATION = "pending_installation"
    PENDING_REMOVAL = "pending_removal"
    UNKNOWN = "unknown"


class PanelEventType(str, Enum):
    """Lifecycle event recorded against a panel"""
    DEINSTALLATION = "DEINSTALLATION"
    REINSTALLATION = "REINSTALLATION"

    @classmethod
    def _missing_(cls, value):
        # Event logs exported by the legacy tool use Spanish names
        if isinstance(value, str):
            legacy = {
                "DESINSTALACION": cls.DEINSTALLATION,
                "REINSTALACION": cls.REINSTALLATION,
            }
            key = value.strip().upper()
            for member in cls:
                if member.value == key:
                    return member
            return legacy.get(key)
        return None


STATUS_LABELS = {
    PanelStatus.INSTALLED: "Installed",
    PanelStatus.REMOVED: "Removed",
    PanelStatus.MAINTENANCE: "Maintenance",
    PanelStatus.PENDING_INSTALLATION: "Pending installation",
    PanelStatus.PENDING_REMOVAL: "Pending removal",
    PanelStatus.UNKNOWN: "Unknown",
}


@dataclass(frozen=True)
class BillingPolicy:
    """Billing constants - Immutable"""
    default_monthly_rate: Decimal
    standard_month_days: int
    currency: str = "EUR"

    def __post_init__(self):
        if self.default_monthly_rate <= 0:
            raise ValueError("Default monthly rate must be positive")
        if self.standard_month_days < 1:
            raise ValueError("Standard month must have at least one day")


@dataclass(frozen=True)
class PanelSnapshot:
    """
    The narrow view of a panel the billing engine works on.

    Dates are already validated; a field is None when the source value was
    missing or not a valid ``YYYY-MM-DD`` string. ``monthly_rate`` is None
    when the source rate was missing, zero, negative or unparseable.
    """
    panel_id: str
    install_date: Optional[date] = None
    deinstall_date: Optional[date] = None
    reinstall_date: Optional[date] = None
    monthly_rate: Optional[Decimal] = None

    def effective_rate(self, default: Decimal) -> Decimal:
        return self.monthly_rate if self.monthly_rate is not None else default

    @property
    def has_inconsistent_dates(self) -> bool:
        """Reinstallation recorded before the deinstallation it should follow."""
        return (
            self.deinstall_date is not None
            and self.reinstall_date is not None
            and self.reinstall_date < self.deinstall_date
        )


@dataclass(frozen=True)
class DayRecord:
    """One calendar day of a panel's billing month"""
    date: date
    is_billable: bool
    status: PanelStatus
    note: str

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]


@dataclass(frozen=True)
class BillingResult:
    """Monthly charge for one panel"""
    panel_id: str
    year: int
    month: int
    billed_days: int
    total_days_in_month: int
    amount: Decimal
    panel: Optional["PanelRecord"] = None

    @property
    def panel_found(self) -> bool:
        return self.panel is not None


@dataclass(frozen=True)
class RosterBilling:
    """Billing rows for every chargeable panel in a month"""
    year: int
    month: int
    rows: Tuple[BillingResult, ...]
    total_billed_days: int
    total_amount: Decimal
