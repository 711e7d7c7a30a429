"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    PanelEventType,
    PanelStatus,
    STATUS_LABELS,

    # Entities
    BillingPolicy,
    BillingResult,
    DayRecord,
    PanelSnapshot,
    RosterBilling,
)

__all__ = [
    # Enums
    "PanelEventType",
    "PanelStatus",
    "STATUS_LABELS",

    # Entities
    "BillingPolicy",
    "BillingResult",
    "DayRecord",
    "PanelSnapshot",
    "RosterBilling",
]
