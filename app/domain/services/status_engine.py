"""
PANEL STATUS ENGINE
Recompute a panel's current lifecycle status from its dates and event log

Invoked explicitly by the caller after any write that touches a panel's
install date or its events; nothing here watches for changes.
"""

import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from app.domain.models import PanelEventType, PanelStatus
from app.domain.schemas.panel import PanelEvent, PanelRecord
from app.utils.dates import parse_and_validate_date, today_utc

logger = logging.getLogger(__name__)


class PanelStatusEngine:

    def __init__(self, clock: Callable[[], date] = today_utc):
        self._clock = clock

    def recompute(
        self,
        panel: PanelRecord,
        events: Iterable[PanelEvent],
        today: Optional[date] = None,
    ) -> Tuple[PanelStatus, Optional[str]]:
        """
        Returns (status, last_status_update) for ``panel``.

        Events dated after today, before the installation, or with an
        unreadable date are ignored. Remaining events apply in date order.
        """
        today = today or self._clock()
        install = parse_and_validate_date(panel.install_date)

        if install is None:
            return PanelStatus.UNKNOWN, panel.imported_at or today.isoformat()

        status = PanelStatus.PENDING_INSTALLATION if install > today else PanelStatus.INSTALLED
        last_update = panel.install_date

        dated = []
        for event in events:
            if event.panel_id != panel.panel_id:
                continue
            event_date = parse_and_validate_date(event.event_date)
            if event_date is None or event_date > today or event_date < install:
                continue
            dated.append((event_date, event))

        # stable: same-day events keep log order
        dated.sort(key=lambda pair: pair[0])

        for event_date, event in dated:
            if event.event_type == PanelEventType.DEINSTALLATION:
                status = PanelStatus.REMOVED
            else:
                status = PanelStatus.INSTALLED
            last_update = event.event_date

        return status, last_update

    def refresh(
        self,
        panel: PanelRecord,
        events: Iterable[PanelEvent],
        today: Optional[date] = None,
    ) -> PanelRecord:
        """Copy of ``panel`` with status fields recomputed; input untouched."""
        status, last_update = self.recompute(panel, events, today=today)
        if status == panel.status and last_update == panel.last_status_update:
            return panel

        logger.info(
            "PANEL_STATUS_CHANGED | panel=%s | %s -> %s | since=%s",
            panel.panel_id, panel.status.value, status.value, last_update,
        )
        return panel.model_copy(update={"status": status, "last_status_update": last_update})

    def refresh_all(
        self,
        panels: Iterable[PanelRecord],
        events: Iterable[PanelEvent],
        today: Optional[date] = None,
    ) -> List[PanelRecord]:
        """Refresh every panel, sorted by panel id."""
        today = today or self._clock()
        by_panel: Dict[str, List[PanelEvent]] = {}
        for event in events:
            by_panel.setdefault(event.panel_id, []).append(event)

        refreshed = [
            self.refresh(panel, by_panel.get(panel.panel_id, []), today=today)
            for panel in panels
        ]
        return sorted(refreshed, key=lambda p: p.panel_id)
