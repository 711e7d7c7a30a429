"""
BILLING ENGINE
Day-by-day activity ledger and prorated monthly charge per PIV panel

RESPONSIBILITIES:
- Classify each calendar day of a month as billable or not
- Build the per-day ledger with status and boundary notes
- Aggregate billable days against a standard 30-day month
- Price the month from the panel's monthly rate

RULES (LOCKED):
❌ No state between calls
❌ No proportional rescaling of partial months
✅ Deinstallation takes effect at 23:59 (removal day billable)
✅ Reinstallation takes effect at 00:01 (reinstall day billable)
✅ Fully active month bills exactly the standard month
✅ Invalid dates are treated as absent, never raised
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Tuple

from app.domain.models import (
    BillingPolicy,
    BillingResult,
    DayRecord,
    PanelSnapshot,
    PanelStatus,
    RosterBilling,
    STATUS_LABELS,
)
from app.domain.schemas.panel import PanelRecord
from app.utils.dates import days_in_month, format_display_date, iter_month_days, today_utc
from app.utils.money import round_currency

logger = logging.getLogger(__name__)

DEFAULT_MONTHLY_RATE = Decimal("37.70")
STANDARD_MONTH_DAYS = 30
DEFAULT_POLICY = BillingPolicy(
    default_monthly_rate=DEFAULT_MONTHLY_RATE,
    standard_month_days=STANDARD_MONTH_DAYS,
)


def is_billable_day(
    day: date,
    install_date: Optional[date],
    deinstall_date: Optional[date] = None,
    reinstall_date: Optional[date] = None,
) -> bool:
    """
    Decide whether a panel is chargeable on ``day``.

    - no deinstall, no reinstall: active from installation on
    - reinstall only: the reinstallation supersedes the install record,
      active from the reinstall date on
    - deinstall only: active from installation through the deinstall day
    - both on the same day: no gap after the reinstallation, active from
      the reinstall date on
    - both, reinstall after deinstall: active through the deinstall day
      and again from the reinstall day
    - both, reinstall before deinstall: inconsistent data, billed as
      deinstall only
    """
    if install_date is None or day < install_date:
        return False

    if deinstall_date is None:
        return reinstall_date is None or day >= reinstall_date

    if reinstall_date is None or reinstall_date < deinstall_date:
        return day <= deinstall_date

    if reinstall_date == deinstall_date:
        return day >= reinstall_date

    return day <= deinstall_date or day >= reinstall_date


class BillingEngine:
    """
    Billing Engine
    Pure calculations over panel snapshots; every call starts from scratch
    """

    def __init__(
        self,
        policy: BillingPolicy = DEFAULT_POLICY,
        clock: Callable[[], date] = today_utc,
    ):
        """
        Args:
            policy: Default rate and standard month length
            clock: Source of "today" for pending-installation labels
        """
        self.policy = policy
        self._clock = clock

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def build_ledger(
        self,
        snapshot: PanelSnapshot,
        year: int,
        month: int,
        today: Optional[date] = None,
        check_dates: bool = True,
    ) -> List[DayRecord]:
        """One DayRecord per calendar day of the month, ascending."""
        today = today or self._clock()
        if check_dates:
            self._warn_if_inconsistent(snapshot, year, month)

        ledger = []
        for day in iter_month_days(year, month):
            billable = is_billable_day(
                day,
                snapshot.install_date,
                snapshot.deinstall_date,
                snapshot.reinstall_date,
            )
            status, note = self._describe_day(snapshot, day, billable, today)
            ledger.append(DayRecord(date=day, is_billable=billable, status=status, note=note))
        return ledger

    @staticmethod
    def _describe_day(
        snapshot: PanelSnapshot,
        day: date,
        billable: bool,
        today: date,
    ) -> Tuple[PanelStatus, str]:
        install = snapshot.install_date
        if install is None:
            status, note = PanelStatus.UNKNOWN, STATUS_LABELS[PanelStatus.UNKNOWN]
        elif day < install:
            if install > today:
                label = STATUS_LABELS[PanelStatus.PENDING_INSTALLATION]
                status = PanelStatus.PENDING_INSTALLATION
                note = f"{label} (scheduled: {format_display_date(install)})"
            else:
                status, note = PanelStatus.UNKNOWN, "Not yet active"
        else:
            status = PanelStatus.INSTALLED if billable else PanelStatus.REMOVED
            note = STATUS_LABELS[status]

        installed = STATUS_LABELS[PanelStatus.INSTALLED]

        if day == install:
            note = f"PIV installed ({note})"

        # the removal date is always annotated, billable or not
        if day == snapshot.deinstall_date:
            if billable:
                note = f"PIV removed at 23:59 ({installed} - full billable day)"
            else:
                note = f"PIV removed at 23:59 ({STATUS_LABELS[status]})"

        if billable and day == snapshot.reinstall_date and not snapshot.has_inconsistent_dates:
            if snapshot.deinstall_date is not None:
                note = f"PIV reinstalled at 00:01 ({installed} - full billable day)"
            else:
                note = (
                    "PIV reinstalled at 00:01 - replaces original installation "
                    f"({installed} - full billable day)"
                )

        return status, note

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def count_billable_days(self, snapshot: PanelSnapshot, year: int, month: int) -> int:
        """Raw count of billable calendar days, before normalization."""
        return sum(
            1
            for day in iter_month_days(year, month)
            if is_billable_day(
                day,
                snapshot.install_date,
                snapshot.deinstall_date,
                snapshot.reinstall_date,
            )
        )

    def summarize(
        self,
        snapshot: PanelSnapshot,
        year: int,
        month: int,
        panel: Optional[PanelRecord] = None,
        check_dates: bool = True,
    ) -> BillingResult:
        """
        Price one panel for one month.

        A panel billable on every calendar day bills the full standard month,
        whatever the calendar length. Partial months bill the raw day count.
        """
        standard_days = self.policy.standard_month_days

        if snapshot.install_date is None:
            return self._zero_result(snapshot.panel_id, year, month, panel)

        if check_dates:
            self._warn_if_inconsistent(snapshot, year, month)

        active_days = self.count_billable_days(snapshot, year, month)
        if active_days >= days_in_month(year, month):
            billed_days = standard_days
        else:
            billed_days = active_days

        rate = snapshot.effective_rate(self.policy.default_monthly_rate)
        amount = round_currency(rate * billed_days / standard_days)

        logger.debug(
            "PANEL_BILLED | panel=%s | period=%04d-%02d | active=%s | billed=%s | amount=%s",
            snapshot.panel_id, year, month, active_days, billed_days, amount,
        )

        return BillingResult(
            panel_id=snapshot.panel_id,
            year=year,
            month=month,
            billed_days=billed_days,
            total_days_in_month=standard_days,
            amount=amount,
            panel=panel,
        )

    def _zero_result(
        self,
        panel_id: str,
        year: int,
        month: int,
        panel: Optional[PanelRecord],
    ) -> BillingResult:
        return BillingResult(
            panel_id=panel_id,
            year=year,
            month=month,
            billed_days=0,
            total_days_in_month=self.policy.standard_month_days,
            amount=round_currency(Decimal("0")),
            panel=panel,
        )

    @staticmethod
    def _warn_if_inconsistent(snapshot: PanelSnapshot, year: int, month: int) -> None:
        if snapshot.has_inconsistent_dates:
            logger.warning(
                "REINSTALL_BEFORE_DEINSTALL | panel=%s | period=%04d-%02d | "
                "deinstall=%s | reinstall=%s | billing through deinstall date only",
                snapshot.panel_id, year, month,
                snapshot.deinstall_date, snapshot.reinstall_date,
            )

    # ------------------------------------------------------------------
    # Lookups over a panel collection
    # ------------------------------------------------------------------

    @staticmethod
    def find_panel(panel_id: str, panels: Iterable[PanelRecord]) -> Optional[PanelRecord]:
        return next((p for p in panels if p.panel_id == panel_id), None)

    def calculate_monthly_billing(
        self,
        panel_id: str,
        year: int,
        month: int,
        panels: Iterable[PanelRecord],
    ) -> BillingResult:
        """
        Monthly charge for ``panel_id``.

        An unknown panel yields a zero result with no panel attached; callers
        tell "no such panel" from "nothing billable" through ``panel_found``.
        """
        panel = self.find_panel(panel_id, panels)
        if panel is None:
            logger.info("PANEL_NOT_FOUND | panel=%s | period=%04d-%02d", panel_id, year, month)
            return self._zero_result(panel_id, year, month, None)
        return self.summarize(panel.to_snapshot(), year, month, panel=panel)

    def get_panel_history(
        self,
        panel_id: str,
        year: int,
        month: int,
        panels: Iterable[PanelRecord],
        today: Optional[date] = None,
    ) -> List[DayRecord]:
        """Daily ledger for ``panel_id``; empty when the panel is unknown."""
        panel = self.find_panel(panel_id, panels)
        if panel is None:
            return []
        return self.build_ledger(panel.to_snapshot(), year, month, today=today)

    def panel_report(
        self,
        panel_id: str,
        year: int,
        month: int,
        panels: Iterable[PanelRecord],
        today: Optional[date] = None,
    ) -> Optional[Tuple[BillingResult, List[DayRecord]]]:
        """
        Summary and daily ledger for one panel from a single snapshot.

        Date consistency is checked once for the pair. Returns None when the
        panel is unknown.
        """
        panel = self.find_panel(panel_id, panels)
        if panel is None:
            logger.info("PANEL_NOT_FOUND | panel=%s | period=%04d-%02d", panel_id, year, month)
            return None

        snapshot = panel.to_snapshot()
        self._warn_if_inconsistent(snapshot, year, month)
        summary = self.summarize(snapshot, year, month, panel=panel, check_dates=False)
        ledger = self.build_ledger(snapshot, year, month, today=today, check_dates=False)
        return summary, ledger

    def calculate_roster_billing(
        self,
        panels: Iterable[PanelRecord],
        year: int,
        month: int,
    ) -> RosterBilling:
        """
        Bill every panel for the month.

        Rows are kept when something was billed or the panel is currently
        installed, so installed panels with zero days still show up.
        """
        rows = []
        seen = 0
        for panel in panels:
            seen += 1
            result = self.summarize(panel.to_snapshot(), year, month, panel=panel)
            if result.billed_days > 0 or panel.status == PanelStatus.INSTALLED:
                rows.append(result)

        total_days = sum(r.billed_days for r in rows)
        total_amount = sum((r.amount for r in rows), Decimal("0.00"))

        logger.info(
            "ROSTER_BILLED | period=%04d-%02d | panels=%s | rows=%s | days=%s | amount=%s",
            year, month, seen, len(rows), total_days, total_amount,
        )

        return RosterBilling(
            year=year,
            month=month,
            rows=tuple(rows),
            total_billed_days=total_days,
            total_amount=total_amount,
        )
