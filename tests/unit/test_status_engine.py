from datetime import date

from app.domain.models import PanelEventType, PanelStatus
from app.domain.schemas.panel import PanelEvent, PanelRecord

TODAY = date(2024, 6, 15)


def _event(event_type, when, panel_id="P-001"):
    return PanelEvent(panel_id=panel_id, event_type=event_type, event_date=when)


def test_install_in_past_is_installed(status_engine):
    panel = PanelRecord(panel_id="P-001", install_date="2024-01-01")
    assert status_engine.recompute(panel, []) == (PanelStatus.INSTALLED, "2024-01-01")


def test_install_in_future_is_pending(status_engine):
    panel = PanelRecord(panel_id="P-001", install_date="2024-09-01")
    status, since = status_engine.recompute(panel, [])
    assert status == PanelStatus.PENDING_INSTALLATION
    assert since == "2024-09-01"


def test_missing_install_is_unknown(status_engine):
    imported = PanelRecord(panel_id="P-001", imported_at="2024-02-02")
    bare = PanelRecord(panel_id="P-002", install_date="not a date")
    assert status_engine.recompute(imported, []) == (PanelStatus.UNKNOWN, "2024-02-02")
    assert status_engine.recompute(bare, []) == (PanelStatus.UNKNOWN, TODAY.isoformat())


def test_events_apply_in_date_order(status_engine):
    panel = PanelRecord(panel_id="P-001", install_date="2024-01-01")
    events = [
        _event(PanelEventType.REINSTALLATION, "2024-04-01"),
        _event(PanelEventType.DEINSTALLATION, "2024-03-01"),
    ]
    assert status_engine.recompute(panel, events) == (PanelStatus.INSTALLED, "2024-04-01")


def test_future_early_and_foreign_events_are_ignored(status_engine):
    panel = PanelRecord(panel_id="P-001", install_date="2024-01-01")
    events = [
        _event(PanelEventType.DEINSTALLATION, "2024-03-01"),
        _event(PanelEventType.REINSTALLATION, "2024-07-01"),
        _event(PanelEventType.REINSTALLATION, "2023-12-01"),
        _event(PanelEventType.REINSTALLATION, "2024-05-01", panel_id="OTHER"),
        _event(PanelEventType.REINSTALLATION, "2024-13-01"),
    ]
    assert status_engine.recompute(panel, events) == (PanelStatus.REMOVED, "2024-03-01")


def test_legacy_event_names_are_accepted():
    event = PanelEvent.model_validate({"panelId": "P-1", "tipo": "DESINSTALACION", "fecha": "2024-03-01"})
    assert event.event_type == PanelEventType.DEINSTALLATION
    assert PanelEventType("reinstallation") == PanelEventType.REINSTALLATION


def test_refresh_returns_copy(status_engine):
    panel = PanelRecord(panel_id="P-001", install_date="2024-01-01")
    refreshed = status_engine.refresh(panel, [_event(PanelEventType.DEINSTALLATION, "2024-02-01")])
    assert refreshed.status == PanelStatus.REMOVED
    assert refreshed.last_status_update == "2024-02-01"
    assert panel.status == PanelStatus.UNKNOWN


def test_refresh_all_sorts_by_panel_id(status_engine):
    panels = [
        PanelRecord(panel_id="B", install_date="2024-01-01"),
        PanelRecord(panel_id="A", install_date="2024-01-01"),
    ]
    events = [_event(PanelEventType.DEINSTALLATION, "2024-05-01", panel_id="B")]
    refreshed = status_engine.refresh_all(panels, events)
    assert [p.panel_id for p in refreshed] == ["A", "B"]
    assert [p.status for p in refreshed] == [PanelStatus.INSTALLED, PanelStatus.REMOVED]
