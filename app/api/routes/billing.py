"""
Monthly Billing API Routes
Prorated PIV billing for a posted panel collection

Panels travel with every request; nothing is stored between calls.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from app.domain.schemas.billing import (
    BillingRequest,
    BillingResultResponse,
    DayRecordResponse,
    PanelBillingResponse,
    RosterBillingResponse,
)
from app.domain.services.billing_engine import BillingEngine

router = APIRouter()


def get_billing_engine(request: Request) -> BillingEngine:
    return request.app.state.billing_engine


@router.post("/monthly", response_model=RosterBillingResponse)
def monthly_billing(
    payload: BillingRequest,
    engine: BillingEngine = Depends(get_billing_engine),
):
    roster = engine.calculate_roster_billing(payload.panels, payload.year, payload.month)
    return RosterBillingResponse(
        year=roster.year,
        month=roster.month,
        currency=engine.policy.currency,
        rows=[BillingResultResponse.from_result(r) for r in roster.rows],
        total_billed_days=roster.total_billed_days,
        total_amount=float(roster.total_amount),
    )


@router.post("/panels/{panel_id}", response_model=PanelBillingResponse)
def panel_billing(
    panel_id: str,
    payload: BillingRequest,
    engine: BillingEngine = Depends(get_billing_engine),
):
    report = engine.panel_report(panel_id, payload.year, payload.month, payload.panels)
    if report is None:
        raise HTTPException(status_code=404, detail=f"Panel not found: {panel_id}")

    summary, ledger = report
    return PanelBillingResponse(
        summary=BillingResultResponse.from_result(summary),
        ledger=[DayRecordResponse.from_record(d) for d in ledger],
    )
