from typing import List

from fastapi import APIRouter, Depends, Request

from app.domain.schemas.billing import PanelStatusRequest, PanelStatusResponse
from app.domain.services.status_engine import PanelStatusEngine

router = APIRouter()


def get_status_engine(request: Request) -> PanelStatusEngine:
    return request.app.state.status_engine


@router.post("/status", response_model=List[PanelStatusResponse])
def recompute_status(
    payload: PanelStatusRequest,
    engine: PanelStatusEngine = Depends(get_status_engine),
):
    """Recompute status for every posted panel from its install date and events."""
    refreshed = engine.refresh_all(payload.panels, payload.events)
    return [
        PanelStatusResponse(
            panel_id=p.panel_id,
            status=p.status,
            last_status_update=p.last_status_update,
        )
        for p in refreshed
    ]
