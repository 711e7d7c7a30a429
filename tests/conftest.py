from datetime import date
from pathlib import Path
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.api.routes import billing, health, panels
from app.domain.services.billing_engine import BillingEngine
from app.domain.services.config_engine import ConfigEngine
from app.domain.services.status_engine import PanelStatusEngine

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"
FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture()
def engine() -> BillingEngine:
    return BillingEngine(clock=lambda: FIXED_TODAY)


@pytest.fixture()
def status_engine() -> PanelStatusEngine:
    return PanelStatusEngine(clock=lambda: FIXED_TODAY)


@pytest.fixture()
def app() -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(billing.router, prefix="/api/v1/billing", tags=["Billing"])
    app.include_router(panels.router, prefix="/api/v1/panels", tags=["Panels"])

    config_engine = ConfigEngine(CONFIG_DIR)
    config_engine.load_all()
    app.state.config_engine = config_engine
    app.state.billing_engine = BillingEngine(
        policy=config_engine.billing_policy,
        clock=lambda: FIXED_TODAY,
    )
    app.state.status_engine = PanelStatusEngine(clock=lambda: FIXED_TODAY)
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
