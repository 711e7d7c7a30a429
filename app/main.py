"""
FastAPI Main Application
PIV panel billing service
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import billing, health, panels
from app.config import settings
from app.core.logging import setup_logging
from app.domain.services.billing_engine import BillingEngine
from app.domain.services.config_engine import ConfigEngine
from app.domain.services.status_engine import PanelStatusEngine

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Loads billing configuration and builds the engines
    """
    logger.info("SERVICE_STARTING | env=%s", settings.APP_ENV)

    config_engine = ConfigEngine(settings.CONFIG_DIR)
    config_engine.load_all()

    app.state.config_engine = config_engine
    app.state.billing_engine = BillingEngine(policy=config_engine.billing_policy)
    app.state.status_engine = PanelStatusEngine()
    logger.info("SERVICE_READY | currency=%s", config_engine.billing_policy.currency)

    yield

    logger.info("SERVICE_STOPPED")


app = FastAPI(
    title="PIV Panel Billing",
    description="Prorated monthly billing for passenger-information panels",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(billing.router, prefix="/api/v1/billing", tags=["Billing"])
app.include_router(panels.router, prefix="/api/v1/panels", tags=["Panels"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
