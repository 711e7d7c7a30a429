from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/ready")
def ready(request: Request):
    engine = getattr(request.app.state, "billing_engine", None)
    return {
        "status": "ready" if engine is not None else "not_ready",
        "config_loaded": engine is not None,
    }
