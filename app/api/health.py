from fastapi import APIRouter

router = APIRouter()


@router.get("/health", tags=["System"])
def get_system_health():
    """Simple liveness probe."""
    return {"status": "ok"}
