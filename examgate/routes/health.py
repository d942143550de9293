"""Health endpoint, also used by clients to warm the server up."""
from fastapi import APIRouter

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
def health() -> dict[str, object]:
    return {"ok": True}
