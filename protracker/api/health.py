from fastapi import APIRouter

router = APIRouter()


@router.get("/api/health", tags=["health"])
def health() -> dict:
    return {"ok": True}
