from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from account_activation.infrastructure.db.pool import ping_db
from account_activation.infrastructure.redis_cache.pool import ping_redis

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz():
    checks = {"database": await ping_db(), "redis": await ping_redis()}
    ok = all(checks.values())
    return JSONResponse(
        {"status": "ok" if ok else "unavailable", "checks": checks},
        status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
