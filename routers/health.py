from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

health_router = APIRouter(prefix="/api", tags=["health"])


@health_router.get("/health", response_class=PlainTextResponse)
async def health():
    return "ok"
