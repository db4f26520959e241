from fastapi import APIRouter, Depends

from dependencies import get_seat_registry
from logging_config import get_logger
from schemas.auth import AuthRequest, AuthResponse
from services.seat_registry import SeatRegistry

logger = get_logger(__name__)

auth_router = APIRouter(prefix="/api", tags=["auth"])


@auth_router.post("/auth", response_model=AuthResponse)
async def claim_seat(body: AuthRequest, registry: SeatRegistry = Depends(get_seat_registry)):
    # Body: { "room_id": "R1", "country": "austria" }
    # Response 200: { "access_token": "R1|austria|<hex hmac>" }
    # 409 once the seat has been claimed; there is no way to release it.
    logger.info(f"Seat claim request for {body.country!r} in room {body.room_id!r}")
    access_token = registry.claim_seat(body.room_id, body.country)
    return AuthResponse(access_token=access_token)
