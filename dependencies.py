from typing import Optional

from fastapi import Depends, Header

from backend import KVBackend, get_backend
from constants import HMAC_SECRET
from errors import InternalError, Unauthorized
from logging_config import get_logger
from services.conversation_directory import ConversationDirectory
from services.message_log import MessageLog
from services.seat_registry import SeatRegistry
from tokens import Claims, parse_bearer, verify_token

logger = get_logger(__name__)


def get_kv() -> KVBackend:
    return get_backend()


def get_secret() -> str:
    if not HMAC_SECRET:
        logger.error("HMAC_SECRET is not set; refusing to issue or verify tokens")
        raise InternalError("Signing secret not configured")
    return HMAC_SECRET


def get_claims(
    authorization: Optional[str] = Header(None),
    secret: str = Depends(get_secret),
) -> Claims:
    """FastAPI dependency resolving the bearer token to seat claims."""
    token = parse_bearer(authorization)
    claims = verify_token(secret, token) if token is not None else None
    if claims is None:
        logger.warning("Rejected request with missing or invalid bearer token")
        raise Unauthorized()
    return claims


def get_seat_registry(kv: KVBackend = Depends(get_kv), secret: str = Depends(get_secret)) -> SeatRegistry:
    return SeatRegistry(kv, secret)


def get_conversation_directory(kv: KVBackend = Depends(get_kv)) -> ConversationDirectory:
    return ConversationDirectory(kv)


def get_message_log(
    kv: KVBackend = Depends(get_kv),
    directory: ConversationDirectory = Depends(get_conversation_directory),
) -> MessageLog:
    return MessageLog(kv, directory)
