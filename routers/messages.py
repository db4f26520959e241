from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies import get_claims, get_message_log
from errors import BadRequest
from logging_config import get_logger
from schemas.messages import Message, PostMessageRequest, PostMessageResponse
from services.message_log import MessageLog
from tokens import Claims

logger = get_logger(__name__)

messages_router = APIRouter(prefix="/api/messages", tags=["messages"])


@messages_router.get("", response_model=list[Message])
async def read_messages(
    conversation_id: Optional[str] = Query(None),
    since: int = Query(0, ge=0, description="Only messages stamped strictly after this (ms since epoch)"),
    claims: Claims = Depends(get_claims),
    log: MessageLog = Depends(get_message_log),
):
    """
    Read up to 200 messages of a conversation, oldest first.

    Clients page forward by passing the timestamp of the newest message they hold as `since`.
    """
    if not conversation_id:
        raise BadRequest("Missing conversation_id")
    return log.read(claims, conversation_id, since)


@messages_router.post("", response_model=PostMessageResponse)
async def post_message(
    body: PostMessageRequest,
    claims: Claims = Depends(get_claims),
    log: MessageLog = Depends(get_message_log),
):
    message_id = log.append(claims, body.conversation_id, body.content)
    return PostMessageResponse(message_id=message_id)
