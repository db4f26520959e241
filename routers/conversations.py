from fastapi import APIRouter, Depends, Query

from dependencies import get_claims, get_conversation_directory
from errors import Unauthorized
from logging_config import get_logger
from schemas.conversations import ConversationInfo, CreateConversationRequest, CreateConversationResponse
from services.conversation_directory import ConversationDirectory
from tokens import Claims

logger = get_logger(__name__)

conversations_router = APIRouter(prefix="/api/conversations", tags=["conversations"])


@conversations_router.get("", response_model=list[ConversationInfo])
async def list_conversations(
    room_id: str = Query("", description="Must match the room in the bearer token"),
    claims: Claims = Depends(get_claims),
    directory: ConversationDirectory = Depends(get_conversation_directory),
):
    """List the conversations in the caller's room that include the caller."""
    if room_id != claims.room_id:
        logger.warning(f"List conversations rejected: token room {claims.room_id} != {room_id}")
        raise Unauthorized()
    return directory.list(claims)


@conversations_router.post("", response_model=CreateConversationResponse)
async def create_conversation(
    body: CreateConversationRequest,
    claims: Claims = Depends(get_claims),
    directory: ConversationDirectory = Depends(get_conversation_directory),
):
    # Body: { "room_id": "R1", "participants": ["austria", "germany"] }
    # Same participant set in any order -> same conversation_id.
    conversation_id = directory.create(claims, body.room_id, body.participants)
    return CreateConversationResponse(conversation_id=conversation_id)
