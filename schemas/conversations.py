from pydantic import BaseModel


class ConversationMeta(BaseModel):
    room_id: str
    participants: list[str]

class ConversationInfo(BaseModel):
    conversation_id: str
    participants: list[str]

class CreateConversationRequest(BaseModel):
    room_id: str
    participants: list[str]

class CreateConversationResponse(BaseModel):
    conversation_id: str
