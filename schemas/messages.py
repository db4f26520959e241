from pydantic import BaseModel


class Message(BaseModel):
    message_id: str
    room_id: str
    conversation_id: str
    sender_country: str
    content: str
    timestamp: int

class PostMessageRequest(BaseModel):
    conversation_id: str
    content: str

class PostMessageResponse(BaseModel):
    message_id: str
