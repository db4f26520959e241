from pydantic import BaseModel


class AuthRequest(BaseModel):
    room_id: str
    country: str

class AuthResponse(BaseModel):
    access_token: str
