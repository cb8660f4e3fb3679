from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    match_id: Optional[int] = Field(None, alias="matchId")
    content: Optional[str] = None

    class Config:
        validate_by_name = True


class MessageRead(BaseModel):
    id: int
    match_id: int = Field(..., alias="matchId")
    sender_id: int = Field(..., alias="senderId")
    receiver_id: int = Field(..., alias="receiverId")
    content: str
    read: bool
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        validate_by_name = True


class MessageResponse(BaseModel):
    message: MessageRead


class MessageListResponse(BaseModel):
    messages: List[MessageRead]
