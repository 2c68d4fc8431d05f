from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    message: str = Field(..., min_length=1, max_length=2000)


class ChatReply(BaseModel):
    response: str


class ChatEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    message: str
    response: str
    created_at: datetime
