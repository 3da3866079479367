from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class APIStatus(BaseModel):
    """Status block included in every API envelope."""
    timestamp: Optional[int] = None
    error_code: Optional[int] = None
    error_message: Optional[str] = None


class APIEnvelope(BaseModel):
    """The ``{data, status}`` wrapper the API returns."""
    data: Any = None
    status: APIStatus = Field(default_factory=APIStatus)


class Assistant(BaseModel):
    pk: Optional[int] = None
    id: Optional[str] = None
    user_id: Optional[str] = None
    app_id: Optional[str] = None
    name: Optional[str] = None
    logo: Optional[str] = None
    color: Optional[str] = None
    welcome_message: Optional[str] = None
    instruction: Optional[str] = None
    created_at: Optional[datetime] = None


class Discussion(BaseModel):
    pk: Optional[int] = None
    id: str
    title: Optional[str] = None
    assistant_id: Optional[str] = None
    created_at: Optional[datetime] = None


class ChatMessage(BaseModel):
    """One exchange of a discussion."""
    id: Optional[str] = None
    discussion_id: str
    user: str
    assistant: str
