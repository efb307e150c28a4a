"""Pydantic schemas for chat socket frames."""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class ChatMessage(BaseModel):
    """A chat message; unknown client fields are kept as-is."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    text: str
    sender: str = "Anonymous"
    timestamp: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value))
        return value

    @field_validator("sender", mode="before")
    @classmethod
    def default_sender(cls, value: Any) -> Any:
        if value is None or value == "":
            return "Anonymous"
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value


class InitFrame(BaseModel):
    """Server-to-client history replay sent on connect."""
    type: Literal["init"] = "init"
    messages: List[Dict[str, Any]]


class MessageFrame(BaseModel):
    """Bidirectional single-message frame."""
    type: Literal["message"] = "message"
    message: ChatMessage


class ClearFrame(BaseModel):
    """Bidirectional clear-history command."""
    type: Literal["clear"] = "clear"

