"""Response models shared by every router."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str
