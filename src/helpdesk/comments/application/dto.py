"""
Comment Application DTOs
========================

Pydantic models for the comment API. Request models accept missing
fields so the service can report them as MissingRequiredField (400).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from helpdesk.comments.domain import Comment


# ========== Request DTOs ==========

class CommentCreateDTO(BaseModel):
    """DTO for adding a comment. Accepts ``ticketId`` or ``ticket_id``."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ticket_id: Optional[str] = Field(None, alias="ticketId", description="Owning ticket id")
    text: Optional[str] = Field(None, description="Comment body")
    author: Optional[str] = Field(None, description="Comment author")


class CommentUpdateDTO(BaseModel):
    """DTO for replacing a comment's text."""
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = Field(None, description="New comment body")


# ========== Response DTOs ==========

class CommentResponse(BaseModel):
    """Response model for a stored comment."""
    id: str
    ticket_id: str
    text: str
    author: str
    created_at: datetime

    @classmethod
    def from_entity(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            ticket_id=comment.ticket_id,
            text=comment.text,
            author=comment.author,
            created_at=comment.created_at,
        )
