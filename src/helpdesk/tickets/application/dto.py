"""
Ticket Application DTOs
=======================

Data Transfer Objects for the ticket API layer.

Request models are deliberately permissive: required-field and enum checks
happen in the service so they surface as the domain's validation errors.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from helpdesk.comments.application.dto import CommentResponse
from helpdesk.tickets.domain import Ticket, TicketChanges, parse_sla_hours


# ========== Request DTOs ==========

class TicketCreateDTO(BaseModel):
    """DTO for creating a ticket."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="Short summary (required)")
    description: Optional[str] = Field(None, description="Problem description (required)")
    priority: Optional[str] = Field(None, description="low, medium, high or urgent (required)")
    category: Optional[str] = Field(None, description="Defaults to 'general'")
    assignee: Optional[str] = Field(None, description="Defaults to 'Unassigned'")
    sla: Optional[Any] = Field(None, description="Hours until breach; unparseable values become 24")
    status: Optional[str] = Field(None, description="Initial status, defaults to 'open'")


class TicketUpdateDTO(BaseModel):
    """DTO for a partial ticket update. Omitted or null fields are left untouched."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    assignee: Optional[str] = None
    sla: Optional[Any] = None
    status: Optional[str] = None

    def to_changes(self) -> TicketChanges:
        return TicketChanges(
            title=self.title,
            description=self.description,
            priority=self.priority,
            category=self.category,
            assignee=self.assignee,
            sla=parse_sla_hours(self.sla) if self.sla is not None else None,
            status=self.status,
        )


# ========== Response DTOs ==========

class TicketResponse(BaseModel):
    """Response model for a ticket with its derived SLA status."""
    id: str = Field(..., description="Ticket id, e.g. TKT-M1ABCDEF")
    title: str
    description: str
    priority: str
    category: str
    assignee: str
    status: str
    sla: int = Field(..., description="Hours allowed before breach")
    created_at: datetime
    updated_at: datetime
    sla_status: str = Field(..., description="Completed, Overdue, Due Soon or '<N>h remaining'")

    @classmethod
    def from_entity(cls, ticket: Ticket, now: datetime) -> "TicketResponse":
        return cls(**ticket.to_dict(now))


class TicketListItemResponse(TicketResponse):
    """Ticket as returned by the list endpoint."""
    comment_count: int = 0


class TicketDetailResponse(TicketResponse):
    """Ticket with its comment thread, oldest comment first."""
    comments: List[CommentResponse] = Field(default_factory=list)


class DashboardStatsResponse(BaseModel):
    """Ticket counts for the dashboard."""
    total: int = 0
    open: int = 0
    resolved: int = 0
    closed: int = 0
    overdue: int = Field(0, description="Open or in-progress tickets past their SLA")
