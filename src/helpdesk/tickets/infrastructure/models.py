"""
Ticket Infrastructure Models
============================

SQLAlchemy ORM model for the tickets table.

Used to create the schema; the services talk to the table through the
Persistence Adapter with plain SQL.
"""

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from helpdesk.config import DEFAULT_ASSIGNEE, DEFAULT_SLA_HOURS, TicketStatus
from helpdesk.infrastructure.database import Base


class TicketModel(Base):
    """
    Database model for Ticket entity.

    Maps to the 'tickets' table. Timestamps are ISO-8601 UTC text.
    """
    __tablename__ = "tickets"
    __table_args__ = (
        CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'urgent')",
            name="ck_tickets_priority"
        ),
        CheckConstraint(
            "status IN ('open', 'in-progress', 'resolved', 'closed')",
            name="ck_tickets_status"
        ),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    assignee: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_ASSIGNEE, index=True
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=TicketStatus.OPEN, index=True
    )
    sla: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_SLA_HOURS)

    created_at: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)
