"""
Comment Infrastructure Models
=============================

SQLAlchemy ORM model for the comments table. The foreign key cascades
deletes from the owning ticket.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from helpdesk.infrastructure.database import Base


class CommentModel(Base):
    """
    Database model for Comment entity.

    Maps to the 'comments' table.
    """
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    ticket_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("tickets.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)
