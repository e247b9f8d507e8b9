"""
Comment Domain Entities
=======================

A comment is a timestamped note owned by exactly one ticket.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from helpdesk.core.clock import from_timestamp


@dataclass
class Comment:
    """
    Comment on a ticket.

    ``created_at`` is reset whenever the text is replaced; there is no
    separate edit history.
    """

    id: str
    ticket_id: str
    text: str
    author: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Comment":
        return cls(
            id=row["id"],
            ticket_id=row["ticket_id"],
            text=row["text"],
            author=row["author"],
            created_at=from_timestamp(row["created_at"]),
        )
