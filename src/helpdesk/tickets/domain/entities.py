"""
Ticket Domain Entities
======================

Pure Python domain entities for the ticket lifecycle.

Following Domain-Driven Design principles, these entities contain
business logic and are free of infrastructure concerns.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Mapping, Optional

from helpdesk.core.clock import from_timestamp
from helpdesk.tickets.domain.value_objects import SLACalculator


@dataclass
class Ticket:
    """
    Support ticket with an SLA clock.

    ``id`` and ``created_at`` never change after creation.
    """

    id: str
    title: str
    description: str
    priority: str
    category: str
    assignee: str
    status: str
    sla: int
    created_at: datetime
    updated_at: datetime

    # Present only on list results
    comment_count: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Ticket":
        """Build from a store row (timestamps as text or datetime)."""
        return cls(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            priority=row["priority"],
            category=row["category"],
            assignee=row["assignee"],
            status=row["status"],
            sla=int(row["sla"]),
            created_at=from_timestamp(row["created_at"]),
            updated_at=from_timestamp(row["updated_at"]),
            comment_count=int(row["comment_count"]) if "comment_count" in row else None,
        )

    def sla_status(self, now: datetime) -> str:
        return SLACalculator.compute_sla_status(self.status, self.created_at, self.sla, now)

    def to_dict(self, now: datetime) -> dict:
        """Stored fields plus the derived ``sla_status``."""
        data = asdict(self)
        if self.comment_count is None:
            data.pop("comment_count")
        data["sla_status"] = self.sla_status(now)
        return data
