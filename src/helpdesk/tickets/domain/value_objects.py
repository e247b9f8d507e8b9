"""
Ticket Value Objects
====================

Immutable value objects and pure functions for the ticket lifecycle.

Value objects are defined by their attributes rather than an identity.
Nothing here touches the database or the clock; the caller passes ``now``.
"""

import math
import re
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Optional

from helpdesk.config import (
    SLALabel,
    COMPLETED_STATUSES, ACTIVE_STATUSES,
    DEFAULT_SLA_HOURS, DUE_SOON_WINDOW_HOURS, MAX_SLA_HOURS, TICKET_ID_PREFIX
)

_BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")


class SLACalculator:
    """
    Pure functions for SLA calculations.

    The SLA clock starts at ``created_at`` and runs for ``sla_hours``.
    """

    @staticmethod
    def elapsed_hours(created_at: datetime, now: datetime) -> float:
        return (now - created_at).total_seconds() / 3600

    @staticmethod
    def compute_sla_status(
        status: str,
        created_at: datetime,
        sla_hours: float,
        now: datetime
    ) -> str:
        """
        Classify a ticket's time-to-breach.

        Returns:
            "Completed" for resolved/closed tickets, otherwise "Overdue",
            "Due Soon" (inside the last two hours), or "<N>h remaining"
            with N rounded half up to a whole hour.
        """
        if status in COMPLETED_STATUSES:
            return SLALabel.COMPLETED

        elapsed = SLACalculator.elapsed_hours(created_at, now)

        if elapsed > sla_hours:
            return SLALabel.OVERDUE
        if elapsed > sla_hours - DUE_SOON_WINDOW_HOURS:
            return SLALabel.DUE_SOON
        return SLALabel.REMAINING.format(hours=round_half_up(sla_hours - elapsed))

    @staticmethod
    def is_overdue(
        status: str,
        created_at: datetime,
        sla_hours: float,
        now: datetime
    ) -> bool:
        """Open or in-progress tickets past their SLA."""
        return (
            status in ACTIVE_STATUSES
            and SLACalculator.elapsed_hours(created_at, now) > sla_hours
        )


def round_half_up(value: float) -> int:
    """Nearest integer; exact halves round up."""
    return math.floor(value + 0.5)


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_ticket_id(now: datetime) -> str:
    """
    ``TKT-`` followed by the epoch milliseconds in upper-case base36.

    Two tickets created in the same millisecond get the same id.
    """
    return TICKET_ID_PREFIX + to_base36(int(now.timestamp() * 1000))


def parse_sla_hours(value: Any, default: int = DEFAULT_SLA_HOURS) -> int:
    """
    Lenient integer parse of an SLA value.

    Reads the leading integer of the input ("12h" -> 12, 4.7 -> 4).
    Anything unparseable, not positive, or above ``MAX_SLA_HOURS`` falls
    back to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    sign, digits = match.groups()
    if sign == "-" or len(digits) > len(str(MAX_SLA_HOURS)):
        return default
    hours = int(digits)
    return hours if 0 < hours <= MAX_SLA_HOURS else default


@dataclass(frozen=True)
class TicketFilter:
    """
    Conjunction of optional ticket constraints.

    Empty strings count as absent, matching query-string semantics.
    """
    status: Optional[str] = None
    priority: Optional[str] = None
    assignee: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def build(
        cls,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assignee: Optional[str] = None,
        search: Optional[str] = None,
    ) -> "TicketFilter":
        return cls(
            status=status or None,
            priority=priority or None,
            assignee=assignee or None,
            search=search or None,
        )

    def equality_constraints(self) -> Dict[str, str]:
        """Column -> required value for every exact-match constraint present."""
        return {
            column: value
            for column, value in (
                ("status", self.status),
                ("priority", self.priority),
                ("assignee", self.assignee),
            )
            if value is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.equality_constraints() and self.search is None


@dataclass(frozen=True)
class TicketChanges:
    """
    Partial update of a ticket.

    ``None`` marks a field as absent; only present fields are written.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    assignee: Optional[str] = None
    sla: Optional[int] = None
    status: Optional[str] = None

    def present(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.present()


__all__ = [
    "SLACalculator",
    "TicketFilter",
    "TicketChanges",
    "generate_ticket_id",
    "parse_sla_hours",
    "to_base36",
]
