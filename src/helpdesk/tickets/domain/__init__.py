"""
Ticket Domain Layer
===================

Domain layer for the ticket lifecycle module.

Contains:
- Entities: Ticket
- Value Objects & Services: SLACalculator, TicketFilter, TicketChanges,
  ticket id generation and lenient SLA parsing

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from helpdesk.tickets.domain.entities import Ticket
from helpdesk.tickets.domain.value_objects import (
    SLACalculator,
    TicketFilter,
    TicketChanges,
    generate_ticket_id,
    parse_sla_hours,
    to_base36,
)

__all__ = [
    # Entities
    "Ticket",
    # Value Objects & Services
    "SLACalculator",
    "TicketFilter",
    "TicketChanges",
    "generate_ticket_id",
    "parse_sla_hours",
    "to_base36",
]
