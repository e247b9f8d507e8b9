"""
Ticket Application Layer
========================

Application layer for the ticket lifecycle module.

Contains:
- Services: TicketService orchestrates validation, SLA derivation and persistence
- DTOs: Data transfer objects for API serialization

This layer depends on the domain layer and the persistence port,
not on a concrete store.
"""

from helpdesk.tickets.application.dto import (
    TicketCreateDTO,
    TicketUpdateDTO,
    TicketResponse,
    TicketListItemResponse,
    TicketDetailResponse,
    DashboardStatsResponse,
)
from helpdesk.tickets.application.services import TicketService, build_filter_clause

__all__ = [
    # DTOs
    "TicketCreateDTO",
    "TicketUpdateDTO",
    "TicketResponse",
    "TicketListItemResponse",
    "TicketDetailResponse",
    "DashboardStatsResponse",
    # Services
    "TicketService",
    "build_filter_clause",
]
