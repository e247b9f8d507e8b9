"""
Ticket Controllers (API Routes)
===============================

FastAPI routes for the ticket lifecycle.

Controllers are thin - they delegate to TicketService; domain errors are
translated to status codes by the application exception handler.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from helpdesk.core import Clock
from helpdesk.infrastructure.database import Database
from helpdesk.shared.api.dependencies import get_clock, get_database
from helpdesk.shared.api.schemas import MessageResponse
from helpdesk.shared.infrastructure.logging import get_logger, log_latency
from helpdesk.tickets.application import (
    TicketService,
    TicketCreateDTO, TicketUpdateDTO,
    TicketResponse, TicketListItemResponse, TicketDetailResponse,
    DashboardStatsResponse,
)
from helpdesk.tickets.domain import TicketFilter

logger = get_logger(__name__)
router = APIRouter(prefix="/tickets", tags=["Tickets"])


# ========== Example payloads for Swagger ==========

TICKET_EXAMPLE = {
    "id": "TKT-M1ABCDEF",
    "title": "Login issues with the new system",
    "description": "Users cannot log in to the customer portal.",
    "priority": "high",
    "category": "technical",
    "assignee": "John Smith",
    "status": "open",
    "sla": 4,
    "created_at": "2026-01-15T10:00:00.000000+00:00",
    "updated_at": "2026-01-15T10:00:00.000000+00:00",
    "sla_status": "3h remaining"
}

DASHBOARD_EXAMPLE = {"total": 3, "open": 2, "resolved": 1, "closed": 0, "overdue": 1}

NOT_FOUND_RESPONSE = {404: {"description": "Ticket not found"}}


# ========== Dependencies ==========

def get_ticket_service(
    database: Database = Depends(get_database),
    clock: Clock = Depends(get_clock)
) -> TicketService:
    """Get ticket service instance."""
    return TicketService(database, clock)


# ========== Route Handlers ==========

@router.get(
    "",
    response_model=List[TicketListItemResponse],
    summary="List tickets",
    description="""
    List tickets, newest first, with comment counts and SLA status.

    All supplied filters are combined with AND:
    - `status`, `priority`, `assignee`: exact match
    - `search`: substring of title, description or id
    """
)
async def list_tickets(
    ticket_status: Optional[str] = Query(None, alias="status", description="open, in-progress, resolved or closed"),
    priority: Optional[str] = Query(None, description="low, medium, high or urgent"),
    search: Optional[str] = Query(None, description="Substring of title, description or id"),
    assignee: Optional[str] = Query(None, description="Exact assignee name"),
    service: TicketService = Depends(get_ticket_service)
):
    ticket_filter = TicketFilter.build(
        status=ticket_status, priority=priority, assignee=assignee, search=search
    )
    return await service.list_tickets(ticket_filter)


@router.get(
    "/stats/dashboard",
    response_model=DashboardStatsResponse,
    summary="Get dashboard statistics",
    responses={200: {"content": {"application/json": {"example": DASHBOARD_EXAMPLE}}}}
)
async def get_dashboard_stats(service: TicketService = Depends(get_ticket_service)):
    with log_latency(logger, "dashboard_stats"):
        return await service.dashboard_stats()


@router.get(
    "/{ticket_id}",
    response_model=TicketDetailResponse,
    summary="Get a ticket with its comments",
    responses=NOT_FOUND_RESPONSE
)
async def get_ticket(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    return await service.get_ticket(ticket_id)


@router.post(
    "",
    response_model=TicketResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a ticket",
    description="""
    Create a ticket. `title`, `description` and `priority` are required.

    Defaults: `category` "general", `assignee` "Unassigned", `sla` 24 hours,
    `status` "open".
    """,
    responses={
        201: {"content": {"application/json": {"example": TICKET_EXAMPLE}}},
        400: {"description": "Missing required field or invalid priority"}
    }
)
async def create_ticket(payload: TicketCreateDTO, service: TicketService = Depends(get_ticket_service)):
    return await service.create_ticket(payload)


@router.put(
    "/{ticket_id}",
    response_model=TicketResponse,
    summary="Update a ticket",
    description="Overwrite the supplied fields only; `updated_at` is always refreshed.",
    responses={400: {"description": "No fields to update or invalid value"}, **NOT_FOUND_RESPONSE}
)
async def update_ticket(
    ticket_id: str,
    payload: TicketUpdateDTO,
    service: TicketService = Depends(get_ticket_service)
):
    return await service.update_ticket(ticket_id, payload.to_changes())


@router.delete(
    "/{ticket_id}",
    response_model=MessageResponse,
    summary="Delete a ticket and its comments",
    responses=NOT_FOUND_RESPONSE
)
async def delete_ticket(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    await service.delete_ticket(ticket_id)
    return MessageResponse(message="Ticket deleted successfully")


# Export router for inclusion in main app
tickets_router = router
