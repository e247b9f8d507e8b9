"""
Ticket Application Services
===========================

The Ticket Lifecycle Engine: validates ticket fields, derives SLA status,
applies list filters and computes the dashboard aggregation.

The service depends only on the Persistence Adapter contract
(query / run / get) and an injectable clock, so it runs the same against
SQLite, PostgreSQL or a test double.
"""

from typing import Any, Dict, List, Optional, Tuple

from helpdesk.comments.application import CommentResponse, CommentService
from helpdesk.config import (
    TicketStatus, VALID_PRIORITIES, VALID_STATUSES,
    DEFAULT_ASSIGNEE, DEFAULT_CATEGORY
)
from helpdesk.core import (
    Clock,
    IPersistenceAdapter,
    InvalidPriorityException,
    InvalidStatusException,
    MissingRequiredFieldException,
    NoFieldsProvidedException,
    ResourceNotFoundException,
    from_timestamp,
    to_timestamp,
    utc_now,
)
from helpdesk.shared.infrastructure.logging import get_logger
from helpdesk.tickets.application.dto import (
    DashboardStatsResponse,
    TicketCreateDTO,
    TicketDetailResponse,
    TicketListItemResponse,
    TicketResponse,
)
from helpdesk.tickets.domain import (
    SLACalculator, Ticket, TicketChanges, TicketFilter,
    generate_ticket_id, parse_sla_hours
)

logger = get_logger(__name__)

TICKET_FIELDS = (
    "id", "title", "description", "priority", "category",
    "assignee", "status", "sla", "created_at", "updated_at"
)
TICKET_COLUMNS = ", ".join(TICKET_FIELDS)
QUALIFIED_TICKET_COLUMNS = ", ".join(f"t.{name}" for name in TICKET_FIELDS)

SELECT_TICKET = f"SELECT {TICKET_COLUMNS} FROM tickets WHERE id = :id"
INSERT_TICKET = (
    f"INSERT INTO tickets ({TICKET_COLUMNS}) "
    "VALUES (:id, :title, :description, :priority, :category, "
    ":assignee, :status, :sla, :created_at, :updated_at)"
)
DELETE_TICKET = "DELETE FROM tickets WHERE id = :id"
SELECT_TICKETS_WITH_COUNTS = (
    f"SELECT {QUALIFIED_TICKET_COLUMNS}, COUNT(c.id) AS comment_count "
    "FROM tickets t LEFT JOIN comments c ON t.id = c.ticket_id"
)
SELECT_SLA_FIELDS = "SELECT status, created_at, sla FROM tickets"


def build_filter_clause(ticket_filter: TicketFilter) -> Tuple[str, Dict[str, Any]]:
    """
    Render a TicketFilter as a parameterized WHERE clause over alias ``t``.

    Search uses LIKE so case sensitivity follows the store's default.
    Returns ("", {}) when the filter is empty.
    """
    conditions = []
    params: Dict[str, Any] = {}

    for column, value in ticket_filter.equality_constraints().items():
        conditions.append(f"t.{column} = :{column}")
        params[column] = value

    if ticket_filter.search is not None:
        conditions.append(
            "(t.title LIKE :search OR t.description LIKE :search OR t.id LIKE :search)"
        )
        params["search"] = f"%{ticket_filter.search}%"

    if not conditions:
        return "", params
    return " WHERE " + " AND ".join(conditions), params


class TicketService:
    """
    Service for the ticket lifecycle.

    Coordinates validation, SLA derivation and persistence.
    """

    def __init__(
        self,
        adapter: IPersistenceAdapter,
        clock: Clock = utc_now,
        comment_service: Optional[CommentService] = None
    ):
        self._db = adapter
        self._clock = clock
        self._comments = comment_service or CommentService(adapter, clock)

    # ========== Create ==========

    def validate_create(self, payload: TicketCreateDTO) -> Dict[str, Any]:
        """
        Check required fields and enums and fill in defaults.

        Returns the column values for a new ticket, id and timestamps included.
        """
        missing = [
            name for name in ("title", "description", "priority")
            if not getattr(payload, name)
        ]
        if missing:
            raise MissingRequiredFieldException(
                missing, "Title, description, and priority are required"
            )

        if payload.priority not in VALID_PRIORITIES:
            raise InvalidPriorityException(payload.priority, VALID_PRIORITIES)

        status = payload.status or TicketStatus.OPEN
        if status not in VALID_STATUSES:
            raise InvalidStatusException(status, VALID_STATUSES)

        now = self._clock()
        timestamp = to_timestamp(now)
        return {
            "id": generate_ticket_id(now),
            "title": payload.title,
            "description": payload.description,
            "priority": payload.priority,
            "category": payload.category or DEFAULT_CATEGORY,
            "assignee": payload.assignee or DEFAULT_ASSIGNEE,
            "status": status,
            "sla": parse_sla_hours(payload.sla),
            "created_at": timestamp,
            "updated_at": timestamp,
        }

    async def create_ticket(self, payload: TicketCreateDTO) -> TicketResponse:
        values = self.validate_create(payload)
        await self._db.run(INSERT_TICKET, values)

        logger.info(
            "Ticket created",
            extra={"ticket_id": values["id"], "priority": values["priority"], "sla_hours": values["sla"]}
        )
        ticket = await self._require(values["id"])
        return TicketResponse.from_entity(ticket, self._clock())

    # ========== Read ==========

    async def list_tickets(self, ticket_filter: Optional[TicketFilter] = None) -> List[TicketListItemResponse]:
        """
        Tickets matching every supplied constraint, newest first, each with
        its comment count and SLA status.
        """
        where, params = build_filter_clause(ticket_filter or TicketFilter())
        sql = (
            f"{SELECT_TICKETS_WITH_COUNTS}{where} "
            f"GROUP BY {QUALIFIED_TICKET_COLUMNS} "
            "ORDER BY t.created_at DESC"
        )
        rows = await self._db.query(sql, params)

        now = self._clock()
        return [TicketListItemResponse.from_entity(Ticket.from_row(row), now) for row in rows]

    async def get_ticket(self, ticket_id: str) -> TicketDetailResponse:
        """Ticket with SLA status and its comments, oldest first."""
        ticket = await self._require(ticket_id)
        comments = await self._comments.thread(ticket_id)

        return TicketDetailResponse(
            **ticket.to_dict(self._clock()),
            comments=[CommentResponse.from_entity(c) for c in comments],
        )

    # ========== Update ==========

    async def update_ticket(self, ticket_id: str, changes: TicketChanges) -> TicketResponse:
        """
        Overwrite only the supplied fields and refresh ``updated_at``.

        Raises:
            ResourceNotFoundException: no ticket with that id
            NoFieldsProvidedException: ``changes`` is empty
            MissingRequiredFieldException: title or description set to ""
            InvalidPriorityException / InvalidStatusException: enum violation
        """
        await self._require(ticket_id)

        fields = changes.present()
        if not fields:
            raise NoFieldsProvidedException()

        blank = [name for name in ("title", "description") if fields.get(name) == ""]
        if blank:
            raise MissingRequiredFieldException(blank, "Title and description cannot be empty")
        if "priority" in fields and fields["priority"] not in VALID_PRIORITIES:
            raise InvalidPriorityException(fields["priority"], VALID_PRIORITIES)
        if "status" in fields and fields["status"] not in VALID_STATUSES:
            raise InvalidStatusException(fields["status"], VALID_STATUSES)

        assignments = ", ".join(f"{name} = :{name}" for name in fields)
        params = {**fields, "id": ticket_id, "updated_at": to_timestamp(self._clock())}
        await self._db.run(
            f"UPDATE tickets SET {assignments}, updated_at = :updated_at WHERE id = :id",
            params
        )

        logger.info("Ticket updated", extra={"ticket_id": ticket_id, "fields": sorted(fields)})
        ticket = await self._require(ticket_id)
        return TicketResponse.from_entity(ticket, self._clock())

    # ========== Delete ==========

    async def delete_ticket(self, ticket_id: str) -> None:
        """Delete a ticket; the store cascades the delete to its comments."""
        await self._require(ticket_id)
        await self._db.run(DELETE_TICKET, {"id": ticket_id})
        logger.info("Ticket deleted", extra={"ticket_id": ticket_id})

    # ========== Dashboard ==========

    async def dashboard_stats(self) -> DashboardStatsResponse:
        """Totals per status plus overdue active tickets, in one pass."""
        rows = await self._db.query(SELECT_SLA_FIELDS)
        now = self._clock()

        stats = DashboardStatsResponse()
        for row in rows:
            ticket_status = row["status"]
            stats.total += 1
            if ticket_status == TicketStatus.OPEN:
                stats.open += 1
            elif ticket_status == TicketStatus.RESOLVED:
                stats.resolved += 1
            elif ticket_status == TicketStatus.CLOSED:
                stats.closed += 1

            if SLACalculator.is_overdue(
                ticket_status, from_timestamp(row["created_at"]), int(row["sla"]), now
            ):
                stats.overdue += 1

        return stats

    async def _require(self, ticket_id: str) -> Ticket:
        row = await self._db.get(SELECT_TICKET, {"id": ticket_id})
        if row is None:
            raise ResourceNotFoundException("Ticket", ticket_id)
        return Ticket.from_row(row)
