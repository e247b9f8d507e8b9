"""
Comment Application Services
============================

The Comment Thread Manager: validates and persists comments scoped to an
existing ticket.

Existence checks and writes are separate statements; two concurrent
requests can interleave between them. The only isolation is whatever the
store gives a single statement.
"""

from typing import List, Optional
from uuid import uuid4

from helpdesk.comments.application.dto import CommentResponse
from helpdesk.comments.domain import Comment
from helpdesk.core import (
    Clock,
    IPersistenceAdapter,
    MissingRequiredFieldException,
    ResourceNotFoundException,
    to_timestamp,
    utc_now,
)
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

COMMENT_COLUMNS = "id, ticket_id, text, author, created_at"

SELECT_TICKET_ID = "SELECT id FROM tickets WHERE id = :ticket_id"
SELECT_COMMENT = f"SELECT {COMMENT_COLUMNS} FROM comments WHERE id = :id"
SELECT_THREAD = (
    f"SELECT {COMMENT_COLUMNS} FROM comments "
    "WHERE ticket_id = :ticket_id ORDER BY created_at ASC"
)
INSERT_COMMENT = (
    "INSERT INTO comments (id, ticket_id, text, author, created_at) "
    "VALUES (:id, :ticket_id, :text, :author, :created_at)"
)
UPDATE_COMMENT = "UPDATE comments SET text = :text, created_at = :created_at WHERE id = :id"
DELETE_COMMENT = "DELETE FROM comments WHERE id = :id"


class CommentService:
    """
    Service for ticket comment threads.

    Depends only on the Persistence Adapter contract.
    """

    def __init__(self, adapter: IPersistenceAdapter, clock: Clock = utc_now):
        self._db = adapter
        self._clock = clock

    async def add_comment(
        self,
        ticket_id: Optional[str],
        text: Optional[str],
        author: Optional[str]
    ) -> CommentResponse:
        """
        Attach a comment to an existing ticket.

        Raises:
            MissingRequiredFieldException: ticket id, text or author missing
            ResourceNotFoundException: no ticket with that id
        """
        missing = [
            name for name, value in (
                ("ticketId", ticket_id), ("text", text), ("author", author)
            )
            if not value
        ]
        if missing:
            raise MissingRequiredFieldException(
                missing, "Ticket ID, text, and author are required"
            )

        await self._require_ticket(ticket_id)

        comment_id = str(uuid4())
        await self._db.run(INSERT_COMMENT, {
            "id": comment_id,
            "ticket_id": ticket_id,
            "text": text,
            "author": author,
            "created_at": to_timestamp(self._clock()),
        })

        logger.info("Comment added", extra={"comment_id": comment_id, "ticket_id": ticket_id})
        return CommentResponse.from_entity(await self._fetch(comment_id))

    async def list_comments(self, ticket_id: str) -> List[CommentResponse]:
        """Comments of a ticket, oldest first."""
        await self._require_ticket(ticket_id)
        return [CommentResponse.from_entity(c) for c in await self.thread(ticket_id)]

    async def thread(self, ticket_id: str) -> List[Comment]:
        """Comments of a ticket without the existence check."""
        rows = await self._db.query(SELECT_THREAD, {"ticket_id": ticket_id})
        return [Comment.from_row(row) for row in rows]

    async def update_comment(self, comment_id: str, text: Optional[str]) -> CommentResponse:
        """Replace the text and reset ``created_at`` to now."""
        if not text:
            raise MissingRequiredFieldException(["text"], "Comment text is required")

        if await self._db.get(SELECT_COMMENT, {"id": comment_id}) is None:
            raise ResourceNotFoundException("Comment", comment_id)

        await self._db.run(UPDATE_COMMENT, {
            "id": comment_id,
            "text": text,
            "created_at": to_timestamp(self._clock()),
        })

        logger.info("Comment updated", extra={"comment_id": comment_id})
        return CommentResponse.from_entity(await self._fetch(comment_id))

    async def delete_comment(self, comment_id: str) -> None:
        if await self._db.get(SELECT_COMMENT, {"id": comment_id}) is None:
            raise ResourceNotFoundException("Comment", comment_id)

        await self._db.run(DELETE_COMMENT, {"id": comment_id})
        logger.info("Comment deleted", extra={"comment_id": comment_id})

    async def _require_ticket(self, ticket_id: str) -> None:
        if await self._db.get(SELECT_TICKET_ID, {"ticket_id": ticket_id}) is None:
            raise ResourceNotFoundException("Ticket", ticket_id)

    async def _fetch(self, comment_id: str) -> Comment:
        row = await self._db.get(SELECT_COMMENT, {"id": comment_id})
        if row is None:
            raise ResourceNotFoundException("Comment", comment_id)
        return Comment.from_row(row)
