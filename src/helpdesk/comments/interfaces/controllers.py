"""
Comment Controllers (API Routes)
================================

FastAPI routes for ticket comment threads.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from helpdesk.comments.application import (
    CommentService,
    CommentCreateDTO, CommentUpdateDTO, CommentResponse,
)
from helpdesk.core import Clock
from helpdesk.infrastructure.database import Database
from helpdesk.shared.api.dependencies import get_clock, get_database
from helpdesk.shared.api.schemas import MessageResponse

router = APIRouter(prefix="/comments", tags=["Comments"])


COMMENT_EXAMPLE = {
    "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
    "ticket_id": "TKT-M1ABCDEF",
    "text": "Reproduced the issue, investigating.",
    "author": "John Smith",
    "created_at": "2026-01-15T10:30:00.000000+00:00"
}


def get_comment_service(
    database: Database = Depends(get_database),
    clock: Clock = Depends(get_clock)
) -> CommentService:
    """Get comment service instance."""
    return CommentService(database, clock)


@router.get(
    "/{ticket_id}",
    response_model=List[CommentResponse],
    summary="List a ticket's comments, oldest first",
    responses={404: {"description": "Ticket not found"}}
)
async def list_comments(ticket_id: str, service: CommentService = Depends(get_comment_service)):
    return await service.list_comments(ticket_id)


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to a ticket",
    responses={
        201: {"content": {"application/json": {"example": COMMENT_EXAMPLE}}},
        400: {"description": "Ticket ID, text, and author are required"},
        404: {"description": "Ticket not found"}
    }
)
async def add_comment(payload: CommentCreateDTO, service: CommentService = Depends(get_comment_service)):
    return await service.add_comment(payload.ticket_id, payload.text, payload.author)


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Replace a comment's text",
    description="Replaces the text and resets `created_at` to the current time.",
    responses={
        400: {"description": "Comment text is required"},
        404: {"description": "Comment not found"}
    }
)
async def update_comment(
    comment_id: str,
    payload: CommentUpdateDTO,
    service: CommentService = Depends(get_comment_service)
):
    return await service.update_comment(comment_id, payload.text)


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment",
    responses={404: {"description": "Comment not found"}}
)
async def delete_comment(comment_id: str, service: CommentService = Depends(get_comment_service)):
    await service.delete_comment(comment_id)
    return MessageResponse(message="Comment deleted successfully")


# Export router for inclusion in main app
comments_router = router
