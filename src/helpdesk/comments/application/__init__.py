"""
Comment Application Layer
=========================

Contains:
- Services: CommentService (the comment thread manager)
- DTOs: request/response models for the comment API
"""

from helpdesk.comments.application.dto import (
    CommentCreateDTO,
    CommentUpdateDTO,
    CommentResponse,
)
from helpdesk.comments.application.services import CommentService

__all__ = [
    # DTOs
    "CommentCreateDTO",
    "CommentUpdateDTO",
    "CommentResponse",
    # Services
    "CommentService",
]
