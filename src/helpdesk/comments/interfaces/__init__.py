"""
Comment Interfaces Layer
========================

FastAPI route handlers for comment threads.
"""

from helpdesk.comments.interfaces.controllers import comments_router

__all__ = ["comments_router"]
