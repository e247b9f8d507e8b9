"""
Comment Infrastructure Layer
============================

Database schema for comments (SQLAlchemy ORM model).
"""

from helpdesk.comments.infrastructure.models import CommentModel

__all__ = ["CommentModel"]
