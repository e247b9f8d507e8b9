"""
Comment Domain Layer
====================

Contains the Comment entity. Pure Python, no infrastructure dependencies.
"""

from helpdesk.comments.domain.entities import Comment

__all__ = ["Comment"]
