"""
Ticket Infrastructure Layer
===========================

Database schema for tickets (SQLAlchemy ORM model).
"""

from helpdesk.tickets.infrastructure.models import TicketModel

__all__ = ["TicketModel"]
