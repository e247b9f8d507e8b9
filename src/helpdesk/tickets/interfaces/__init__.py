"""
Ticket Interfaces Layer
=======================

FastAPI route handlers for tickets. This is the outermost layer - it
handles HTTP requests/responses and delegates to application services.
"""

from helpdesk.tickets.interfaces.controllers import tickets_router

__all__ = ["tickets_router"]
