"""
Shared Kernel Module
====================

Shared infrastructure used by both bounded contexts (Tickets and Comments):
structured logging and HTTP middleware.

DO NOT add ticket or comment business logic to the shared kernel.
"""
