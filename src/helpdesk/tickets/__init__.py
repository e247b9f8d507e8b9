"""
Ticket Lifecycle Module
=======================

Bounded context for support tickets.

Responsibilities:
- Validate ticket fields on creation and update
- Derive SLA status (Completed / Overdue / Due Soon / <N>h remaining)
- Filter and list tickets with comment counts
- Aggregate dashboard statistics
"""
