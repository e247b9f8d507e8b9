#!/usr/bin/env python3
"""
Initialize Database
===================

Creates the schema and loads sample tickets and comments from YAML.

Usage:
    python scripts/init_db.py [path/to/sample_data.yaml]
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

import yaml

from helpdesk.config import get_settings
from helpdesk.core import utc_now
from helpdesk.comments.application import CommentService
from helpdesk.infrastructure.database import Database
from helpdesk.shared.infrastructure.logging import get_logger, setup_logging
from helpdesk.tickets.application import TicketCreateDTO, TicketService

logger = get_logger("init_db")


def staggered_clock(step: timedelta = timedelta(milliseconds=1)):
    """Clock advancing ``step`` per reading so sample ticket ids never collide."""
    start = utc_now()
    readings = 0

    def clock():
        nonlocal readings
        readings += 1
        return start + step * readings

    return clock


def load_sample_data(path: Path) -> list:
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return data.get("tickets", [])


async def seed(database: Database, tickets: list) -> dict:
    """Insert tickets and their comments through the services."""
    clock = staggered_clock()
    ticket_service = TicketService(database, clock)
    comment_service = CommentService(database, clock)

    created = {"tickets": 0, "comments": 0}
    for entry in tickets:
        comments = entry.pop("comments", None) or []
        ticket = await ticket_service.create_ticket(TicketCreateDTO(**entry))
        created["tickets"] += 1

        for comment in comments:
            await comment_service.add_comment(ticket.id, comment.get("text"), comment.get("author"))
            created["comments"] += 1

    return created


async def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.environment)

    path = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.seed_data_path
    tickets = load_sample_data(path)

    database = Database.from_settings(settings)
    database.init()
    try:
        await database.create_tables()
        created = await seed(database, tickets)
    finally:
        await database.close()

    logger.info("Database initialized with sample data", extra={
        "tickets_created": created["tickets"],
        "comments_created": created["comments"],
        "source": str(path),
    })
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
