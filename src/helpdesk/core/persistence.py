"""
Persistence Port
================

The narrow contract the ticket and comment services depend on. Concrete
stores live in ``helpdesk.infrastructure.database``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

Row = Dict[str, Any]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a write statement."""
    id: Optional[int]
    changes: int


class IPersistenceAdapter(ABC):
    """Executes parameterized statements against a relational store."""

    @abstractmethod
    async def query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        """Return every row produced by ``sql``."""

    @abstractmethod
    async def run(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> RunResult:
        """Execute a write statement in its own transaction."""

    @abstractmethod
    async def get(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
        """Return the first row produced by ``sql``, or None."""
