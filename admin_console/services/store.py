"""Remote store interface shared by the REST and SQL backends."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from admin_console.config import Settings

# Relations read and written by the dashboard
MEAL_PLANS = "meal_plans"
PROFILES = "profiles"
USER_MEAL_PLANS = "user_meal_plans"
NUTRITION_LOGS = "nutrition_logs"
WATER_INTAKE = "water_intake"
RECIPES = "recipes"

Row = dict[str, Any]


class RemoteStore(ABC):
    """Per-relation reads and writes. No joins and no cross-relation transactions."""

    @abstractmethod
    async def select(
        self,
        relation: str,
        columns: Sequence[str],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        """Return every row of a relation, restricted to the given columns."""

    @abstractmethod
    async def count(self, relation: str) -> int:
        """Return the exact row count of a relation without fetching rows."""

    @abstractmethod
    async def insert(self, relation: str, row: Mapping[str, Any]) -> Row:
        """Insert one row and return it as stored."""

    @abstractmethod
    async def delete(self, relation: str, match: Mapping[str, Any]) -> int:
        """Delete rows equal to every key in match and return how many were removed."""

    @abstractmethod
    async def upsert(self, relation: str, row: Mapping[str, Any], on_conflict: str) -> Row:
        """Insert a row, or overwrite the row that has the same on_conflict value."""


def build_store(settings: Settings) -> RemoteStore:
    """Create the store backend selected in settings."""
    if settings.store_backend == "rest":
        from admin_console.services.rest_store import RestStore

        return RestStore(
            base_url=settings.store_url or "",
            api_key=settings.store_api_key or "",
            timeout=settings.store_timeout_seconds,
        )

    from admin_console.database import SessionLocal
    from admin_console.services.sql_store import SqlStore

    return SqlStore(SessionLocal)
