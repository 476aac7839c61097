"""Windowed keyset queries against PostgreSQL."""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

import asyncpg

from ..errors.problem_details import QueryFailureError, StoreUnavailableError
from ..pagination import Order
from ..pagination.keys import KeySpec
from .connection import require_db_pool


logger = logging.getLogger(__name__)


def build_where_clause(
    keys: KeySpec,
    filters: Mapping[str, Any],
    boundary: Tuple[int, ...],
    direction: Order
) -> Tuple[str, List[Any]]:
    """Build WHERE clause for one window.

    Filters are equality predicates AND'ed together; the boundary is a
    strict row comparison over the key columns, so the boundary row itself
    is never returned.

    Args:
        keys: Key specification of the paged entity
        filters: Column equality predicates
        boundary: Parsed boundary key
        direction: Order the window moves in

    Returns:
        Tuple of (where_clause, parameters)
    """
    conditions = []
    params: List[Any] = []

    for column, value in sorted(filters.items()):
        params.append(value)
        conditions.append(f"{column} = ${len(params)}")

    placeholders = []
    for value in boundary:
        params.append(value)
        placeholders.append(f"${len(params)}::bigint")

    op = "<" if direction is Order.DESCENDING else ">"
    if len(keys.columns) == 1:
        conditions.append(f"{keys.columns[0]} {op} {placeholders[0]}")
    else:
        conditions.append(f"({', '.join(keys.columns)}) {op} ({', '.join(placeholders)})")

    return " AND ".join(conditions), params


def build_order_clause(keys: KeySpec, direction: Order) -> str:
    """Build ORDER BY clause for one window."""
    sort = "DESC" if direction is Order.DESCENDING else "ASC"
    return "ORDER BY " + ", ".join(f"{column} {sort}" for column in keys.columns)


class PostgresWindowFetcher:
    """Reads forward and backward windows of one table.

    ``filterable`` lists the columns callers may filter on; anything else
    is rejected before a query is built.
    """

    def __init__(
        self,
        keys: KeySpec,
        table: str,
        columns: Sequence[str],
        filterable: Sequence[str],
        row_factory: Callable[[Dict[str, Any]], Any]
    ):
        self.keys = keys
        self.table = table
        self.columns = tuple(columns)
        self.filterable = frozenset(filterable)
        self.row_factory = row_factory

    def build_query(
        self,
        filters: Mapping[str, Any],
        boundary: str,
        row_limit: int,
        direction: Order,
        order: Order
    ) -> Tuple[str, List[Any]]:
        """Build the SELECT for a window moving in ``direction``.

        ``order`` is the requested traversal order; it picks the sentinel
        when ``boundary`` is empty or malformed.
        """
        unknown = set(filters) - self.filterable
        if unknown:
            raise ValueError(f"Cannot filter {self.table} on {sorted(unknown)}")
        if row_limit <= 0:
            raise ValueError("row_limit must be positive")

        where_clause, params = build_where_clause(
            self.keys, filters, self.keys.boundary(boundary, order), direction
        )
        params.append(row_limit)
        query = (
            f"SELECT {', '.join(self.columns)} FROM {self.table} "
            f"WHERE {where_clause} "
            f"{build_order_clause(self.keys, direction)} "
            f"LIMIT ${len(params)}"
        )
        return query, params

    async def forward_window(
        self, filters: Mapping[str, Any], boundary: str, row_limit: int, order: Order
    ) -> List[Any]:
        query, params = self.build_query(filters, boundary, row_limit, order, order)
        return await self._fetch(query, params)

    async def backward_window(
        self, filters: Mapping[str, Any], boundary: str, row_limit: int, order: Order
    ) -> List[Any]:
        query, params = self.build_query(filters, boundary, row_limit, order.opposite(), order)
        return await self._fetch(query, params)

    async def _fetch(self, query: str, params: List[Any]) -> List[Any]:
        pool = require_db_pool()
        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except asyncpg.PostgresConnectionError as e:
            logger.error(f"Database connection lost reading {self.table}: {e}")
            raise StoreUnavailableError(f"Database connection lost: {e}")
        except asyncpg.PostgresError as e:
            logger.error(f"Database error reading {self.table} window: {e}")
            raise QueryFailureError(f"Database error: {e}")
        except asyncio.TimeoutError:
            logger.error(f"Window query on {self.table} timed out")
            raise QueryFailureError(f"Query on {self.table} timed out")
        except (OSError, asyncpg.InterfaceError) as e:
            logger.error(f"Database unreachable reading {self.table}: {e}")
            raise StoreUnavailableError(f"Database unreachable: {e}")

        return [self.row_factory(dict(row)) for row in rows]
