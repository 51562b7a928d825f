# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides generic table helpers used by every service:
# - fetch_by_id / fetch_rows / fetch_rows_with_count for reads
# - insert_row / update_row / update_rows / delete_row for writes
# - count_rows for dashboard statistics
#
# Filters are plain dicts: scalar values become `eq`, lists become `in_`,
# and None values are skipped so optional query params can be passed through.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   plans = SupabaseClient.fetch_rows("subscription_plans", filters={"is_active": True})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(self, message: str, code: str = "SUPABASE_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        item = SupabaseClient.fetch_by_id("marketplace_items", 12)

        logs = SupabaseClient.fetch_rows(
            "logs",
            filters={"level": "error"},
            since=("timestamp", "2024-01-15T10:00:00+00:00"),
            limit=50,
        )
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Query Building
    # -------------------------------------------------------------------------

    @staticmethod
    def _apply_filters(query, filters: dict[str, Any] | None):
        """Apply eq / in_ filters, skipping None values."""
        for column, value in (filters or {}).items():
            if value is None:
                continue
            if isinstance(value, (list, tuple, set)):
                query = query.in_(column, list(value))
            else:
                query = query.eq(column, value)
        return query

    @classmethod
    def _build_query(
        cls,
        query,
        filters: dict[str, Any] | None = None,
        since: tuple[str, str] | None = None,
        search: tuple[str, str] | None = None,
    ):
        query = cls._apply_filters(query, filters)
        if since:
            column, timestamp = since
            query = query.gte(column, timestamp)
        if search:
            column, term = search
            query = query.ilike(column, f"%{term}%")
        return query

    @staticmethod
    def _require_id(table: str, row_id: int | str | None) -> None:
        if row_id is None:
            raise SupabaseClientError(
                message=f"Refusing to write {table} without a row ID",
                code="MISSING_ROW_ID",
                details={"table": table}
            )

    @staticmethod
    def _apply_order(query, order_by: str | list[str] | None, desc: bool):
        if not order_by:
            return query
        columns = [order_by] if isinstance(order_by, str) else order_by
        for column in columns:
            query = query.order(column, desc=desc)
        return query

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_by_id(
        cls,
        table: str,
        row_id: int | str,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by primary key.

        Args:
            table: Table name
            row_id: Primary key value
            columns: Columns to select (default: all)

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails (other than not found)
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", row_id)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            # single() raises when no rows match
            if "PGRST116" in str(e) or "0 rows" in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table, "id": str(row_id)}
            )

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        columns: str = "*",
        order_by: str | list[str] | None = "created_at",
        desc: bool = True,
        limit: int | None = None,
        offset: int = 0,
        since: tuple[str, str] | None = None,
        search: tuple[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows matching filters.

        Args:
            table: Table name
            filters: Column -> value equality filters (lists use IN)
            columns: Columns to select
            order_by: Column or columns to sort by
            desc: Sort descending (newest first by default)
            limit: Maximum number of rows
            offset: Rows to skip (only used together with limit)
            since: (column, iso_timestamp) lower bound, inclusive
            search: (column, term) case-insensitive substring match

        Returns:
            List of row dicts (empty list when nothing matches)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = cls._build_query(
                client.table(table).select(columns),
                filters=filters,
                since=since,
                search=search,
            )
            query = cls._apply_order(query, order_by, desc)
            if limit is not None:
                query = query.range(offset, offset + limit - 1)

            response = query.execute()
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table} rows: {e}",
                code="FETCH_ROWS_FAILED",
                suggestion=f"Check that the {table} table exists and the filter columns are valid",
                details={"table": table, "filters": {k: str(v) for k, v in (filters or {}).items()}}
            )

    @classmethod
    def fetch_rows_with_count(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        columns: str = "*",
        order_by: str | list[str] | None = "created_at",
        desc: bool = True,
        limit: int = 20,
        offset: int = 0,
        search: tuple[str, str] | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Fetch one page of rows plus the total number of matching rows.

        Returns:
            Tuple of (rows, total_count)
        """
        client = cls.get_client()

        try:
            query = cls._build_query(
                client.table(table).select(columns, count="exact"),
                filters=filters,
                search=search,
            )
            query = cls._apply_order(query, order_by, desc)
            response = query.range(offset, offset + limit - 1).execute()

            rows = response.data or []
            total = response.count if response.count is not None else len(rows)
            return rows, total

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table} page: {e}",
                code="FETCH_PAGE_FAILED",
                suggestion=f"Check that the {table} table exists and the filter columns are valid",
                details={"table": table, "limit": limit, "offset": offset}
            )

    @classmethod
    def count_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        since: tuple[str, str] | None = None,
    ) -> int:
        """Count rows matching filters without fetching them."""
        client = cls.get_client()

        try:
            query = cls._build_query(
                client.table(table).select("id", count="exact").limit(1),
                filters=filters,
                since=since,
            )
            response = query.execute()
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table} rows: {e}",
                code="COUNT_ROWS_FAILED",
                details={"table": table}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it as stored.

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                suggestion=f"Check that the payload matches the {table} columns",
                details={"table": table}
            )

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_EMPTY",
                details={"table": table}
            )

        logger.debug(f"Inserted {table} row {response.data[0].get('id')}")
        return response.data[0]

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: int | str,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a row by primary key.

        Returns:
            The updated row, or None if no row has that ID
        """
        cls._require_id(table, row_id)
        rows = cls.update_rows(table, {"id": row_id}, data)
        return rows[0] if rows else None

    @classmethod
    def update_rows(
        cls,
        table: str,
        filters: dict[str, Any],
        data: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Update every row matching filters and return the updated rows."""
        if not any(value is not None for value in (filters or {}).values()):
            raise SupabaseClientError(
                message=f"Refusing to update every row of {table}",
                code="UNFILTERED_WRITE",
                suggestion="Pass at least one non-null filter",
                details={"table": table}
            )

        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).update(data), filters)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                suggestion=f"Check that the payload matches the {table} columns",
                details={"table": table}
            )

    @classmethod
    def delete_row(cls, table: str, row_id: int | str) -> bool:
        """
        Delete a row by primary key.

        Returns:
            True if a row was deleted, False if it didn't exist
        """
        cls._require_id(table, row_id)
        client = cls.get_client()

        try:
            response = client.table(table).delete().eq("id", row_id).execute()
            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete {table} row: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": str(row_id)}
            )
