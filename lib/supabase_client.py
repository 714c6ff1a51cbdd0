# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides generic table helpers used by every service:
# - fetch_rows / fetch_row for reads
# - insert_row / update_rows / delete_rows for writes
#
# Services never build PostgREST queries themselves; they describe the
# filters they need and this module turns them into a query.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   paises = SupabaseClient.fetch_rows("paises", filters={"activo": True})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres SQLSTATE for a unique or primary key violation
UNIQUE_VIOLATION = "23505"


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Active countries, by name
        paises = SupabaseClient.fetch_rows(
            "paises",
            filters={"activo": True},
            order_by="nombre",
        )

        # One row by primary key
        pais = SupabaseClient.fetch_row("paises", "PE")
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

    @staticmethod
    def _apply_filters(
        query: Any,
        filters: dict[str, Any] | None = None,
        gte: dict[str, Any] | None = None,
        lte: dict[str, Any] | None = None,
    ) -> Any:
        """Chain eq/gte/lte filters onto a PostgREST query builder."""
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        for column, value in (gte or {}).items():
            query = query.gte(column, value)
        for column, value in (lte or {}).items():
            query = query.lte(column, value)
        return query

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        columns: str = "*",
        order_by: str | None = None,
        desc: bool = False,
        gte: dict[str, Any] | None = None,
        lte: dict[str, Any] | None = None,
        in_: dict[str, list[Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows from a table.

        Args:
            table: Table name
            filters: Equality filters, column -> value
            columns: PostgREST select expression (default: all columns)
            order_by: Column to sort by (optional)
            desc: Sort descending when order_by is given
            gte: Lower-bound filters, column -> value (inclusive)
            lte: Upper-bound filters, column -> value (inclusive)
            in_: Membership filters, column -> allowed values

        Returns:
            List of row dicts (empty when nothing matches)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns)
            query = cls._apply_filters(query, filters, gte, lte)
            for column, values in (in_ or {}).items():
                query = query.in_(column, values)
            if order_by:
                query = query.order(order_by, desc=desc)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch rows from {table}: {e}",
                code="FETCH_ROWS_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table, "filters": filters or {}}
            )

    @classmethod
    def fetch_row(
        cls,
        table: str,
        row_id: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by its id.

        Args:
            table: Table name
            row_id: Value of the id column
            columns: PostgREST select expression
            filters: Extra equality filters (e.g. pais_id)

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns).eq("id", row_id)
            query = cls._apply_filters(query, filters)
            response = query.limit(1).execute()

            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch row from {table}: {e}",
                code="FETCH_ROW_FAILED",
                details={"table": table, "id": row_id}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored.

        Raises:
            SupabaseClientError: If insert fails or returns nothing
                (code DUPLICATE_KEY when a unique constraint rejects the row)
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            # PostgREST errors carry the Postgres SQLSTATE in .code
            pg_code = getattr(e, "code", None)
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="DUPLICATE_KEY" if pg_code == UNIQUE_VIOLATION else "INSERT_FAILED",
                details={"table": table, "pg_code": pg_code}
            )

    @classmethod
    def update_rows(
        cls,
        table: str,
        data: dict[str, Any],
        filters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Update rows matching filters and return the updated rows.

        An empty list means no row matched.

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).update(data), filters)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "filters": filters}
            )

    @classmethod
    def delete_rows(cls, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Delete rows matching filters and return the deleted rows.

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).delete(), filters)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": filters}
            )

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls, table: str = "paises") -> None:
        """Run a trivial query; raises SupabaseClientError if the database is unreachable."""
        client = cls.get_client()
        try:
            client.table(table).select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database ping failed: {e}",
                code="PING_FAILED",
            )
