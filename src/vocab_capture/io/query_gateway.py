"""Developer SQL console - validate and run ad-hoc statements against the store."""

import logging
import sqlite3
from typing import List, Optional

from vocab_capture.core import ColumnInfo, QueryResult, QueryValidation, TableInfo
from vocab_capture.io.database_manager import VocabDatabase

DANGEROUS_KEYWORDS = ("delete", "drop", "update", "insert", "alter", "create", "truncate")
LOG_PREVIEW_LENGTH = 100


class QueryGateway:
    """Runs developer-submitted SQL on the vocabulary database.

    ``is_dangerous`` is a best-effort warning: any statement containing one of
    ``DANGEROUS_KEYWORDS`` anywhere in its text is flagged, including keywords
    inside identifiers or string literals.
    """

    def __init__(self, db: VocabDatabase, logger: Optional[logging.Logger] = None) -> None:
        self._db = db
        self.logger = logger or logging.getLogger(__name__)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._db.connection

    def validate_query(self, query: str) -> QueryValidation:
        """Check a statement compiles against the live schema, without running it."""
        trimmed = query.strip().lower()
        if not trimmed:
            return QueryValidation(is_valid=False, is_dangerous=False, message="Query cannot be empty")

        is_dangerous = any(keyword in trimmed for keyword in DANGEROUS_KEYWORDS)

        # EXPLAIN compiles the statement and lists its bytecode; nothing is applied.
        probe = query if trimmed.startswith("explain") else f"EXPLAIN {query}"
        cur = self.connection.cursor()
        try:
            cur.execute(probe)
        except (sqlite3.Error, UnicodeEncodeError) as e:
            return QueryValidation(is_valid=False, is_dangerous=False, message=str(e))
        finally:
            cur.close()
        return QueryValidation(is_valid=True, is_dangerous=is_dangerous)

    def execute_sql(self, query: str) -> QueryResult:
        """Run one statement. Errors come back in ``QueryResult.error``."""
        preview = _preview(query)
        self.logger.info("Executing developer SQL query", extra={"data": {"query": preview}})

        is_select = query.strip().lower().startswith("select")
        cur = self.connection.cursor()
        try:
            cur.execute(query)
            if is_select:
                rows = [dict(row) for row in cur.fetchall()]
                columns = list(rows[0].keys()) if rows else []
                self.logger.info(
                    "SQL query executed successfully",
                    extra={"data": {"type": "SELECT", "rowCount": len(rows), "columns": len(columns)}},
                )
                return QueryResult(columns=columns, rows=rows)

            self.connection.commit()
            affected = max(cur.rowcount, 0)
            self.logger.info(
                "SQL statement executed successfully",
                extra={"data": {"type": "WRITE", "affectedRows": affected}},
            )
            return QueryResult(
                columns=["Result"],
                rows=[{"Result": f"{affected} rows affected"}],
                affected_rows=affected,
            )
        except (sqlite3.Error, UnicodeEncodeError) as e:
            if self.connection.in_transaction:
                self.connection.rollback()
            self.logger.error(
                "SQL execution failed",
                extra={"data": {"query": preview, "error": str(e)}},
            )
            return QueryResult(columns=[], rows=[], error=str(e))
        finally:
            cur.close()

    def run_developer_query(self, query: str) -> QueryResult:
        """Validate, then execute. Invalid statements are never run."""
        self.logger.info("Developer SQL execution requested", extra={"data": {"queryLength": len(query)}})
        validation = self.validate_query(query)
        if not validation.is_valid:
            self.logger.warning("Invalid SQL query rejected", extra={"data": {"error": validation.message}})
            return QueryResult(columns=[], rows=[], error=validation.message)
        return self.execute_sql(query)

    def get_schema(self) -> List[TableInfo]:
        """Describe user tables: columns and index names."""
        self.logger.debug("Fetching database schema")
        try:
            cur = self.connection.cursor()
            cur.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
            )
            table_names = [row["name"] for row in cur.fetchall()]

            schema = []
            for name in table_names:
                quoted = _quote_identifier(name)
                cur.execute(f"PRAGMA table_info({quoted})")
                columns = [
                    ColumnInfo(
                        name=col["name"],
                        type=col["type"],
                        nullable=not col["notnull"],
                        default_value=col["dflt_value"],
                        primary_key=bool(col["pk"]),
                    )
                    for col in cur.fetchall()
                ]
                cur.execute(f"PRAGMA index_list({quoted})")
                indexes = [idx["name"] for idx in cur.fetchall()]
                schema.append(TableInfo(name=name, columns=columns, indexes=indexes))
        except sqlite3.Error as e:
            self.logger.error("Failed to fetch schema", extra={"data": {"error": str(e)}})
            return []

        self.logger.info("Schema fetched successfully", extra={"data": {"tableCount": len(schema)}})
        return schema


def _preview(query: str) -> str:
    if len(query) <= LOG_PREVIEW_LENGTH:
        return query
    return query[:LOG_PREVIEW_LENGTH] + "..."


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'
