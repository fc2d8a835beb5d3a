"""SQL Server diagnostics engine."""

from __future__ import annotations

from planproof.engine.base import Connection, Cursor, DiagnosticsEngine
from planproof.engine.registry import EngineFactory
from planproof.errors import CaptureError, PreconditionError
from planproof.logging import get_logger
from planproof.plan.extractor import SHOWPLAN_NAMESPACE
from planproof.schema.session_options import SessionOptionSet

logger = get_logger(__name__)

USER_OPTIONS_COMMAND = "DBCC USEROPTIONS"

PLAN_CAPTURE_ON = "SET STATISTICS XML ON;"
PLAN_CAPTURE_OFF = "SET STATISTICS XML OFF;"

# Name of the single column SQL Server uses for STATISTICS XML results,
# e.g. "Microsoft SQL Server 2005 XML Showplan".
PLAN_COLUMN_MARKER = "showplan"

VIEW_INDEX_QUERY = """
    SELECT i.name
    FROM sys.indexes i
    JOIN sys.views v ON i.object_id = v.object_id
    WHERE SCHEMA_NAME(v.schema_id) = ?
      AND v.name = ?
      AND i.type_desc = 'CLUSTERED'
      AND i.is_unique = 1"""

# DBCC USEROPTIONS reports enabled boolean options with this value.
SET_SENTINEL = "SET"


@EngineFactory.register("sqlserver")
class SqlServerEngine(DiagnosticsEngine):
    """Issues SQL Server diagnostics over a DB-API connection.

    Parameter style: ``?`` (qmark), compatible with ``pyodbc``.
    """

    @property
    def name(self) -> str:
        return "sqlserver"

    @property
    def plan_namespace(self) -> str:
        return SHOWPLAN_NAMESPACE

    def read_session_options(self, connection: Connection) -> SessionOptionSet:
        cursor = connection.cursor()
        try:
            cursor.execute(USER_OPTIONS_COMMAND)
            rows = cursor.fetchall()
        finally:
            cursor.close()

        pairs = [(str(row[0]).strip(), _normalize_option_value(row[1])) for row in rows]
        logger.debug("Read {} session options", len(pairs))
        return SessionOptionSet(pairs)

    def capture_plan(self, connection: Connection, sql: str) -> str:
        batch = f"{PLAN_CAPTURE_ON}\n{_strip_terminator(sql)};\n{PLAN_CAPTURE_OFF}"
        cursor = connection.cursor()
        try:
            cursor.execute(batch)
            plan = _find_plan_result(cursor)
        finally:
            cursor.close()

        if plan is None:
            raise CaptureError("Unable to capture SHOWPLAN XML result")
        logger.debug("Captured plan document ({} chars)", len(plan))
        return plan

    def resolve_view_index(self, connection: Connection, schema: str, view: str) -> str:
        cursor = connection.cursor()
        try:
            cursor.execute(VIEW_INDEX_QUERY, (schema, view))
            row = cursor.fetchone()
        finally:
            cursor.close()

        index_name = row[0] if row else None
        if not index_name:
            raise PreconditionError(
                f"Indexed view {schema}.{view} is missing a UNIQUE CLUSTERED index",
                schema=schema,
                view=view,
            )
        logger.debug("View {}.{} is backed by index {}", schema, view, index_name)
        return str(index_name)


def _find_plan_result(cursor: Cursor) -> str | None:
    """Advance through result sets until one carries the plan column.

    Ordinary result sets and row-count-only results ahead of the plan are
    skipped without being read.
    """
    while True:
        description = cursor.description
        if description:
            first_column = str(description[0][0])
            if PLAN_COLUMN_MARKER in first_column.lower():
                row = cursor.fetchone()
                if row is not None:
                    return str(row[0])
        if not cursor.nextset():
            return None


def _normalize_option_value(value: object) -> str:
    text = "" if value is None else str(value).strip()
    if text.upper() == SET_SENTINEL:
        return "ON"
    return text


def _strip_terminator(sql: str) -> str:
    return sql.strip().rstrip(";").rstrip()
