"""Scripted DB-API connection that answers the SQL Server diagnostics.

``FakeSqlServer`` holds the server-side state (session options, the plan to
return, the view's index) and turns each executed statement into a list of
result sets.  ``FakeConnection`` / ``FakeCursor`` expose that through the
DB-API surface planproof uses and record every statement, so tests can
assert exactly what was sent.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

SHOWPLAN_COLUMN = "Microsoft SQL Server 2005 XML Showplan"


class FakeDriverError(Exception):
    """Stands in for a driver error such as ``pyodbc.ProgrammingError``."""


@dataclass
class FakeResult:
    """One result set; ``columns=None`` models a row-count-only result."""

    columns: list[str] | None
    rows: list[tuple[Any, ...]] = field(default_factory=list)


class FakeSqlServer:
    """Server-side state and statement dispatch.

    Args:
        plan_xml: Plan returned by the STATISTICS XML batch; ``None`` means
            the batch yields no plan result.
        user_options: Initial ``DBCC USEROPTIONS`` rows.
        view_index: Name returned by the catalog query; ``None`` means the
            view has no unique clustered index.
        leading_results: Result sets the statement under test produces before
            the plan result.
        fail_on: Statements containing this text raise ``FakeDriverError``.
    """

    def __init__(
        self,
        plan_xml: str | None = None,
        user_options: Sequence[tuple[str, str]] = (),
        view_index: str | None = None,
        leading_results: Sequence[FakeResult] = (),
        fail_on: str | None = None,
    ) -> None:
        self.plan_xml = plan_xml
        self.user_options: dict[str, str] = {name: value for name, value in user_options}
        self.view_index = view_index
        self.leading_results = list(leading_results)
        self.fail_on = fail_on

    def respond(self, sql: str, params: tuple[Any, ...]) -> list[FakeResult]:
        if self.fail_on is not None and self.fail_on in sql:
            raise FakeDriverError(f"Simulated failure executing: {sql}")

        upper = sql.strip().upper()
        if upper.startswith("DBCC USEROPTIONS"):
            return [FakeResult(["Set Option", "Value"], list(self.user_options.items()))]
        if upper.startswith("SET STATISTICS XML ON"):
            results = list(self.leading_results)
            if self.plan_xml is not None:
                results.append(FakeResult([SHOWPLAN_COLUMN], [(self.plan_xml,)]))
            return results
        if "SYS.INDEXES" in upper:
            rows = [(self.view_index,)] if self.view_index else []
            return [FakeResult(["name"], rows)]
        if upper.startswith("SET "):
            self._apply_set(upper)
            return [FakeResult(None)]
        raise FakeDriverError(f"Unexpected statement: {sql}")

    def _apply_set(self, statement: str) -> None:
        """Mimic how ``SET <OPTION> ON|OFF`` changes DBCC USEROPTIONS output."""
        parts = statement.rstrip(";").split()
        if len(parts) != 3 or parts[2] not in ("ON", "OFF"):
            return
        name = parts[1].lower()
        if parts[2] == "ON":
            self.user_options[name] = "SET"
        else:
            self.user_options.pop(name, None)


class FakeCursor:
    def __init__(self, connection: FakeConnection) -> None:
        self._connection = connection
        self._results: list[FakeResult] = []
        self._index = 0
        self._row = 0
        self.closed = False

    @property
    def description(self) -> list[tuple[Any, ...]] | None:
        current = self._current()
        if current is None or current.columns is None:
            return None
        return [(name, None, None, None, None, None, None) for name in current.columns]

    def execute(self, operation: str, parameters: Sequence[Any] = ()) -> FakeCursor:
        self._connection.executed.append((operation, tuple(parameters)))
        self._results = self._connection.server.respond(operation, tuple(parameters))
        self._index = 0
        self._row = 0
        return self

    def fetchone(self) -> tuple[Any, ...] | None:
        current = self._current()
        if current is None or self._row >= len(current.rows):
            return None
        row = current.rows[self._row]
        self._row += 1
        return row

    def fetchall(self) -> list[tuple[Any, ...]]:
        current = self._current()
        if current is None:
            return []
        rows = current.rows[self._row:]
        self._row = len(current.rows)
        return rows

    def nextset(self) -> bool | None:
        if self._index + 1 < len(self._results):
            self._index += 1
            self._row = 0
            return True
        return None

    def close(self) -> None:
        self.closed = True

    def _current(self) -> FakeResult | None:
        if self._index < len(self._results):
            return self._results[self._index]
        return None


class FakeConnection:
    """Records every statement executed on any of its cursors."""

    def __init__(self, server: FakeSqlServer) -> None:
        self.server = server
        self.executed: list[tuple[str, tuple[Any, ...]]] = []
        self.cursors: list[FakeCursor] = []
        self.closed = False

    def cursor(self) -> FakeCursor:
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def close(self) -> None:
        self.closed = True

    @property
    def statements(self) -> list[str]:
        return [sql for sql, _ in self.executed]
