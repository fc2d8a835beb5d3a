"""Engine abstractions: the DB-API protocols and the DiagnosticsEngine ABC.

The Strategy pattern is used:
- ``DiagnosticsEngine`` declares the three engine-specific diagnostics the
  validator needs (session options, plan capture, view index lookup).
- ``SqlServerEngine`` supplies the SQL Server command text.

The validator only talks to this interface, so supporting another database
means registering another engine, not editing the state machine.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol

from planproof.schema.session_options import SessionOptionSet


class Cursor(Protocol):
    """The subset of a DB-API 2.0 cursor planproof relies on."""

    @property
    def description(self) -> Sequence[Sequence[Any]] | None: ...

    def execute(self, operation: str, parameters: Sequence[Any] = ...) -> Any: ...

    def fetchone(self) -> Sequence[Any] | None: ...

    def fetchall(self) -> Sequence[Sequence[Any]]: ...

    def nextset(self) -> bool | None: ...

    def close(self) -> None: ...


class Connection(Protocol):
    """The subset of a DB-API 2.0 connection planproof relies on."""

    def cursor(self) -> Cursor: ...


class DiagnosticsEngine(ABC):
    """Abstract base for database-specific diagnostic commands.

    Implementations never open, commit, or close the connection they are
    given.  Every call is a blocking roundtrip on its own cursor.  Driver
    errors propagate unchanged.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key of this engine (e.g. ``'sqlserver'``)."""

    @property
    @abstractmethod
    def plan_namespace(self) -> str:
        """Namespace URI the captured plan documents are declared in."""

    @abstractmethod
    def read_session_options(self, connection: Connection) -> SessionOptionSet:
        """Return the options currently in effect for the session.

        Args:
            connection: An open connection.

        Returns:
            The reported options, with boolean "set" markers normalized to
            ``'ON'``.
        """

    @abstractmethod
    def capture_plan(self, connection: Connection, sql: str) -> str:
        """Execute ``sql`` with plan capture enabled and return the plan document.

        Args:
            connection: An open connection.
            sql: The statement under test.

        Returns:
            The raw plan document.

        Raises:
            CaptureError: If the executed batch produced no plan result.
        """

    @abstractmethod
    def resolve_view_index(self, connection: Connection, schema: str, view: str) -> str:
        """Return the name of the unique clustered index backing a view.

        Args:
            connection: An open connection.
            schema: Schema of the view.
            view: Name of the view.

        Returns:
            The index name.

        Raises:
            PreconditionError: If the view has no unique clustered index.
        """
