"""SQL Server session settings required for indexed view matching.

SQL Server only considers an indexed view when the session runs with a fixed
set of options.  Drivers such as ODBC and SqlClient leave ``ARITHABORT`` off
by default, which makes the view unreachable.

:data:`SQLSERVER_SESSION_STATEMENTS` is the statement list a caller passes as
``ValidationConfig.session_setup``; :data:`SQLSERVER_REQUIRED_OPTIONS` is the
matching ``required_session_options`` mapping.  Together they prove that each
statement actually took effect.

:func:`missing_session_statements` compares a captured
:class:`~planproof.schema.session_options.SessionOptionSet` against the
expected options and returns the ``SET`` statements that would fix the
session.
"""

from __future__ import annotations

from collections.abc import Mapping

from planproof.schema.session_options import SessionOptionSet

SQLSERVER_SESSION_STATEMENTS: tuple[str, ...] = (
    "SET ARITHABORT ON",
    "SET ANSI_WARNINGS ON",
    "SET ANSI_NULLS ON",
    "SET ANSI_PADDING ON",
    "SET QUOTED_IDENTIFIER ON",
    "SET CONCAT_NULL_YIELDS_NULL ON",
    "SET NUMERIC_ROUNDABORT OFF",
)

# NUMERIC_ROUNDABORT is only listed by DBCC USEROPTIONS when it is ON, so the
# OFF requirement is enforced as a forbidden value instead.
SQLSERVER_REQUIRED_OPTIONS: dict[str, str] = {
    "ARITHABORT": "ON",
    "ANSI_WARNINGS": "ON",
    "ANSI_NULLS": "ON",
    "ANSI_PADDING": "ON",
    "QUOTED_IDENTIFIER": "ON",
    "CONCAT_NULL_YIELDS_NULL": "ON",
}

SQLSERVER_FORBIDDEN_OPTIONS: dict[str, str] = {
    "NUMERIC_ROUNDABORT": "ON",
}

SQLSERVER_EXPECTED_SETTINGS: dict[str, str] = {
    **SQLSERVER_REQUIRED_OPTIONS,
    "NUMERIC_ROUNDABORT": "OFF",
}


def missing_session_statements(
    options: SessionOptionSet,
    expected: Mapping[str, str] = SQLSERVER_EXPECTED_SETTINGS,
) -> list[str]:
    """Return the ``SET`` statements needed to reach ``expected``.

    An option absent from ``options`` is treated as ``OFF``, which is how
    ``DBCC USEROPTIONS`` reports disabled boolean options.

    Args:
        options: Options captured from the session.
        expected: Option name → desired ``ON``/``OFF`` value.

    Returns:
        ``SET {name} {value}`` statements in ``expected`` order; empty when
        the session already matches.
    """
    statements: list[str] = []
    for name, value in expected.items():
        current = options.get(name, "OFF")
        if current.casefold() != value.casefold():
            statements.append(f"SET {name.upper()} {value.upper()}")
    return statements
