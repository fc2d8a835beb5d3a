"""Session option applier.

Runs caller-supplied configuration statements on the connection under
validation.  Each statement is its own roundtrip so that session-scoped
settings are in effect before the next one runs, and order is preserved
exactly: a later ``SET`` may silently override an earlier one.
"""

from __future__ import annotations

from collections.abc import Iterable

from planproof.engine.base import Connection
from planproof.logging import get_logger

logger = get_logger(__name__)


def apply_session_statements(connection: Connection, statements: Iterable[str]) -> int:
    """Execute ``statements`` one by one on ``connection``.

    The first failing statement raises and the remaining ones are not sent.

    Args:
        connection: The open connection the validation will run on.
        statements: Configuration statements, in the order to apply them.

    Returns:
        The number of statements executed.
    """
    applied = 0
    for statement in statements:
        logger.debug("Applying session statement: {}", statement)
        cursor = connection.cursor()
        try:
            cursor.execute(statement)
        finally:
            cursor.close()
        applied += 1
    return applied
