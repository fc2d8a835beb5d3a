"""planproof session layer: applying and describing session settings."""
from planproof.session.applier import apply_session_statements
from planproof.session.settings import (
    SQLSERVER_EXPECTED_SETTINGS,
    SQLSERVER_FORBIDDEN_OPTIONS,
    SQLSERVER_REQUIRED_OPTIONS,
    SQLSERVER_SESSION_STATEMENTS,
    missing_session_statements,
)

__all__ = [
    "apply_session_statements",
    "missing_session_statements",
    "SQLSERVER_EXPECTED_SETTINGS",
    "SQLSERVER_FORBIDDEN_OPTIONS",
    "SQLSERVER_REQUIRED_OPTIONS",
    "SQLSERVER_SESSION_STATEMENTS",
]
