"""planproof – Prove query plans and session state against a live database.

Don't trust the benchmark. Read the plan.

Public API
----------
``validate``
    Apply session setup, capture the execution plan and session options for a
    statement, persist them as artifacts, and assert they match a
    ``ValidationConfig``.

``validate_url``
    Same as ``validate``, opening the connection from
    ``ValidationConfig.connection_url`` (requires ``planproof[sqlalchemy]``).

Re-exported types
-----------------
``ValidationConfig``, ``ValidationResult``, ``PlanObject``,
``SessionOptionSet``, ``BenchmarkValidator``, ``ArtifactWriter`` and all
error classes.

Extensibility
-------------
Diagnostics for other databases can be registered via::

    from planproof.engine.registry import EngineFactory

    @EngineFactory.register("postgres")
    class PostgresEngine(DiagnosticsEngine):
        ...

After registration, ``validate`` picks it up for any ``ValidationConfig``
with ``engine="postgres"``.
"""

from __future__ import annotations

from pathlib import Path

from planproof.artifacts.writer import ArtifactWriter
from planproof.connect import validate_url, validate_with_engine
from planproof.engine.base import Connection, DiagnosticsEngine
from planproof.engine.registry import EngineFactory
from planproof.engine.sqlserver import SqlServerEngine
from planproof.errors import (
    CaptureError,
    ConfigurationError,
    PlanAssertionError,
    PlanProofError,
    PreconditionError,
    SessionAssertionError,
    ValidationError,
)
from planproof.logging import get_logger, setup_logging
from planproof.plan.extractor import SHOWPLAN_NAMESPACE, extract_plan_objects, strip_brackets
from planproof.schema.config import ValidationConfig
from planproof.schema.plan_object import PlanObject
from planproof.schema.result import ValidationResult
from planproof.schema.session_options import SessionOptionSet
from planproof.session.applier import apply_session_statements
from planproof.session.settings import (
    SQLSERVER_FORBIDDEN_OPTIONS,
    SQLSERVER_REQUIRED_OPTIONS,
    SQLSERVER_SESSION_STATEMENTS,
    missing_session_statements,
)
from planproof.settings import PlanProofSettings, get_settings
from planproof.validate.validator import BenchmarkValidator, ValidationStage

__all__ = [
    # Core pipeline
    "validate",
    "validate_url",
    "validate_with_engine",
    "BenchmarkValidator",
    "ValidationStage",
    # Schema types
    "ValidationConfig",
    "ValidationResult",
    "PlanObject",
    "SessionOptionSet",
    # Engines
    "Connection",
    "DiagnosticsEngine",
    "EngineFactory",
    "SqlServerEngine",
    # Plans
    "SHOWPLAN_NAMESPACE",
    "extract_plan_objects",
    "strip_brackets",
    # Session settings
    "apply_session_statements",
    "missing_session_statements",
    "SQLSERVER_FORBIDDEN_OPTIONS",
    "SQLSERVER_REQUIRED_OPTIONS",
    "SQLSERVER_SESSION_STATEMENTS",
    # Artifacts, settings, logging
    "ArtifactWriter",
    "PlanProofSettings",
    "get_settings",
    "get_logger",
    "setup_logging",
    # Errors
    "PlanProofError",
    "ConfigurationError",
    "PreconditionError",
    "CaptureError",
    "ValidationError",
    "PlanAssertionError",
    "SessionAssertionError",
]


def validate(
    connection: Connection,
    config: ValidationConfig,
    artifact_root: Path | str | None = None,
) -> ValidationResult:
    """Prove that ``config`` holds on ``connection``.

    This is the main entry point::

        conn = pyodbc.connect(conn_str)
        try:
            result = planproof.validate(
                conn,
                ValidationConfig(
                    benchmark_family="IndexedView",
                    variant="ViewQuery",
                    sql=view_sql,
                    view_schema="dbo",
                    view_name="vw_CustomerOrderSummary",
                    expect_view_reference=True,
                ),
            )
        finally:
            conn.close()
        print(result.plan_artifact_path, result.resolved_index_name)

    Args:
        connection: An open DB-API connection.  Not closed by this call.
        config: What to prove.
        artifact_root: Optional artifact directory; defaults to
            ``PlanProofSettings.artifact_root``.

    Returns:
        ``ValidationResult`` with artifact paths, session options and the
        index the plan was checked against.

    Raises:
        ConfigurationError: If the config is contradictory or incomplete.
        PreconditionError: If the view has no unique clustered index.
        CaptureError: If the plan could not be captured.
        ValidationError: (or subclass) if an assertion fails.
    """
    writer = ArtifactWriter(artifact_root) if artifact_root is not None else None
    return BenchmarkValidator(writer=writer).validate(connection, config)
