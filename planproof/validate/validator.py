"""Validation orchestrator.

``BenchmarkValidator`` is the public entry point.  It drives one validation
run through a fixed sequence of stages on a single caller-owned connection:

IDLE
  └── SESSION_SETUP       apply ``config.session_setup`` (skipped when empty)
  └── PLAN_CAPTURE        resolve the view's index, capture and persist the plan
  └── PLAN_VALIDATION     PlanObjectValidator      (plan_validator.py)
  └── SESSION_CAPTURE     read and persist session options
  └── SESSION_VALIDATION  SessionOptionValidator   (session_validator.py)
  └── ARTIFACT_PERSIST    report both artifact paths
  └── DONE

Any stage may end in FAILED.  Artifacts are written as soon as their data is
captured, before the assertions that read them, so a failing run still leaves
the plan (and, past SESSION_CAPTURE, the option dump) on disk.  Nothing is
retried and nothing is recovered: the stage's exception is logged and
re-raised unchanged.

Session setup, plan capture and session capture share the connection because
settings applied in the first stage must still be in effect for the others.
One run fully owns its connection; concurrent runs need separate connections.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path

from planproof.artifacts.writer import ArtifactWriter
from planproof.engine.base import Connection, DiagnosticsEngine
from planproof.engine.registry import EngineFactory
from planproof.errors import CaptureError
from planproof.logging import get_logger
from planproof.plan.extractor import extract_plan_objects
from planproof.schema.config import ValidationConfig
from planproof.schema.result import ValidationResult
from planproof.session.applier import apply_session_statements
from planproof.validate.plan_validator import PlanObjectValidator
from planproof.validate.session_validator import SessionOptionValidator

logger = get_logger(__name__)


class ValidationStage(str, Enum):
    """States of one validation run."""

    IDLE = "idle"
    SESSION_SETUP = "session_setup"
    PLAN_CAPTURE = "plan_capture"
    PLAN_VALIDATION = "plan_validation"
    SESSION_CAPTURE = "session_capture"
    SESSION_VALIDATION = "session_validation"
    ARTIFACT_PERSIST = "artifact_persist"
    DONE = "done"
    FAILED = "failed"


class _RunTracker:
    """Records the current stage and the artifacts written so far."""

    def __init__(self, config: ValidationConfig) -> None:
        self._label = f"{config.benchmark_family}/{config.variant}"
        self.stage = ValidationStage.IDLE
        self.artifacts: list[Path] = []

    def enter(self, stage: ValidationStage) -> None:
        logger.debug("{}: {} -> {}", self._label, self.stage.value, stage.value)
        self.stage = stage

    def fail(self, exc: BaseException) -> None:
        failed_in = self.stage
        self.stage = ValidationStage.FAILED
        artifacts = ", ".join(str(p) for p in self.artifacts) or "none"
        logger.error(
            "Validation {} failed during {}: {} (artifacts: {})",
            self._label,
            failed_in.value,
            exc,
            artifacts,
        )


class BenchmarkValidator:
    """Proves a statement's plan and session state match a ValidationConfig.

    Args:
        engine: Diagnostics engine to use.  When ``None``, the engine named by
            ``config.engine`` is created from
            :class:`~planproof.engine.registry.EngineFactory` for each run.
        writer: Artifact writer.  Defaults to one rooted at the configured
            artifact root.
    """

    def __init__(
        self,
        engine: DiagnosticsEngine | None = None,
        writer: ArtifactWriter | None = None,
    ) -> None:
        self._engine = engine
        self._writer = writer or ArtifactWriter()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, connection: Connection, config: ValidationConfig) -> ValidationResult:
        """Run every stage against ``connection`` and return the proof.

        The connection is neither opened nor closed here.

        Args:
            connection: An open DB-API connection, owned by the caller.
            config: What to prove.

        Returns:
            The artifact paths, captured options, and resolved index name.

        Raises:
            ConfigurationError: If ``config`` is contradictory or incomplete;
                raised before any statement is sent.
            PreconditionError: If the view has no unique clustered index.
            CaptureError: If no plan could be captured.
            PlanAssertionError: If the plan's object references are wrong.
            SessionAssertionError: If a session option is wrong.
        """
        config.ensure_consistent()
        engine = self._engine or EngineFactory.create(config.engine)

        tracker = _RunTracker(config)
        try:
            return self._run(connection, config, engine, tracker)
        except Exception as exc:
            tracker.fail(exc)
            raise

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _run(
        self,
        connection: Connection,
        config: ValidationConfig,
        engine: DiagnosticsEngine,
        tracker: _RunTracker,
    ) -> ValidationResult:
        family, variant = config.benchmark_family, config.variant

        tracker.enter(ValidationStage.SESSION_SETUP)
        if config.session_setup:
            apply_session_statements(connection, config.session_setup)

        tracker.enter(ValidationStage.PLAN_CAPTURE)
        discovered_index = engine.resolve_view_index(
            connection, config.view_schema, config.view_name
        )
        expected_index = config.expected_view_index_name or discovered_index
        plan_xml = engine.capture_plan(connection, config.sql)
        plan_path = self._writer.write_plan(family, variant, plan_xml)
        tracker.artifacts.append(plan_path)

        tracker.enter(ValidationStage.PLAN_VALIDATION)
        try:
            objects = extract_plan_objects(plan_xml, engine.plan_namespace)
        except CaptureError as exc:
            raise CaptureError(exc.reason, raw=exc.raw, plan_path=plan_path) from exc
        logger.debug("{}/{}: plan references {} objects", family, variant, len(objects))
        PlanObjectValidator(config, expected_index, plan_path).validate(objects)

        tracker.enter(ValidationStage.SESSION_CAPTURE)
        options = engine.read_session_options(connection)
        options_path = self._writer.write_session_options(family, variant, options)
        tracker.artifacts.append(options_path)

        tracker.enter(ValidationStage.SESSION_VALIDATION)
        SessionOptionValidator(config, plan_path, options_path).validate(options)

        tracker.enter(ValidationStage.ARTIFACT_PERSIST)
        logger.info(
            "Validation passed: {}/{} plan={} options={}",
            family,
            variant,
            plan_path,
            options_path,
        )

        tracker.enter(ValidationStage.DONE)
        return ValidationResult(
            plan_artifact_path=plan_path,
            session_options_artifact_path=options_path,
            session_options=options,
            resolved_index_name=expected_index,
        )
