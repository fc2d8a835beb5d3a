"""Pydantic model describing one validation run.

A ``ValidationConfig`` names the statement under test, the indexed view it is
expected to use (or avoid), and the session options that must be in effect::

    from planproof import ValidationConfig
    from planproof.session.settings import (
        SQLSERVER_REQUIRED_OPTIONS,
        SQLSERVER_SESSION_STATEMENTS,
    )

    config = ValidationConfig(
        benchmark_family="IndexedView",
        variant="ManualSetup",
        sql="SELECT customer_id FROM dbo.vw_CustomerOrderSummary WITH (NOEXPAND)",
        view_schema="dbo",
        view_name="vw_CustomerOrderSummary",
        session_setup=SQLSERVER_SESSION_STATEMENTS,
        required_session_options=SQLSERVER_REQUIRED_OPTIONS,
        expect_view_reference=True,
    )

The model only checks types at construction time.  Cross-field rules are
checked by :meth:`ValidationConfig.ensure_consistent`, which the validator
calls before it touches the connection.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

from planproof.errors import ConfigurationError

_REQUIRED_TEXT_FIELDS = ("benchmark_family", "variant", "sql", "view_schema", "view_name")
_PATH_FIELDS = ("benchmark_family", "variant")
_RESERVED_PATH_NAMES = (".", "..")


class ValidationConfig(BaseModel):
    """Immutable input for :class:`~planproof.validate.validator.BenchmarkValidator`.

    Attributes:
        benchmark_family: First level of the artifact directory.
        variant: Second level of the artifact directory.
        sql: The statement whose plan is captured.
        view_schema: Schema of the indexed view of interest.
        view_name: Name of the indexed view of interest.
        connection_url: Connection descriptor used by
            :func:`planproof.connect.validate_url`.  Ignored when the caller
            passes its own connection.
        engine: Key of the :class:`~planproof.engine.registry.EngineFactory`
            entry that issues the diagnostic commands.
        session_setup: Statements executed, in order, before the plan is
            captured.
        required_session_options: Option name → value that must be reported.
            Stored as a read-only mapping.
        forbidden_session_options: Option name → value that must not be
            reported.  Stored as a read-only mapping.
        prohibited_table_references: Tables that must not appear in the plan,
            either bare (``Orders``) or schema-qualified (``dbo.Orders``).
        expect_view_reference: The plan must reference the view and its index.
        expect_no_view_reference: The plan must not reference the view.
        expected_view_index_name: Index the plan must mention.  When ``None``
            the view's unique clustered index is used.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    benchmark_family: str
    variant: str
    sql: str
    view_schema: str
    view_name: str
    connection_url: str | None = None
    engine: str = "sqlserver"
    session_setup: tuple[str, ...] = ()
    required_session_options: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    forbidden_session_options: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    prohibited_table_references: tuple[str, ...] = ()
    expect_view_reference: bool = False
    expect_no_view_reference: bool = False
    expected_view_index_name: str | None = None

    @field_validator("required_session_options", "forbidden_session_options")
    @classmethod
    def _freeze_options(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        """Store option mappings as read-only copies."""
        return MappingProxyType(dict(value))

    @property
    def qualified_view_name(self) -> str:
        """``schema.view`` as used in failure messages."""
        return f"{self.view_schema}.{self.view_name}"

    def ensure_consistent(self) -> None:
        """Raise :class:`ConfigurationError` for contradictory or incomplete configs.

        Rules
        -----
        ``expect_view_reference`` and ``expect_no_view_reference``
            At most one may be set.  A config asking for both can never pass
            and must not silently pick one.

        Required text fields
            ``benchmark_family``, ``variant``, ``sql``, ``view_schema`` and
            ``view_name`` must not be blank.

        Artifact path components
            ``benchmark_family`` and ``variant`` become directory names, so
            they may not contain path separators and may not be ``.`` or
            ``..``.
        """
        if self.expect_view_reference and self.expect_no_view_reference:
            raise ConfigurationError(
                "Validation config cannot both expect and forbid view references.",
                field="expect_no_view_reference",
            )

        for name in _REQUIRED_TEXT_FIELDS:
            if not getattr(self, name).strip():
                raise ConfigurationError(
                    f"Validation config field '{name}' must not be empty.",
                    field=name,
                )

        for name in _PATH_FIELDS:
            value = getattr(self, name)
            if "/" in value or "\\" in value or value in _RESERVED_PATH_NAMES:
                raise ConfigurationError(
                    f"Validation config field '{name}' must be a single path "
                    f"component, got '{value}'.",
                    field=name,
                )

        if self.expected_view_index_name is not None and not self.expected_view_index_name.strip():
            raise ConfigurationError(
                "expected_view_index_name must be omitted or non-empty.",
                field="expected_view_index_name",
            )
