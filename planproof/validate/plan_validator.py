"""Plan object assertions.

Checks run in a fixed order and the first violation is raised:

1. the view is referenced (when ``expect_view_reference``),
2. the view is not referenced (when ``expect_no_view_reference``),
3. the expected index is mentioned (when ``expect_view_reference``),
4. no prohibited table is referenced.
"""

from __future__ import annotations

from pathlib import Path

from planproof.errors import PlanAssertionError
from planproof.schema.config import ValidationConfig
from planproof.schema.plan_object import PlanObject


class PlanObjectValidator:
    """Validates extracted plan objects against a ValidationConfig.

    Args:
        config: The run's configuration.
        expected_index: The index the plan must mention when a view
            reference is expected.
        plan_path: Artifact path quoted in every failure.
    """

    def __init__(self, config: ValidationConfig, expected_index: str, plan_path: Path) -> None:
        self._config = config
        self._expected_index = expected_index
        self._plan_path = plan_path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, objects: list[PlanObject]) -> None:
        """Raise on the first assertion ``objects`` violates.

        Raises:
            PlanAssertionError: On the first violation.
        """
        config = self._config
        view_referenced = any(
            o.is_object(config.view_schema, config.view_name) for o in objects
        )

        if config.expect_view_reference and not view_referenced:
            raise PlanAssertionError(
                f"Plan missing indexed view reference for {config.qualified_view_name}",
                code="VIEW_NOT_REFERENCED",
                plan_path=self._plan_path,
                details={"view": config.qualified_view_name},
            )

        if config.expect_no_view_reference and view_referenced:
            raise PlanAssertionError(
                f"Plan unexpectedly referenced indexed view {config.qualified_view_name}",
                code="VIEW_UNEXPECTEDLY_REFERENCED",
                plan_path=self._plan_path,
                details={"view": config.qualified_view_name},
            )

        if config.expect_view_reference and not any(
            o.uses_index(self._expected_index) for o in objects
        ):
            raise PlanAssertionError(
                f"Plan did not mention expected index '{self._expected_index}'",
                code="INDEX_NOT_MENTIONED",
                plan_path=self._plan_path,
                details={
                    "expected_index": self._expected_index,
                    "indexes": sorted({o.index for o in objects if o.index}),
                },
            )

        for forbidden in config.prohibited_table_references:
            if any(_references_table(o, forbidden) for o in objects):
                raise PlanAssertionError(
                    f"Plan referenced forbidden table '{forbidden}'",
                    code="FORBIDDEN_TABLE",
                    plan_path=self._plan_path,
                    details={"table": forbidden},
                )


def _references_table(obj: PlanObject, reference: str) -> bool:
    """Match a prohibited reference against one plan object.

    A bare name (``Orders``) matches the table in any schema.  A qualified
    name (``dbo.Orders``) must match both schema and table.
    """
    schema, dot, table = reference.rpartition(".")
    if not dot:
        return obj.table.casefold() == reference.casefold()
    return obj.is_object(schema, table)
