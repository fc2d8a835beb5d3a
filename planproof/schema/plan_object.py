"""One physical object reference extracted from an execution plan."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlanObject:
    """A table, view, or index touched by a plan operator.

    Identifiers are stored without vendor quoting.

    Attributes:
        schema: Owning schema, or ``""`` when the plan does not expose it.
        table: Table or view name.  Never empty.
        index: Index name, or ``""`` when the operator names no index.
    """

    schema: str
    table: str
    index: str = ""

    def is_object(self, schema: str, table: str) -> bool:
        """Case-insensitive match on both schema and table."""
        return (
            self.schema.casefold() == schema.casefold()
            and self.table.casefold() == table.casefold()
        )

    def uses_index(self, index: str) -> bool:
        """Case-insensitive match on the index name."""
        return self.index.casefold() == index.casefold()
