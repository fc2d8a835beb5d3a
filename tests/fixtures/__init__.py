"""Test fixtures: captured SHOWPLAN documents and session option dumps."""

from __future__ import annotations

from pathlib import Path

from planproof.schema.config import ValidationConfig

_FIXTURES_DIR = Path(__file__).parent

VIEW_SCHEMA = "dbo"
VIEW_NAME = "vw_CustomerOrderSummary"
VIEW_INDEX = "IX_CustomerOrderSummary_CustomerID"

VIEW_SQL = (
    "SELECT customer_id, company_name, order_count, total_revenue "
    "FROM dbo.vw_CustomerOrderSummary WITH (NOEXPAND) WHERE customer_id = 42"
)

# DBCC USEROPTIONS output for a session with every indexed-view option on.
INDEXED_VIEW_USER_OPTIONS: list[tuple[str, str]] = [
    ("textsize", "2147483647"),
    ("language", "us_english"),
    ("dateformat", "mdy"),
    ("datefirst", "7"),
    ("lock_timeout", "-1"),
    ("quoted_identifier", "SET"),
    ("arithabort", "SET"),
    ("ansi_null_dflt_on", "SET"),
    ("ansi_warnings", "SET"),
    ("ansi_padding", "SET"),
    ("ansi_nulls", "SET"),
    ("concat_null_yields_null", "SET"),
    ("isolation level", "read committed"),
]

# The same session as a default ODBC connection reports it: ARITHABORT off.
DRIVER_DEFAULT_USER_OPTIONS: list[tuple[str, str]] = [
    (name, value) for name, value in INDEXED_VIEW_USER_OPTIONS if name != "arithabort"
]


def load_plan(name: str) -> str:
    """Return the raw SHOWPLAN XML fixture ``{name}.xml``.

    Args:
        name: ``'indexed_view_plan'`` or ``'base_table_plan'``.
    """
    return (_FIXTURES_DIR / f"{name}.xml").read_text(encoding="utf-8")


def make_config(**overrides) -> ValidationConfig:
    """Build a ValidationConfig for the customer order summary view."""
    fields = {
        "benchmark_family": "IndexedView",
        "variant": "ViewQuery",
        "sql": VIEW_SQL,
        "view_schema": VIEW_SCHEMA,
        "view_name": VIEW_NAME,
        **overrides,
    }
    return ValidationConfig(**fields)
