"""The output of a successful validation run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from planproof.schema.session_options import SessionOptionSet


@dataclass(frozen=True)
class ValidationResult:
    """Proof artifacts and facts gathered by one validation run.

    Carries no reference to the connection; the caller still owns it.

    Attributes:
        plan_artifact_path: Where the captured plan document was written.
        session_options_artifact_path: Where the option dump was written.
        session_options: The options reported after session setup.
        resolved_index_name: The index the plan was checked against, either
            the configured name or the view's discovered clustered index.
    """

    plan_artifact_path: Path
    session_options_artifact_path: Path
    session_options: SessionOptionSet
    resolved_index_name: str
