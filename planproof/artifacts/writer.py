"""Forensic artifact persistence.

Each validation run writes two files into a directory keyed by benchmark
family and variant::

    {root}/validation/{family}/{variant}/plan.xml
    {root}/validation/{family}/{variant}/session-options.txt

Paths are deterministic and overwritten on every run, so the files on disk
always describe the latest run of that variant.  The session options dump is
one ``name: value`` line per option and can be read back with
:meth:`ArtifactWriter.read_session_options`.
"""

from __future__ import annotations

from pathlib import Path

from planproof.logging import get_logger
from planproof.schema.session_options import SessionOptionSet
from planproof.settings import get_settings

logger = get_logger(__name__)

VALIDATION_DIR = "validation"
PLAN_FILENAME = "plan.xml"
SESSION_OPTIONS_FILENAME = "session-options.txt"

_SEPARATOR = ": "


class ArtifactWriter:
    """Writes plan and session-option artifacts for one artifact root.

    Args:
        root: Base directory.  Defaults to
            :attr:`PlanProofSettings.artifact_root <planproof.settings.PlanProofSettings.artifact_root>`.
    """

    def __init__(self, root: Path | str | None = None) -> None:
        self._root = Path(root) if root is not None else get_settings().artifact_root

    @property
    def root(self) -> Path:
        return self._root

    def directory_for(self, family: str, variant: str) -> Path:
        """Return (and create) the artifact directory for ``family/variant``."""
        path = self._root / VALIDATION_DIR / family / variant
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_plan(self, family: str, variant: str, plan_xml: str) -> Path:
        """Persist the raw plan document and return its path."""
        path = self.directory_for(family, variant) / PLAN_FILENAME
        path.write_text(plan_xml, encoding="utf-8")
        logger.debug("Wrote plan artifact {}", path)
        return path

    def write_session_options(
        self, family: str, variant: str, options: SessionOptionSet
    ) -> Path:
        """Persist the session options dump and return its path."""
        path = self.directory_for(family, variant) / SESSION_OPTIONS_FILENAME
        path.write_text(serialize_session_options(options), encoding="utf-8")
        logger.debug("Wrote session options artifact {}", path)
        return path

    @staticmethod
    def read_session_options(path: Path) -> SessionOptionSet:
        """Load a dump written by :meth:`write_session_options`."""
        return parse_session_options(Path(path).read_text(encoding="utf-8"))


def serialize_session_options(options: SessionOptionSet) -> str:
    """Render ``options`` as newline-separated ``name: value`` lines."""
    return "\n".join(f"{name}{_SEPARATOR}{value}" for name, value in options.items())


def parse_session_options(text: str) -> SessionOptionSet:
    """Parse the ``name: value`` format produced by :func:`serialize_session_options`.

    Blank lines are ignored.  Only the first separator splits a line, so values
    may themselves contain ``": "``.
    """
    pairs: list[tuple[str, str]] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        name, _, value = line.partition(_SEPARATOR)
        pairs.append((name, value))
    return SessionOptionSet(pairs)
