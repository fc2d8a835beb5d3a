"""planproof artifact layer: plan and session-option dumps on disk."""
from planproof.artifacts.writer import (
    ArtifactWriter,
    parse_session_options,
    serialize_session_options,
)

__all__ = [
    "ArtifactWriter",
    "parse_session_options",
    "serialize_session_options",
]
