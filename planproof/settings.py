"""Library settings read from ``PLANPROOF_*`` environment variables."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


class PlanProofSettings(BaseSettings):
    """Settings shared by every validation run.

    Attributes:
        artifact_root: Directory under which ``validation/{family}/{variant}``
            artifact folders are created.
        log_level: Level passed to :func:`planproof.logging.setup_logging`.
    """

    model_config = SettingsConfigDict(env_prefix="PLANPROOF_")

    artifact_root: Path = Path("artifacts")
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in VALID_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return upper


@lru_cache(maxsize=1)
def get_settings() -> PlanProofSettings:
    """Return the process-wide settings, read once from the environment."""
    return PlanProofSettings()
