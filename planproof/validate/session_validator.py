"""Session option assertions.

Names and values are compared case-insensitively.  A required option that
the engine did not report fails with ``'<missing>'`` as its actual value; a
forbidden option passes when it is absent or has a different value.
"""

from __future__ import annotations

from pathlib import Path

from planproof.errors import SessionAssertionError
from planproof.schema.config import ValidationConfig
from planproof.schema.session_options import SessionOptionSet

MISSING = "<missing>"


class SessionOptionValidator:
    """Validates captured session options against a ValidationConfig.

    Args:
        config: The run's configuration.
        plan_path: Plan artifact path quoted in every failure.
        options_path: Session options artifact path quoted in every failure.
    """

    def __init__(self, config: ValidationConfig, plan_path: Path, options_path: Path) -> None:
        self._config = config
        self._plan_path = plan_path
        self._options_path = options_path

    def validate(self, options: SessionOptionSet) -> None:
        """Raise on the first required or forbidden option that does not hold.

        Raises:
            SessionAssertionError: On the first violation.
        """
        for name, expected in self._config.required_session_options.items():
            if not options.value_equals(name, expected):
                actual = options.get(name, MISSING)
                raise SessionAssertionError(
                    f"Session option '{name}' expected '{expected}' but was '{actual}'",
                    code="SESSION_OPTION_MISMATCH",
                    plan_path=self._plan_path,
                    session_options_path=self._options_path,
                    details={"option": name, "expected": expected, "actual": actual},
                )

        for name, forbidden in self._config.forbidden_session_options.items():
            if options.value_equals(name, forbidden):
                raise SessionAssertionError(
                    f"Session option '{name}' must not be '{forbidden}'",
                    code="SESSION_OPTION_FORBIDDEN",
                    plan_path=self._plan_path,
                    session_options_path=self._options_path,
                    details={"option": name, "forbidden": forbidden},
                )
