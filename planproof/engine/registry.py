"""Diagnostics engine registry (Open/Closed Principle).

``EngineFactory`` maps an engine name, as carried by
:attr:`ValidationConfig.engine <planproof.schema.config.ValidationConfig.engine>`,
to a :class:`~planproof.engine.base.DiagnosticsEngine` implementation.
Register a new engine once; the validator looks it up automatically.

Usage::

    from planproof.engine.registry import EngineFactory

    @EngineFactory.register("postgres")
    class PostgresEngine(DiagnosticsEngine):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from planproof.engine.base import DiagnosticsEngine
from planproof.errors import ConfigurationError


class EngineFactory:
    """Registry mapping engine names to :class:`DiagnosticsEngine` classes.

    Example::

        @EngineFactory.register("sqlserver")
        class SqlServerEngine(DiagnosticsEngine):
            ...

        engine = EngineFactory.create("sqlserver")
    """

    _engines: ClassVar[dict[str, type[DiagnosticsEngine]]] = {}

    @classmethod
    def register(
        cls, name: str
    ) -> Callable[[type[DiagnosticsEngine]], type[DiagnosticsEngine]]:
        """Decorator that registers an engine class under ``name``.

        Args:
            name: The engine name (e.g. ``"sqlserver"``).

        Returns:
            A decorator that registers and returns the engine class.
        """

        def decorator(engine_cls: type[DiagnosticsEngine]) -> type[DiagnosticsEngine]:
            cls._engines[name] = engine_cls
            return engine_cls

        return decorator

    @classmethod
    def create(cls, name: str) -> DiagnosticsEngine:
        """Instantiate the engine registered for ``name``.

        Raises:
            ConfigurationError: If no engine is registered for ``name``.
        """
        engine_cls = cls._engines.get(name)
        if engine_cls is None:
            registered = sorted(cls._engines)
            raise ConfigurationError(
                f"Unsupported engine: '{name}'. Registered engines: {registered}.",
                field="engine",
            )
        return engine_cls()

    @classmethod
    def registered_engines(cls) -> list[str]:
        """Return the sorted list of registered engine names."""
        return sorted(cls._engines)
