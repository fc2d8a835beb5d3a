"""planproof engine layer: database-specific diagnostic commands."""
from planproof.engine.base import Connection, Cursor, DiagnosticsEngine
from planproof.engine.registry import EngineFactory
from planproof.engine.sqlserver import SqlServerEngine

__all__ = [
    "Connection",
    "Cursor",
    "DiagnosticsEngine",
    "EngineFactory",
    "SqlServerEngine",
]
