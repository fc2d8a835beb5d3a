"""planproof validation layer: plan and session assertions plus the orchestrator."""
from planproof.validate.plan_validator import PlanObjectValidator
from planproof.validate.session_validator import SessionOptionValidator
from planproof.validate.validator import BenchmarkValidator, ValidationStage

__all__ = [
    "BenchmarkValidator",
    "PlanObjectValidator",
    "SessionOptionValidator",
    "ValidationStage",
]
