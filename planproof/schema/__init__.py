"""planproof schema models: ValidationConfig, PlanObject, SessionOptionSet, ValidationResult."""
from planproof.schema.config import ValidationConfig
from planproof.schema.plan_object import PlanObject
from planproof.schema.result import ValidationResult
from planproof.schema.session_options import SessionOptionSet

__all__ = [
    "PlanObject",
    "SessionOptionSet",
    "ValidationConfig",
    "ValidationResult",
]
