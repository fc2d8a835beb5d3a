"""planproof plan layer: execution plan document → PlanObject list."""
from planproof.plan.extractor import SHOWPLAN_NAMESPACE, extract_plan_objects, strip_brackets

__all__ = [
    "SHOWPLAN_NAMESPACE",
    "extract_plan_objects",
    "strip_brackets",
]
