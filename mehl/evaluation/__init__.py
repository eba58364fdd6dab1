from mehl.evaluation.evaluator import evaluate, invoke
from mehl.evaluation.exports import propagate_exports, exported_bindings
from mehl.evaluation.matcher import match_pattern
from mehl.evaluation.runtime import Runtime, Frame

__all__ = [
    "evaluate",
    "invoke",
    "propagate_exports",
    "exported_bindings",
    "match_pattern",
    "Runtime",
    "Frame",
]
