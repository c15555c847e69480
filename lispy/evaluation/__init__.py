from lispy.evaluation.evaluator import evaluate
from lispy.evaluation.apply import apply, apply_lambda

__all__ = ["evaluate", "apply", "apply_lambda"]
