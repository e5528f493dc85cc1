"""Registered parameter formulas.

Importing this package registers every built-in formula.
"""

from . import attendance_parameters, leave_parameters, task_parameters  # noqa: F401
from .registry import PARAMETER_REGISTRY, ParameterResult, ScoringContext, register, score_parameter

__all__ = [
    "PARAMETER_REGISTRY",
    "ParameterResult",
    "ScoringContext",
    "register",
    "score_parameter",
]
