"""
Precision and error utilities.

Submodules:
    precision: machine epsilon and closeness checks
    error: error measures and the diagnostic sink
"""

from mathx.utils.precision import machine_epsilon, is_close, EPSILON_32, EPSILON_64
from mathx.utils.error import (
    MathxWarning,
    report,
    absolute_value,
    e_abs,
    e_rel,
    one_sided_difference,
    central_difference,
)

__all__ = [
    "machine_epsilon",
    "is_close",
    "EPSILON_32",
    "EPSILON_64",
    "MathxWarning",
    "report",
    "absolute_value",
    "e_abs",
    "e_rel",
    "one_sided_difference",
    "central_difference",
]
