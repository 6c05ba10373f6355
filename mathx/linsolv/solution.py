"""
Iterative solver solution types.

Contains the parameter payloads and user-facing solution wrappers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from mathx.containers import Array
from mathx.core.result import Result


@dataclass(frozen=True)
class IterativeParams:
    """
    Parameter payload for iterative linear solvers.

    The iterate is stored read-only; the solution hands out Array copies.
    """
    x: NDArray[Any]


@dataclass(frozen=True)
class EigenParams:
    """Parameter payload for the power methods."""
    eigenvalue: Any
    eigenvector: NDArray[Any]


class _IterativeSummary:
    """Convergence accessors shared by both solution types."""

    _result: Result[Any]

    @property
    def converged(self) -> bool:
        return self._result.info['converged']

    @property
    def iterations(self) -> int:
        return self._result.info['iterations']

    @property
    def final_change(self) -> float:
        """Size of the last update, in the method's own stopping measure."""
        return self._result.info['final_change']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def method(self) -> str:
        return self._result.method

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings


@dataclass
class IterativeSolution(_IterativeSummary):
    """
    User-facing result of jacobi, gauss_seidel and cgm.

    Wraps the solver Result and exposes the final iterate as an Array.
    """
    _result: Result[IterativeParams]

    @property
    def x(self) -> Array:
        """Final iterate (a fresh copy on every access)."""
        return Array.from_numpy(self._result.params.x)

    def __repr__(self) -> str:
        state = 'converged' if self.converged else 'not converged'
        return (f"IterativeSolution(method={self.method!r}, {state}, "
                f"iterations={self.iterations}, final_change={self.final_change:.3g})")


@dataclass
class EigenSolution(_IterativeSummary):
    """User-facing result of power_method and inverse_power_method."""
    _result: Result[EigenParams]

    @property
    def eigenvalue(self) -> Any:
        return self._result.params.eigenvalue

    @property
    def eigenvector(self) -> Array:
        """Unit 2-norm eigenvector estimate (a fresh copy)."""
        return Array.from_numpy(self._result.params.eigenvector)

    def __repr__(self) -> str:
        state = 'converged' if self.converged else 'not converged'
        return (f"EigenSolution(method={self.method!r}, eigenvalue={self.eigenvalue!r}, "
                f"{state}, iterations={self.iterations})")


def frozen_copy(values: NDArray[Any]) -> NDArray[Any]:
    """Private read-only copy suitable for a frozen payload."""
    values = np.array(values, copy=True)
    values.flags.writeable = False
    return values
