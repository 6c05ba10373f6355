"""
Result envelope for iterative mathx computations.

Direct algorithms (products, elimination, factorizations) return plain
containers. Iterative solvers and eigenvalue iterations also report how
they got there: whether the stopping test was met, after how many
iterations, the last change measure, wall time per phase and any
non-fatal warnings. They wrap their payload in a frozen Result, which
the user-facing IterativeSolution and EigenSolution then expose.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Payload type (IterativeParams or EigenParams)


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable outcome of one iterative run.

    Attributes:
        params: Final iterate or eigenpair
        info: 'converged', 'iterations' and 'final_change'
        timing: Timer.result() of the run
        method: Name of the solver, e.g. 'gauss_seidel'
        warnings: Messages emitted through mathx.utils.error.report

    Example:
        >>> solution = jacobi(A, b)
        >>> solution._result.info['iterations']
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    method: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if any recorded warning contains ``substring``."""
        return any(substring in w for w in self.warnings)
