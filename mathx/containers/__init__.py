"""
Dense containers.

Array and Matrix are the only sanctioned way to hand dense numeric data
to mathx algorithms. Both own their storage exclusively and validate
every index.
"""

from mathx.containers.array import Array
from mathx.containers.matrix import Matrix

__all__ = [
    "Array",
    "Matrix",
]
