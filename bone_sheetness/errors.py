"""Exceptions raised while configuring an eigenvalue-to-measure pass."""

from __future__ import annotations

__all__ = ["InvalidParameterCount", "InvalidEigenDimension"]


class InvalidParameterCount(ValueError):
    """The parameter vector does not have the length the strategy requires."""

    def __init__(self, expected: int, actual: int | None):
        self.expected = expected
        self.actual = actual
        got = "no parameters" if actual is None else f"{actual} parameter(s)"
        super().__init__(f"expected {expected} parameter(s), got {got}")


class InvalidEigenDimension(ValueError):
    """The eigenvalue image does not hold exactly three values per voxel."""

    def __init__(self, shape: tuple[int, ...]):
        self.shape = shape
        super().__init__(f"eigenvalue image must have shape (..., 3), got {shape}")
