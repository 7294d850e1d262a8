"""Eigenvalue ordering conventions.

Every measure declares which ordering of the eigenvalue triplet it expects
(see :attr:`bone_sheetness.measure.EigenToMeasure.eigenvalue_order`).  The
producer of the eigenvalue image is responsible for honouring it; the
measures themselves never re-sort or re-check a triplet.  The helpers here
let a producer sort an existing eigenvalue array into the required order and
check the structural shape of an eigenvalue image once before a pass.
"""

from __future__ import annotations

import enum

import numpy as np
from numpy.typing import ArrayLike

from .errors import InvalidEigenDimension

__all__ = ["EigenValueOrder", "order_eigenvalues", "check_eigen_image"]


class EigenValueOrder(enum.Enum):
    """Ordering of the three eigenvalues stored at each voxel."""

    BY_VALUE = 1
    BY_MAGNITUDE = 2
    UNORDERED = 3


def order_eigenvalues(eigenvalues: ArrayLike, order: EigenValueOrder) -> np.ndarray:
    """Sort the last axis of an eigenvalue array.

    Parameters
    ----------
    eigenvalues : array-like of shape (..., 3)
        Eigenvalues per voxel.
    order : EigenValueOrder
        ``BY_VALUE`` sorts ascending (l1 <= l2 <= l3).  ``BY_MAGNITUDE``
        sorts by increasing absolute value (|l1| <= |l2| <= |l3|) while
        preserving sign.  ``UNORDERED`` returns the values untouched.

    Returns
    -------
    ordered : ndarray of the same shape
        A new float64 array.
    """
    eigs = check_eigen_image(eigenvalues)
    if order is EigenValueOrder.UNORDERED:
        return eigs.copy()
    if order is EigenValueOrder.BY_VALUE:
        return np.sort(eigs, axis=-1)
    if order is EigenValueOrder.BY_MAGNITUDE:
        # Stable sort keeps ties in their original order
        idx = np.argsort(np.abs(eigs), axis=-1, kind="stable")
        return np.take_along_axis(eigs, idx, axis=-1)
    raise ValueError(f"unknown eigenvalue order: {order!r}")


def check_eigen_image(eigenvalues: ArrayLike) -> np.ndarray:
    """Return ``eigenvalues`` as a float64 array, checking it holds triplets.

    Raises
    ------
    InvalidEigenDimension
        If the array is zero-dimensional or its last axis is not of length 3.
    """
    eigs = np.asarray(eigenvalues, dtype=np.float64)
    if eigs.ndim == 0 or eigs.shape[-1] != 3:
        raise InvalidEigenDimension(eigs.shape)
    return eigs
