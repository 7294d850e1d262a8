"""Sheetness measure of Descoteaux et al.

Plate-like structures such as trabecular bone or cortical shells produce one
eigenvalue of large magnitude across the plate and two small eigenvalues
along it.  With the triplet ordered by magnitude (|l1| <= |l2| <= |l3|) the
measure combines three responses::

    R_sheet = |l2| / |l3|
    R_blob  = |2|l3| - |l2| - |l1|| / |l3|
    R_noise = sqrt(l1**2 + l2**2 + l3**2)

    S = exp(-R_sheet**2 / alpha**2)
        * (1 - exp(-R_blob**2 / beta**2))
        * (1 - exp(-R_noise**2 / gamma**2))

``R_sheet`` is small for plates, ``R_blob`` separates plates from blobs and
``R_noise`` removes weak, noise-level curvature.  Each factor lies in [0, 1],
and so does ``S``.

The enhance type ``s`` selects the polarity of the dominant eigenvalue that
counts as a plate: a voxel with ``s * l3 >= 0`` scores 0.  This also covers
``l3 == 0``, where the ratios are undefined.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike

from .measure import EigenToMeasure
from .ordering import EigenValueOrder

__all__ = [
    "descoteaux_score",
    "descoteaux_sheetness_array",
    "DescoteauxEigenToMeasure",
    "descoteaux_sheetness",
]

BRIGHT_OBJECTS = -1.0
DARK_OBJECTS = 1.0


def descoteaux_score(
    l1: float, l2: float, l3: float, alpha: float, beta: float, gamma: float, enhance_type: float = BRIGHT_OBJECTS
) -> float:
    """Sheetness of a single eigenvalue triplet ordered by magnitude.

    ``alpha``, ``beta`` and ``gamma`` must be positive; they are normally
    estimated from the image and are not re-checked here.
    """
    if enhance_type * l3 >= 0:
        return 0.0
    a1, a2, a3 = abs(l1), abs(l2), abs(l3)
    r_sheet = a2 / a3
    r_blob = abs(2.0 * a3 - a2 - a1) / a3
    r_noise = math.sqrt(l1 * l1 + l2 * l2 + l3 * l3)
    sheet = math.exp(-(r_sheet**2) / alpha**2)
    blob = -math.expm1(-(r_blob**2) / beta**2)
    noise = -math.expm1(-(r_noise**2) / gamma**2)
    return sheet * blob * noise


def descoteaux_sheetness_array(
    eigenvalues: np.ndarray, alpha: float, beta: float, gamma: float, enhance_type: float = BRIGHT_OBJECTS
) -> np.ndarray:
    """Vectorised :func:`descoteaux_score` over the last axis of ``eigenvalues``.

    Parameters
    ----------
    eigenvalues : ndarray of shape (..., 3)
        Eigenvalues sorted by increasing magnitude.
    alpha, beta, gamma : float
        Positive weights of the sheet, blob and noise terms.
    enhance_type : float, optional
        ``-1`` or ``+1``; voxels with ``enhance_type * l3 >= 0`` are set to 0.

    Returns
    -------
    sheetness : ndarray of shape ``eigenvalues.shape[:-1]``
    """
    l1 = eigenvalues[..., 0]
    l2 = eigenvalues[..., 1]
    l3 = eigenvalues[..., 2]
    # Suppress the wrong polarity before dividing by |l3|
    keep = enhance_type * l3 < 0
    S = np.zeros(l3.shape, dtype=np.float64)
    l1k, l2k, l3k = l1[keep], l2[keep], l3[keep]
    a1, a2, a3 = np.abs(l1k), np.abs(l2k), np.abs(l3k)
    r_sheet = a2 / a3
    r_blob = np.abs(2.0 * a3 - a2 - a1) / a3
    r_noise = np.sqrt(l1k * l1k + l2k * l2k + l3k * l3k)
    S[keep] = (
        np.exp(-(r_sheet**2) / alpha**2)
        * -np.expm1(-(r_blob**2) / beta**2)
        * -np.expm1(-(r_noise**2) / gamma**2)
    )
    return S


class DescoteauxEigenToMeasure(EigenToMeasure):
    """Descoteaux sheetness as an :class:`~bone_sheetness.measure.EigenToMeasure` strategy.

    Parameters are ``(alpha, beta, gamma)``.  The enhance type defaults to
    bright objects (``-1``).
    """

    required_parameter_count = 3

    def __init__(self, parameters: Sequence[float] | None = None, *, enhance_type: float = BRIGHT_OBJECTS):
        super().__init__()
        self.enhance_type = enhance_type
        if parameters is not None:
            self.set_parameters(parameters)

    @property
    def eigenvalue_order(self) -> EigenValueOrder:
        return EigenValueOrder.BY_MAGNITUDE

    @property
    def enhance_type(self) -> float:
        return self._enhance_type

    @enhance_type.setter
    def enhance_type(self, value: float) -> None:
        self._enhance_type = float(value)

    def set_enhance_bright_objects(self) -> None:
        self.enhance_type = BRIGHT_OBJECTS

    def set_enhance_dark_objects(self) -> None:
        self.enhance_type = DARK_OBJECTS

    def score_voxel(self, triplet: Sequence[float]) -> float:
        l1, l2, l3 = triplet
        alpha, beta, gamma = self._parameters
        return descoteaux_score(l1, l2, l3, alpha, beta, gamma, self._enhance_type)

    def score_array(self, eigenvalues: np.ndarray) -> np.ndarray:
        alpha, beta, gamma = self._parameters
        return descoteaux_sheetness_array(eigenvalues, alpha, beta, gamma, self._enhance_type)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(parameters={self._parameters!r}, "
            f"enhance_type={self._enhance_type!r})"
        )


def descoteaux_sheetness(
    eigenvalues: ArrayLike,
    alpha: float,
    beta: float,
    gamma: float,
    *,
    enhance_type: float = BRIGHT_OBJECTS,
    mask: ArrayLike | None = None,
) -> np.ndarray:
    """Compute the Descoteaux sheetness of an eigenvalue image.

    Parameters
    ----------
    eigenvalues : array-like of shape (z, y, x, 3)
        Hessian eigenvalues per voxel sorted by increasing magnitude (see
        :func:`bone_sheetness.order_eigenvalues`).
    alpha, beta, gamma : float
        Positive weights of the sheet, blob and noise terms.
    enhance_type : float, optional
        ``-1`` for bright objects (default) or ``+1`` for dark objects.
    mask : array-like of bool, optional
        Voxels where the mask is ``False`` are not scored and are 0.

    Returns
    -------
    sheetness : ndarray of shape ``eigenvalues.shape[:-1]``
        Values in [0, 1].
    """
    measure = DescoteauxEigenToMeasure((alpha, beta, gamma), enhance_type=enhance_type)
    measure.set_mask(mask)
    return measure.apply(eigenvalues)
