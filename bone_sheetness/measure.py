"""Abstract contract for turning eigenvalue triplets into a scalar measure.

Any local-structure measure (sheetness, vesselness, blobness, ...) derives
from :class:`EigenToMeasure` so it can be swapped into a multi-scale
Hessian enhancement pipeline.  A strategy declares

- the eigenvalue ordering it relies on (:attr:`EigenToMeasure.eigenvalue_order`),
- how many parameters it needs (:attr:`EigenToMeasure.required_parameter_count`),
- how a single voxel is scored (:meth:`EigenToMeasure.score_voxel`).

Parameters and mask are configured before a pass and are read-only while
voxels are scored, so scoring is a pure function of the triplet and may be
run from any number of workers at once.
"""

from __future__ import annotations

import abc
import logging
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike

from .errors import InvalidParameterCount
from .ordering import EigenValueOrder, check_eigen_image

__all__ = ["EigenToMeasure"]

logger = logging.getLogger(__name__)


class EigenToMeasure(abc.ABC):
    """Base class of every eigenvalue-to-measure strategy."""

    #: Number of entries the parameter vector must hold.
    required_parameter_count: int = 0

    def __init__(self) -> None:
        self._parameters: tuple[float, ...] | None = None
        self._mask: np.ndarray | None = None

    # -- configuration -------------------------------------------------

    @property
    def parameters(self) -> tuple[float, ...] | None:
        """The stored parameter vector, or ``None`` if never set."""
        return self._parameters

    def set_parameters(self, params: Sequence[float]) -> None:
        """Store the parameter vector.

        The length is not checked here; :meth:`validate_before_run` does
        that once before a pass.
        """
        self._parameters = tuple(float(p) for p in params)

    @property
    def mask(self) -> np.ndarray | None:
        return self._mask

    def set_mask(self, mask: ArrayLike | None) -> None:
        """Store an optional boolean mask over the image grid (``None`` clears it)."""
        self._mask = None if mask is None else np.asarray(mask, dtype=bool)

    @property
    @abc.abstractmethod
    def eigenvalue_order(self) -> EigenValueOrder:
        """Ordering the eigenvalue producer must use for this measure."""

    def validate_before_run(self) -> None:
        """Check the configuration once before any voxel is scored.

        Raises
        ------
        InvalidParameterCount
            If no parameters were set or their number differs from
            :attr:`required_parameter_count`.
        """
        actual = None if self._parameters is None else len(self._parameters)
        if actual != self.required_parameter_count:
            logger.debug(
                "%s rejected parameters %r", type(self).__name__, self._parameters
            )
            raise InvalidParameterCount(self.required_parameter_count, actual)

    # -- scoring -------------------------------------------------------

    @abc.abstractmethod
    def score_voxel(self, triplet: Sequence[float]) -> float:
        """Score one eigenvalue triplet ordered as :attr:`eigenvalue_order`."""

    def score_array(self, eigenvalues: np.ndarray) -> np.ndarray:
        """Score every triplet along the last axis of ``eigenvalues``.

        Subclasses override this with a vectorised form; the default calls
        :meth:`score_voxel` once per triplet.
        """
        flat = eigenvalues.reshape(-1, 3)
        scores = np.fromiter(
            (self.score_voxel(t) for t in flat), dtype=np.float64, count=flat.shape[0]
        )
        return scores.reshape(eigenvalues.shape[:-1])

    def apply(self, eigenvalues: ArrayLike) -> np.ndarray:
        """Compute the measure for a whole eigenvalue image.

        Parameters
        ----------
        eigenvalues : array-like of shape (z, y, x, 3)
            Eigenvalue image ordered as :attr:`eigenvalue_order`.  Any
            leading shape is accepted.

        Returns
        -------
        measure : ndarray of shape ``eigenvalues.shape[:-1]``
            The measure per voxel.  Voxels outside the mask are 0 and are
            never scored.

        Raises
        ------
        InvalidEigenDimension
            If the last axis is not of length 3.
        InvalidParameterCount
            If the parameters do not fit the strategy.
        ValueError
            If the mask does not cover the image grid.
        """
        eigs = check_eigen_image(eigenvalues)
        self.validate_before_run()
        grid = eigs.shape[:-1]
        out = np.zeros(grid, dtype=np.float64)
        if self._mask is None:
            out[...] = self.score_array(eigs)
            scored = out.size
        else:
            if self._mask.shape != grid:
                raise ValueError(
                    f"mask shape {self._mask.shape} does not match image grid {grid}"
                )
            out[self._mask] = self.score_array(eigs[self._mask])
            scored = int(self._mask.sum())
        logger.debug("%r scored %d of %d voxels on grid %s", self, scored, out.size, grid)
        return out
