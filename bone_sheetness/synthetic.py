"""Synthetic eigenvalue images for testing sheetness measures.

Real eigenvalue images come from a Hessian filter run on CT data.  For
algorithm development it is handier to build the eigenvalue image directly:
planar sheets are embedded as voxels with one dominant eigenvalue of a
chosen sign and two small ones, and the background carries spatially
correlated, noise-level curvature in all three eigenvalues.

Example
-------

>>> eigs, gt = generate_synthetic_eigenvalues((16, 64, 64), num_sheets=2, seed=0)
>>> sheet = descoteaux_sheetness(eigs, 0.5, 0.5, 0.25, enhance_type=1.0)
"""

from __future__ import annotations

import numpy as np
from scipy.ndimage import gaussian_filter

from .ordering import EigenValueOrder, order_eigenvalues

__all__ = ["generate_synthetic_eigenvalues"]


def generate_synthetic_eigenvalues(
    shape: tuple[int, int, int] = (32, 64, 64),
    *,
    num_sheets: int = 2,
    thickness: float = 1.0,
    sheet_strength: float = 1.0,
    polarity: float = -1.0,
    noise_sigma: float = 0.05,
    noise_smooth: float = 1.0,
    seed: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Generate an eigenvalue image containing planar sheets.

    Parameters
    ----------
    shape : tuple of ints
        Grid shape ``(z, y, x)``.
    num_sheets : int, optional
        Number of planes with random orientation passing near the centre.
    thickness : float, optional
        Half thickness of each sheet in voxel units.
    sheet_strength : float, optional
        Magnitude of the dominant eigenvalue inside a sheet.
    polarity : float, optional
        Sign of the dominant eigenvalue inside a sheet.  Bright plates on a
        dark background give a negative dominant eigenvalue.
    noise_sigma : float, optional
        Standard deviation of the background and in-plane eigenvalues.
    noise_smooth : float, optional
        Gaussian smoothing applied to the background noise field; a value of
        0 leaves it white.
    seed : int or None, optional
        Seed of the random generator.

    Returns
    -------
    eigenvalues : ndarray of shape ``shape + (3,)``
        Eigenvalues sorted by increasing magnitude.
    gt_sheet : ndarray of bool, shape ``shape``
        ``True`` where a voxel belongs to a sheet.
    """
    rng = np.random.default_rng(seed)
    z_dim, y_dim, x_dim = shape

    # Background: correlated noise in each eigenvalue channel
    eigs = np.empty(tuple(shape) + (3,), dtype=np.float64)
    for k in range(3):
        field = rng.standard_normal(size=shape)
        if noise_smooth > 0:
            field = gaussian_filter(field, sigma=noise_smooth)
            # renormalise to unit variance after smoothing
            if field.std() > 0:
                field /= field.std()
        eigs[..., k] = noise_sigma * field

    # Coordinates centred at origin
    zz, yy, xx = np.meshgrid(
        np.arange(z_dim) - (z_dim - 1) / 2.0,
        np.arange(y_dim) - (y_dim - 1) / 2.0,
        np.arange(x_dim) - (x_dim - 1) / 2.0,
        indexing="ij",
    )
    coords = np.stack((zz, yy, xx), axis=-1)

    gt_sheet = np.zeros(shape, dtype=bool)
    max_offset = 0.25 * min(shape)
    for _ in range(num_sheets):
        n = rng.normal(size=3)
        n /= np.linalg.norm(n)
        offset = rng.uniform(-max_offset, max_offset)
        dist = np.tensordot(coords, n, axes=([3], [0])) - offset
        gt_sheet |= np.abs(dist) <= thickness

    n_sheet = int(gt_sheet.sum())
    dominant = polarity * sheet_strength * (1.0 + 0.1 * rng.standard_normal(n_sheet))
    eigs[gt_sheet, 0] = noise_sigma * rng.standard_normal(n_sheet)
    eigs[gt_sheet, 1] = noise_sigma * rng.standard_normal(n_sheet)
    eigs[gt_sheet, 2] = dominant

    return order_eigenvalues(eigs, EigenValueOrder.BY_MAGNITUDE), gt_sheet
