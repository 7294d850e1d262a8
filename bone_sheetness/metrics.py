"""Metrics for evaluating a sheetness map against a ground-truth segmentation."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

__all__ = ["f1_score", "mse"]


def f1_score(pred: ArrayLike, gt: ArrayLike, *, threshold: float = 0.5) -> float:
    """Dice/F1 overlap between a thresholded measure and a ground truth.

    Parameters
    ----------
    pred : array-like
        Measure per voxel, values in [0, 1].
    gt : array-like
        Ground-truth sheet voxels, boolean or in [0, 1].
    threshold : float, optional
        Voxels with ``pred >= threshold`` (and ``gt >= threshold`` for a
        non-boolean ground truth) count as positive.

    Returns
    -------
    f1 : float
        1.0 when neither map has a positive voxel.
    """
    p = np.asarray(pred, dtype=np.float64)
    g = np.asarray(gt)
    if p.shape != g.shape:
        raise ValueError("pred and gt must have the same shape")
    p_bin = p >= threshold
    g_bin = g if g.dtype == bool else g.astype(np.float64) >= threshold
    tp = int(np.logical_and(p_bin, g_bin).sum())
    fp = int(np.logical_and(p_bin, ~g_bin).sum())
    fn = int(np.logical_and(~p_bin, g_bin).sum())
    if tp + fp + fn == 0:
        return 1.0
    return 2.0 * tp / (2.0 * tp + fp + fn)


def mse(pred: ArrayLike, gt: ArrayLike) -> float:
    """Mean squared error between a measure and a (boolean or real) ground truth."""
    p = np.asarray(pred, dtype=np.float64)
    g = np.asarray(gt, dtype=np.float64)
    if p.shape != g.shape:
        raise ValueError("pred and gt must have the same shape")
    return float(((p - g) ** 2).mean())
