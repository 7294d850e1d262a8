"""Tests for the Descoteaux sheetness measure.

These tests check the scoring function on hand-computed triplets, the
polarity rule selected by the enhance type, the [0, 1] range of the measure
and the agreement between the per-voxel and the vectorised code paths.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from bone_sheetness import (
    DescoteauxEigenToMeasure,
    EigenValueOrder,
    descoteaux_score,
    descoteaux_sheetness,
    descoteaux_sheetness_array,
    order_eigenvalues,
)


def _random_triplets(n, seed=0):
    rng = np.random.default_rng(seed)
    eigs = rng.normal(scale=2.0, size=(n, 3))
    return order_eigenvalues(eigs, EigenValueOrder.BY_MAGNITUDE)


def test_worked_example_dark_objects():
    measure = DescoteauxEigenToMeasure((0.5, 0.5, 500.0))
    measure.set_enhance_dark_objects()
    value = measure.score_voxel((-1.0, -2.0, -5.0))
    expected = (
        math.exp(-0.16 / 0.25)
        * (1.0 - math.exp(-1.96 / 0.25))
        * (1.0 - math.exp(-30.0 / 250000.0))
    )
    assert value == pytest.approx(expected, rel=1e-9)
    assert value == pytest.approx(6.3e-5, rel=1e-2)


def test_worked_example_bright_objects_is_suppressed():
    measure = DescoteauxEigenToMeasure((0.5, 0.5, 500.0))
    measure.set_enhance_bright_objects()
    assert measure.score_voxel((-1.0, -2.0, -5.0)) == 0.0


def test_default_enhance_type_is_bright_objects():
    measure = DescoteauxEigenToMeasure((0.5, 0.5, 1.0))
    assert measure.enhance_type == -1.0
    measure.set_enhance_dark_objects()
    assert measure.enhance_type == 1.0
    measure.enhance_type = -1
    assert measure.enhance_type == -1.0


@pytest.mark.parametrize("enhance_type", [-1.0, 1.0])
def test_wrong_polarity_scores_zero(enhance_type):
    triplets = _random_triplets(500, seed=1)
    for l1, l2, l3 in triplets:
        if enhance_type * l3 > 0:
            assert descoteaux_score(l1, l2, l3, 0.5, 0.5, 1.0, enhance_type) == 0.0
            # parameters play no part in the suppression
            assert descoteaux_score(l1, l2, l3, 10.0, 0.01, 1e6, enhance_type) == 0.0


@pytest.mark.parametrize("enhance_type", [-1.0, 1.0])
def test_zero_dominant_eigenvalue_scores_zero(enhance_type):
    assert descoteaux_score(0.0, 0.0, 0.0, 0.5, 0.5, 1.0, enhance_type) == 0.0
    eigs = np.zeros((2, 2, 2, 3))
    out = descoteaux_sheetness_array(eigs, 0.5, 0.5, 1.0, enhance_type)
    assert np.all(out == 0.0)
    assert np.all(np.isfinite(out))


def test_measure_in_unit_interval():
    triplets = _random_triplets(2000, seed=2)
    for enhance_type in (-1.0, 1.0):
        out = descoteaux_sheetness_array(triplets, 0.5, 0.5, 2.0, enhance_type)
        assert np.all(out >= 0.0) and np.all(out <= 1.0)
        assert np.any(out > 0.0)


def test_switching_orientation_flips_active_sign():
    triplets = _random_triplets(1000, seed=3)
    l3 = triplets[:, 2]
    bright = descoteaux_sheetness_array(triplets, 0.5, 0.5, 2.0, -1.0)
    dark = descoteaux_sheetness_array(triplets, 0.5, 0.5, 2.0, 1.0)
    assert np.all(bright[l3 < 0] == 0.0)
    assert np.all(dark[l3 > 0] == 0.0)
    assert np.any(bright[l3 > 0] > 0.0)
    assert np.any(dark[l3 < 0] > 0.0)


def test_plate_scores_higher_than_blob_and_tube():
    measure = DescoteauxEigenToMeasure((0.5, 0.5, 1.0), enhance_type=1.0)
    plate = measure.score_voxel((-0.01, -0.02, -4.0))
    tube = measure.score_voxel((-0.01, -4.0, -4.0))
    blob = measure.score_voxel((-4.0, -4.0, -4.0))
    assert plate > 0.9
    assert tube < 0.1 * plate
    # a perfect blob has R_blob == 0
    assert blob == 0.0


def test_vectorised_matches_per_voxel():
    triplets = _random_triplets(300, seed=4)
    measure = DescoteauxEigenToMeasure((0.5, 0.5, 2.0), enhance_type=1.0)
    per_voxel = np.array([measure.score_voxel(t) for t in triplets])
    vectorised = measure.score_array(triplets)
    np.testing.assert_allclose(vectorised, per_voxel, rtol=1e-12, atol=0.0)


def test_repeated_scoring_is_bit_identical():
    measure = DescoteauxEigenToMeasure((0.5, 0.5, 500.0), enhance_type=1.0)
    triplet = (-1.0, -2.0, -5.0)
    assert measure.score_voxel(triplet) == measure.score_voxel(triplet)
    image = _random_triplets(64, seed=5).reshape(4, 4, 4, 3)
    assert np.array_equal(measure.apply(image), measure.apply(image))


def test_functional_api_with_mask():
    image = _random_triplets(27, seed=6).reshape(3, 3, 3, 3)
    mask = np.zeros((3, 3, 3), dtype=bool)
    mask[1] = True
    out = descoteaux_sheetness(image, 0.5, 0.5, 2.0, enhance_type=1.0, mask=mask)
    full = descoteaux_sheetness(image, 0.5, 0.5, 2.0, enhance_type=1.0)
    assert out.shape == (3, 3, 3)
    assert np.all(out[~mask] == 0.0)
    np.testing.assert_allclose(out[mask], full[mask], rtol=1e-12)


def test_eigenvalue_order_is_by_magnitude():
    assert DescoteauxEigenToMeasure().eigenvalue_order is EigenValueOrder.BY_MAGNITUDE


def test_repr_reports_configuration():
    measure = DescoteauxEigenToMeasure((0.5, 0.5, 2.0), enhance_type=1.0)
    text = repr(measure)
    assert "DescoteauxEigenToMeasure" in text
    assert "(0.5, 0.5, 2.0)" in text
    assert "enhance_type=1.0" in text
