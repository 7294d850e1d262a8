"""Bone sheetness package.

This package converts per-voxel Hessian eigenvalues into a sheetness measure
that enhances plate-like structures such as trabecular bone.  It is the
eigenvalue-to-measure stage of a multi-scale Hessian enhancement pipeline;
the Hessian, the eigen decomposition and the parameter estimation happen
upstream.

Modules:

- :mod:`measure` – Abstract eigenvalue-to-measure contract and executor.
- :mod:`descoteaux` – Sheetness measure of Descoteaux et al.
- :mod:`ordering` – Eigenvalue ordering conventions.
- :mod:`errors` – Configuration errors.
- :mod:`synthetic` – Synthetic eigenvalue images for testing.
- :mod:`metrics` – Utility functions to evaluate a measure.

"""

from .errors import InvalidParameterCount, InvalidEigenDimension
from .ordering import EigenValueOrder, order_eigenvalues, check_eigen_image
from .measure import EigenToMeasure
from .descoteaux import (
    DescoteauxEigenToMeasure,
    descoteaux_score,
    descoteaux_sheetness,
    descoteaux_sheetness_array,
)
from .synthetic import generate_synthetic_eigenvalues
from .metrics import f1_score, mse

__all__ = [
    "InvalidParameterCount",
    "InvalidEigenDimension",
    "EigenValueOrder",
    "order_eigenvalues",
    "check_eigen_image",
    "EigenToMeasure",
    "DescoteauxEigenToMeasure",
    "descoteaux_score",
    "descoteaux_sheetness",
    "descoteaux_sheetness_array",
    "generate_synthetic_eigenvalues",
    "f1_score",
    "mse",
]
