from __future__ import annotations

from functools import lru_cache
import itertools as it
from typing import TYPE_CHECKING

import numpy as np

from math import sqrt

if TYPE_CHECKING:
    import numpy.typing as npt


def gauss_points_weights_edge(n_points: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Generate Gauss-Legendre points and weights for a 1D integration on the interval [-1, +1].

    Args:
        n_points: Number of integration points.

    Raises:
        ValueError: If `n_points` is not 1, 2, 3, 4 or 5.

    Returns:
        A tuple containing the Gauss points and weights.
    """
    if n_points == 1:
        return np.array([0.0]), np.array([2.0])
    elif n_points == 2:
        return np.array([-1/sqrt(3), 1/sqrt(3)]), np.array([1.0, 1.0])
    elif n_points == 3:
        return np.array([-sqrt(3/5), 0.0, sqrt(3/5)]), np.array([5/9, 8/9, 5/9])
    elif n_points == 4:
        a = sqrt(3/7 - 2/7 * sqrt(6/5))
        b = sqrt(3/7 + 2/7 * sqrt(6/5))
        w_a = (18 + sqrt(30)) / 36
        w_b = (18 - sqrt(30)) / 36
        return np.array([-b, -a, a, b]), np.array([w_b, w_a, w_a, w_b])
    elif n_points == 5:
        a = sqrt(5 - 2 * sqrt(10/7)) / 3
        b = sqrt(5 + 2 * sqrt(10/7)) / 3
        w_a = (322 + 13 * sqrt(70)) / 900
        w_b = (322 - 13 * sqrt(70)) / 900
        return np.array([-b, -a, 0.0, a, b]), np.array([w_b, w_a, 128/225, w_a, w_b])
    else:
        raise ValueError(f"Unsupported number of Gauss points: {n_points}. "
                         f"'n_points' must be 1, 2, 3, 4 or 5.")


@lru_cache(maxsize=None)
def gauss_points_weights_tensor(
    n_points: int,
    dimension: int
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Generate the tensor-product Gauss grid on the reference cube [-1, +1]^dimension.

    The grid holds ``n_points ** dimension`` points. Axis 0 varies slowest and the
    last axis varies fastest, so the ordering is identical on every call. Results
    are cached per ``(n_points, dimension)`` and returned as read-only arrays.

    Args:
        n_points: Number of integration points per axis.
        dimension: Spatial dimension of the reference cell (1, 2 or 3).

    Raises:
        ValueError: If `n_points` has no 1D rule or `dimension` is not 1, 2 or 3.

    Returns:
        A tuple of the ``(n_points ** dimension, dimension)`` points and their weights.
    """
    if dimension not in (1, 2, 3):
        raise ValueError(f"Unsupported dimension: {dimension}. 'dimension' must be 1, 2 or 3.")

    points_1d, weights_1d = gauss_points_weights_edge(n_points)

    indices = list(it.product(range(n_points), repeat=dimension))
    points = np.array([[points_1d[i] for i in index] for index in indices], dtype=np.float64)
    weights = np.array([np.prod([weights_1d[i] for i in index]) for index in indices], dtype=np.float64)

    points.setflags(write=False)
    weights.setflags(write=False)
    return points, weights
