# trajectory_metrics/distance.py
"""
Pointwise Euclidean distance between trajectory samples.
"""
import math
from typing import Sequence, Tuple, Union

import numpy as np

from .exceptions import DimensionMismatchError
from .trajectory import Point, PointSequence, as_points_array

Coordinates = Union[Point, Sequence[float], np.ndarray]


def _coordinates(sample: Coordinates) -> Tuple[float, ...]:
    if isinstance(sample, Point):
        return sample.coordinates
    return tuple(float(c) for c in np.ravel(sample))


def distance(a: Coordinates, b: Coordinates) -> float:
    """
    Euclidean distance between two samples.

    Args:
        a: First sample (Point or coordinate sequence).
        b: Second sample (Point or coordinate sequence).

    Returns:
        The non-negative L2 norm of ``a - b``.

    Raises:
        DimensionMismatchError: If ``a`` and ``b`` have different arity.
    """
    coords_a = _coordinates(a)
    coords_b = _coordinates(b)
    if len(coords_a) != len(coords_b):
        raise DimensionMismatchError(
            "Cannot compare samples of different dimensionality.",
            soll_dimension=len(coords_a),
            ist_dimension=len(coords_b),
        )
    return math.sqrt(sum((ca - cb) ** 2 for ca, cb in zip(coords_a, coords_b)))


def check_dimensions(soll: np.ndarray, ist: np.ndarray, metric: str = None) -> None:
    """Raise DimensionMismatchError unless both (n x d) arrays share d."""
    if soll.shape[1] != ist.shape[1]:
        raise DimensionMismatchError(
            "Soll and ist trajectories have different dimensionality.",
            soll_dimension=soll.shape[1],
            ist_dimension=ist.shape[1],
            metric=metric,
        )


def row_distances(point: np.ndarray, others: np.ndarray) -> np.ndarray:
    """Distances from one sample (d,) to every row of ``others`` (k x d)."""
    return np.sqrt(np.sum((others - point) ** 2, axis=1))


def paired_distances(soll: np.ndarray, ist: np.ndarray) -> np.ndarray:
    """Distances between equally long (k x d) arrays, row by row."""
    return np.sqrt(np.sum((soll - ist) ** 2, axis=1))


def distance_matrix(soll: PointSequence, ist: PointSequence) -> np.ndarray:
    """
    Full (n x m) matrix of Euclidean distances between all soll and ist samples.

    Raises:
        EmptyInputError: If either sequence is empty.
        DimensionMismatchError: If the sequences differ in dimensionality.
    """
    soll_arr = as_points_array(soll)
    ist_arr = as_points_array(ist)
    check_dimensions(soll_arr, ist_arr)
    diff = soll_arr[:, np.newaxis, :] - ist_arr[np.newaxis, :, :]
    return np.sqrt(np.sum(diff ** 2, axis=-1))
