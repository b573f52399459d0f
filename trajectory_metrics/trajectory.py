"""
Data structures for robot trajectory samples.

This module defines the point and point-sequence types that the metric
engines compare: a planned ("soll") trajectory against a measured ("ist")
trajectory, each an ordered sequence of Cartesian samples.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .exceptions import DimensionMismatchError, EmptyInputError


@dataclass(frozen=True)
class Point:
    """Single trajectory sample: coordinates plus optional timestamp and joint angles"""
    coordinates: Tuple[float, ...]
    timestamp: Optional[float] = None
    joints: Optional[Tuple[float, ...]] = None  # joint states at this sample

    def __post_init__(self):
        coordinates = tuple(float(c) for c in self.coordinates)
        if not coordinates:
            raise DimensionMismatchError("A point needs at least one coordinate.")
        object.__setattr__(self, "coordinates", coordinates)
        if self.timestamp is not None:
            object.__setattr__(self, "timestamp", float(self.timestamp))
        if self.joints is not None:
            object.__setattr__(self, "joints", tuple(float(q) for q in self.joints))

    @property
    def dimension(self) -> int:
        return len(self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)


@dataclass(frozen=True)
class Trajectory:
    """
    Ordered, non-empty sequence of points in temporal order.

    All points share the same coordinate dimensionality. ``role`` is
    usually ``"soll"`` or ``"ist"`` and ``name`` an upstream identifier
    (for example the bahn ID); neither influences the metrics.
    """
    points: Tuple[Point, ...]
    role: Optional[str] = None
    name: Optional[str] = None
    _dimension: int = field(init=False, repr=False, compare=False, default=0)

    def __post_init__(self):
        points = tuple(
            p if isinstance(p, Point) else Point(p) for p in self.points
        )
        if not points:
            raise EmptyInputError(
                f"Trajectory{' ' + repr(self.role) if self.role else ''} has no points."
            )
        dimensions = {p.dimension for p in points}
        if len(dimensions) > 1:
            raise DimensionMismatchError(
                f"Trajectory points have mixed dimensionality: {sorted(dimensions)}."
            )
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "_dimension", dimensions.pop())

    @classmethod
    def from_array(
        cls,
        array,
        timestamps: Optional[Sequence[float]] = None,
        role: Optional[str] = None,
        name: Optional[str] = None,
    ) -> "Trajectory":
        """
        Build a trajectory from an (n x d) array-like of coordinates.

        Args:
            array: Coordinates, one row per sample.
            timestamps: Optional timestamps, one per sample.
            role: "soll" or "ist".
            name: Optional identifier.

        Returns:
            A new Trajectory.

        Raises:
            EmptyInputError: If the array holds no samples.
            DimensionMismatchError: If rows are ragged or the timestamp count differs.
        """
        coords = as_points_array(array)
        if timestamps is not None and len(timestamps) != len(coords):
            raise DimensionMismatchError(
                f"Got {len(timestamps)} timestamps for {len(coords)} samples."
            )
        points = tuple(
            Point(
                tuple(row),
                timestamp=None if timestamps is None else timestamps[i],
            )
            for i, row in enumerate(coords)
        )
        return cls(points, role=role, name=name)

    @classmethod
    def from_columns(
        cls,
        x: Sequence[float],
        y: Sequence[float],
        z: Optional[Sequence[float]] = None,
        timestamps: Optional[Sequence[float]] = None,
        role: Optional[str] = None,
        name: Optional[str] = None,
    ) -> "Trajectory":
        """Build a trajectory from separate coordinate columns (x_soll, y_soll, z_soll, ...)."""
        columns = [x, y] if z is None else [x, y, z]
        lengths = {len(c) for c in columns}
        if len(lengths) > 1:
            raise DimensionMismatchError(
                f"Coordinate columns have different lengths: {[len(c) for c in columns]}."
            )
        if not lengths or lengths.pop() == 0:
            raise EmptyInputError("Coordinate columns are empty.")
        array = np.column_stack([np.asarray(c, dtype=float) for c in columns])
        return cls.from_array(array, timestamps=timestamps, role=role, name=name)

    @property
    def dimension(self) -> int:
        return self._dimension

    def as_array(self) -> np.ndarray:
        """Return the coordinates as a float array of shape (n, d)."""
        return np.array([p.coordinates for p in self.points], dtype=float)

    def timestamps(self) -> List[Optional[float]]:
        return [p.timestamp for p in self.points]

    def project(self, dimensions: int) -> "Trajectory":
        """Keep only the leading ``dimensions`` coordinates of every point."""
        if dimensions < 1 or dimensions > self.dimension:
            raise DimensionMismatchError(
                f"Cannot project a {self.dimension}D trajectory onto {dimensions}D."
            )
        points = tuple(
            Point(p.coordinates[:dimensions], timestamp=p.timestamp, joints=p.joints)
            for p in self.points
        )
        return Trajectory(points, role=self.role, name=self.name)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]


PointSequence = Union[Trajectory, Sequence[Point], Sequence[Sequence[float]], np.ndarray]


def as_points_array(sequence: PointSequence) -> np.ndarray:
    """
    Normalise a point sequence into a float array of shape (n, d).

    Accepts a Trajectory, a sequence of Points, or any (n x d) array-like.
    A flat sequence of scalars is treated as a 1-D series.

    Raises:
        EmptyInputError: If the sequence has no samples.
        DimensionMismatchError: If the samples have differing arity.
    """
    if isinstance(sequence, Trajectory):
        return sequence.as_array()
    if sequence is None:
        raise EmptyInputError("Point sequence is missing.")

    items = list(sequence) if not isinstance(sequence, np.ndarray) else sequence
    if len(items) == 0:
        raise EmptyInputError("Point sequence has no points.")
    if not isinstance(items, np.ndarray) and any(isinstance(p, Point) for p in items):
        # Points may be mixed with plain coordinate tuples
        items = [p.coordinates if isinstance(p, Point) else tuple(p) for p in items]
        arities = {len(p) for p in items}
        if len(arities) > 1:
            raise DimensionMismatchError(
                f"Point sequence has mixed dimensionality: {sorted(arities)}."
            )

    try:
        array = np.asarray(items, dtype=float)
    except ValueError as e:
        raise DimensionMismatchError(
            f"Point sequence has mixed dimensionality: {e}"
        ) from e

    if array.ndim == 1:
        array = array.reshape(-1, 1)
    if array.ndim != 2:
        raise DimensionMismatchError(
            f"Expected an (n x d) point sequence, got an array of shape {array.shape}."
        )
    if array.shape[0] == 0:
        raise EmptyInputError("Point sequence has no points.")
    if array.shape[1] == 0:
        raise DimensionMismatchError("Points need at least one coordinate.")
    return array
