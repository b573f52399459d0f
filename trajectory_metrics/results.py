"""
Uniform result shape shared by all metric engines.

Every engine hands its raw output (pointwise distances, alignment path,
accumulated cost matrix) to ``assemble_result`` which computes the
summary statistics and packages everything into a ``MetricResult``.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .exceptions import EmptyInputError

AlignmentPath = List[Tuple[int, int]]


@dataclass
class MetricResult:
    """Distances, alignment and summary statistics of one soll/ist comparison"""
    metric: str
    distances: np.ndarray
    min_distance: float
    max_distance: float
    average_distance: float
    standard_deviation: float
    path: Optional[AlignmentPath] = None
    accumulated_cost: Optional[np.ndarray] = None
    aligned_soll: Optional[np.ndarray] = None  # coupled soll samples, one row per distance
    aligned_ist: Optional[np.ndarray] = None
    score: Optional[float] = None       # LCSS only
    threshold: Optional[float] = None   # LCSS only
    window: Optional[int] = None

    def summary(self) -> Dict[str, float]:
        """Scalar statistics of this result."""
        summary = {
            "min_distance": self.min_distance,
            "max_distance": self.max_distance,
            "average_distance": self.average_distance,
            "standard_deviation": self.standard_deviation,
        }
        if self.score is not None:
            summary["score"] = self.score
        if self.threshold is not None:
            summary["threshold"] = self.threshold
        return summary

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation (arrays as lists, NaN and inf as None)."""
        return {
            "metric": self.metric,
            "distances": _json_values(self.distances),
            "min_distance": _json_scalar(self.min_distance),
            "max_distance": _json_scalar(self.max_distance),
            "average_distance": _json_scalar(self.average_distance),
            "standard_deviation": _json_scalar(self.standard_deviation),
            "path": None if self.path is None else [list(pair) for pair in self.path],
            "accumulated_cost": _json_values(self.accumulated_cost),
            "aligned_soll": _json_values(self.aligned_soll),
            "aligned_ist": _json_values(self.aligned_ist),
            "score": _json_scalar(self.score),
            "threshold": _json_scalar(self.threshold),
            "window": self.window,
        }


def _json_scalar(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return float(value)


def _json_values(array: Optional[np.ndarray]):
    if array is None:
        return None
    as_list = np.asarray(array, dtype=float).tolist()
    return _replace_non_finite(as_list)


def _replace_non_finite(values):
    if isinstance(values, list):
        return [_replace_non_finite(v) for v in values]
    return _json_scalar(values)


def summary_statistics(distances) -> Tuple[float, float, float, float]:
    """
    Minimum, maximum, mean and population standard deviation (divide by N).

    Raises:
        EmptyInputError: If ``distances`` is empty.
    """
    values = np.asarray(distances, dtype=float)
    if values.size == 0:
        raise EmptyInputError("Cannot compute statistics of an empty distance series.")
    return (
        float(np.min(values)),
        float(np.max(values)),
        float(np.mean(values)),
        float(np.std(values)),  # ddof=0
    )


def assemble_result(
    metric: str,
    distances,
    path: Optional[AlignmentPath] = None,
    accumulated_cost: Optional[np.ndarray] = None,
    aligned_soll: Optional[np.ndarray] = None,
    aligned_ist: Optional[np.ndarray] = None,
    score: Optional[float] = None,
    threshold: Optional[float] = None,
    window: Optional[int] = None,
    max_distance: Optional[float] = None,
    allow_empty: bool = False,
) -> MetricResult:
    """
    Package raw engine output into a MetricResult.

    Args:
        metric: Engine name.
        distances: Per-step or per-pair pointwise distances.
        path: Alignment path as (soll index, ist index) pairs, if any.
        accumulated_cost: Cost matrix of the engine's recurrence, if any.
        aligned_soll: Soll coordinates coupled at each distance entry.
        aligned_ist: Ist coordinates coupled at each distance entry.
        score: Similarity score (LCSS).
        threshold: Matching threshold (LCSS).
        window: Band or temporal window used, if any.
        max_distance: Overrides the maximum of ``distances`` (discrete Frechet).
        allow_empty: Return NaN statistics instead of raising for an empty
                     distance series.

    Returns:
        The assembled MetricResult.

    Raises:
        EmptyInputError: If ``distances`` is empty and ``allow_empty`` is False.
    """
    values = np.asarray(distances, dtype=float)
    if values.size == 0 and allow_empty:
        stats = (math.nan, math.nan, math.nan, math.nan)
    else:
        stats = summary_statistics(values)
    min_d, max_d, avg_d, std_d = stats
    if max_distance is not None:
        max_d = float(max_distance)

    return MetricResult(
        metric=metric,
        distances=values,
        min_distance=min_d,
        max_distance=max_d,
        average_distance=avg_d,
        standard_deviation=std_d,
        path=path,
        accumulated_cost=accumulated_cost,
        aligned_soll=aligned_soll,
        aligned_ist=aligned_ist,
        score=score,
        threshold=threshold,
        window=window,
    )
