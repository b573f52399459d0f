# trajectory_metrics/metrics/__init__.py
"""
Metric engines comparing a soll trajectory with an ist trajectory.

Each engine is a pure function of its two point sequences and its
configuration; ``compute_metric`` dispatches to them by name.
"""
from typing import TYPE_CHECKING, Optional

from ..constants import (
    METRIC_DFD,
    METRIC_DTW,
    METRIC_DTW_JOHNEN,
    METRIC_EUCLIDEAN,
    METRIC_LCSS,
)
from ..exceptions import ConfigurationError, DimensionMismatchError
from ..results import MetricResult
from ..trajectory import PointSequence, as_points_array
from .dtw import dtw, dtw_johnen
from .euclidean import euclidean_align
from .frechet import discrete_frechet
from .lcss import lcss

if TYPE_CHECKING:
    from ..config import MetricsConfig

ENGINES = {
    METRIC_EUCLIDEAN: euclidean_align,
    METRIC_DTW: dtw,
    METRIC_DTW_JOHNEN: dtw_johnen,
    METRIC_DFD: discrete_frechet,
    METRIC_LCSS: lcss,
}


def _project(sequence: PointSequence, dimensions: Optional[int]):
    array = as_points_array(sequence)
    if dimensions is None:
        return array
    if dimensions > array.shape[1]:
        raise DimensionMismatchError(
            f"Cannot compare {dimensions} coordinates of {array.shape[1]}D points."
        )
    return array[:, :dimensions]


def compute_metric(
    name: str,
    soll: PointSequence,
    ist: PointSequence,
    config: Optional["MetricsConfig"] = None,
) -> MetricResult:
    """
    Run the metric engine ``name`` with the window/threshold settings of ``config``.

    Raises:
        ConfigurationError: If ``name`` is not a known metric.
        TrajectoryMetricsError: Whatever the engine raises for invalid input.
    """
    if name not in ENGINES:
        raise ConfigurationError(
            f"Unknown metric '{name}'. Available metrics: {', '.join(ENGINES)}."
        )
    if config is None:
        from ..config import MetricsConfig
        config = MetricsConfig()

    soll_arr = _project(soll, config.dimensions)
    ist_arr = _project(ist, config.dimensions)

    if name == METRIC_DTW:
        return dtw(soll_arr, ist_arr, window=config.dtw_window)
    if name == METRIC_DTW_JOHNEN:
        return dtw_johnen(soll_arr, ist_arr, window=config.johnen_window)
    if name == METRIC_LCSS:
        return lcss(soll_arr, ist_arr, threshold=config.lcss_threshold, window=config.lcss_window)
    return ENGINES[name](soll_arr, ist_arr)


__all__ = [
    "ENGINES",
    "compute_metric",
    "euclidean_align",
    "dtw",
    "dtw_johnen",
    "discrete_frechet",
    "lcss",
]
