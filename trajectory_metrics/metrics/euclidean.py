# trajectory_metrics/metrics/euclidean.py
"""
Index-aligned Euclidean comparison of two trajectories.
"""
import logging

from ..constants import METRIC_EUCLIDEAN
from ..distance import check_dimensions, paired_distances
from ..results import MetricResult, assemble_result
from ..trajectory import PointSequence, as_points_array

logger = logging.getLogger(__name__)


def euclidean_align(soll: PointSequence, ist: PointSequence) -> MetricResult:
    """
    Compare the i-th soll sample with the i-th ist sample.

    Only the first ``min(len(soll), len(ist))`` samples are compared; trailing
    samples of the longer sequence are ignored. No resampling takes place,
    so the two recordings are expected to be length-matched upstream.

    Args:
        soll: Planned trajectory.
        ist: Measured trajectory.

    Returns:
        MetricResult without path or accumulated cost.

    Raises:
        EmptyInputError: If either sequence is empty.
        DimensionMismatchError: If the sequences differ in dimensionality.
    """
    soll_arr = as_points_array(soll)
    ist_arr = as_points_array(ist)
    check_dimensions(soll_arr, ist_arr, metric=METRIC_EUCLIDEAN)

    count = min(len(soll_arr), len(ist_arr))
    if len(soll_arr) != len(ist_arr):
        logger.debug(
            f"Euclidean alignment ignores {abs(len(soll_arr) - len(ist_arr))} "
            f"trailing samples (soll: {len(soll_arr)}, ist: {len(ist_arr)})."
        )
    soll_arr = soll_arr[:count]
    ist_arr = ist_arr[:count]

    return assemble_result(
        METRIC_EUCLIDEAN,
        paired_distances(soll_arr, ist_arr),
        aligned_soll=soll_arr,
        aligned_ist=ist_arr,
    )
