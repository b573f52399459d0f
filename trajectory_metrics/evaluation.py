"""
Evaluation of soll/ist trajectory pairs

This module runs several metric engines over one trajectory pair or over
every segment of a recorded trajectory, and grades the results against
precision thresholds.
"""

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .config import MetricsConfig
from .constants import (
    GRADE_POOR,
    LCSS_SCORE_THRESHOLDS,
    METRIC_LCSS,
    PRECISION_THRESHOLDS,
)
from .metrics import compute_metric
from .results import MetricResult
from .trajectory import PointSequence

logger = logging.getLogger(__name__)


@dataclass
class SegmentEvaluation:
    """Metric results of one trajectory segment"""
    segment_id: str
    results: Dict[str, MetricResult]


def evaluate(
    soll: PointSequence,
    ist: PointSequence,
    metrics: Optional[Iterable[str]] = None,
    config: Optional[MetricsConfig] = None,
) -> Dict[str, MetricResult]:
    """
    Run several metrics on one soll/ist pair.

    Args:
        soll: Planned trajectory.
        ist: Measured trajectory.
        metrics: Metric names to run; defaults to ``config.metrics``.
        config: Engine settings; defaults to MetricsConfig().

    Returns:
        Ordered mapping metric name -> MetricResult.

    Raises:
        ConfigurationError: For unknown metric names or invalid settings.
        TrajectoryMetricsError: The first error raised by an engine.
    """
    config = (config or MetricsConfig()).validate()
    names = list(metrics) if metrics is not None else list(config.metrics)

    results = OrderedDict()
    for name in names:
        results[name] = compute_metric(name, soll, ist, config)
    return results


def segment_sort_key(segment_id) -> Tuple[Tuple[int, object], ...]:
    """Natural sort key for segment IDs such as ``"<bahn_id>_<k>"``."""
    parts = re.findall(r"\d+|\D+", str(segment_id))
    return tuple((0, int(p)) if p.isdigit() else (1, p) for p in parts)


def evaluate_segments(
    soll_segments: Mapping[str, PointSequence],
    ist_segments: Mapping[str, PointSequence],
    metrics: Optional[Iterable[str]] = None,
    config: Optional[MetricsConfig] = None,
) -> List[SegmentEvaluation]:
    """
    Evaluate every segment recorded on both sides, ordered by segment ID.

    IDs are compared by their numeric parts, so ``"1720_2"`` precedes
    ``"1720_10"``.

    Segments present on only one side cannot be compared and are skipped.
    """
    config = (config or MetricsConfig()).validate()
    names = list(metrics) if metrics is not None else list(config.metrics)

    one_sided = set(soll_segments) ^ set(ist_segments)
    if one_sided:
        skipped = sorted(one_sided, key=segment_sort_key)
        logger.warning(f"Skipping segments without a soll/ist counterpart: {skipped}")

    evaluations = []
    for segment_id in sorted(set(soll_segments) & set(ist_segments), key=segment_sort_key):
        logger.debug(f"Evaluating segment {segment_id} with {names}")
        results = evaluate(
            soll_segments[segment_id], ist_segments[segment_id], metrics=names, config=config
        )
        evaluations.append(SegmentEvaluation(segment_id=segment_id, results=results))
    return evaluations


class PrecisionGrader:
    """
    Grades metric results as EXCELLENT, GOOD, FAIR or POOR.

    Distance metrics are graded on their average and maximum distance,
    LCSS on its similarity score.
    """

    PRECISION_THRESHOLDS = PRECISION_THRESHOLDS
    LCSS_SCORE_THRESHOLDS = LCSS_SCORE_THRESHOLDS

    @classmethod
    def assess(
        cls,
        result: MetricResult,
        thresholds: Optional[Dict[str, Dict[str, float]]] = None,
    ) -> str:
        """
        Assess one metric result.

        Args:
            result: MetricResult to grade.
            thresholds: Per-grade ``{"average": ..., "max": ...}`` limits,
                        checked in order; defaults to PRECISION_THRESHOLDS.

        Returns:
            Assessment string.
        """
        if result.metric == METRIC_LCSS:
            return cls._assess_score(result.score)

        thresholds = thresholds or cls.PRECISION_THRESHOLDS
        for assessment, limits in thresholds.items():
            if (result.average_distance <= limits["average"] and
                    result.max_distance <= limits["max"]):
                return assessment
        return GRADE_POOR

    @classmethod
    def _assess_score(cls, score: Optional[float]) -> str:
        if score is None:
            return GRADE_POOR
        for assessment, minimum in cls.LCSS_SCORE_THRESHOLDS.items():
            if score >= minimum:
                return assessment
        return GRADE_POOR

    @classmethod
    def assess_all(
        cls,
        results: Mapping[str, MetricResult],
        config: Optional[MetricsConfig] = None,
    ) -> Dict[str, str]:
        """Assess every result of an evaluation."""
        thresholds = config.precision_thresholds if config is not None else None
        return {name: cls.assess(result, thresholds) for name, result in results.items()}
