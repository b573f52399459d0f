"""Unit tests for metric dispatch, multi-metric evaluation and grading."""
import logging

import pytest

from trajectory_metrics import (
    MetricsConfig,
    PrecisionGrader,
    assemble_result,
    compute_metric,
    evaluate,
    evaluate_segments,
)
from trajectory_metrics.constants import ALL_METRICS
from trajectory_metrics.evaluation import segment_sort_key
from trajectory_metrics.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    InvalidThresholdError,
)


class TestComputeMetric:

    @pytest.mark.parametrize("name", ALL_METRICS)
    def test_dispatches_by_name(self, name, soll_points, ist_points):
        result = compute_metric(name, soll_points, ist_points)
        assert result.metric == name

    def test_unknown_metric(self, soll_points, ist_points):
        with pytest.raises(ConfigurationError, match="Unknown metric 'hausdorff'"):
            compute_metric("hausdorff", soll_points, ist_points)

    def test_applies_config_settings(self, soll_points, ist_points):
        config = MetricsConfig(lcss_threshold=0.5, johnen_window=2, dtw_window=1)
        assert compute_metric("lcss", soll_points, ist_points, config).score == pytest.approx(2.0 / 3.0)
        assert compute_metric("dtw_johnen", soll_points, ist_points, config).window == 2
        assert compute_metric("dtw", soll_points, ist_points, config).window == 1

    def test_dimensions_projects_leading_coordinates(self, helix, measured_helix):
        result = compute_metric("dfd", helix, measured_helix, MetricsConfig(dimensions=2))
        assert result.aligned_soll.shape[1] == 2

    def test_dimensions_larger_than_points(self, soll_points, ist_points):
        with pytest.raises(DimensionMismatchError):
            compute_metric("dtw", soll_points, ist_points, MetricsConfig(dimensions=3))


class TestEvaluate:

    def test_runs_all_metrics_in_order(self, soll_trajectory, ist_trajectory):
        results = evaluate(soll_trajectory, ist_trajectory)
        assert list(results) == list(ALL_METRICS)
        assert results["dfd"].max_distance == pytest.approx(1.0)
        assert results["lcss"].score == pytest.approx(1.0)

    def test_metric_subset(self, soll_points, ist_points):
        results = evaluate(soll_points, ist_points, metrics=["lcss", "euclidean"])
        assert list(results) == ["lcss", "euclidean"]

    def test_invalid_config_fails_before_running(self, soll_points, ist_points):
        with pytest.raises(InvalidThresholdError):
            evaluate(soll_points, ist_points, config=MetricsConfig(lcss_threshold=0.0))

    def test_segments_sorted_and_one_sided_skipped(self, soll_points, ist_points, caplog):
        soll_segments = {"2": soll_points, "1": soll_points, "3": soll_points}
        ist_segments = {"1": ist_points, "2": ist_points, "4": ist_points}
        with caplog.at_level(logging.WARNING, logger="trajectory_metrics.evaluation"):
            evaluations = evaluate_segments(soll_segments, ist_segments, metrics=["dtw"])
        assert [e.segment_id for e in evaluations] == ["1", "2"]
        assert list(evaluations[0].results) == ["dtw"]
        assert "['3', '4']" in caplog.text

    def test_segments_follow_path_order_past_nine(self, soll_points, ist_points):
        segment_ids = [f"1720_{k}" for k in range(12)]
        soll_segments = {sid: soll_points for sid in reversed(segment_ids)}
        ist_segments = {sid: ist_points for sid in segment_ids}
        evaluations = evaluate_segments(soll_segments, ist_segments, metrics=["euclidean"])
        assert [e.segment_id for e in evaluations] == segment_ids

    def test_segment_sort_key(self):
        ids = ["1720_10", "1720_2", "999_3", "1720_0", "1720_b", "1720_a"]
        assert sorted(ids, key=segment_sort_key) == [
            "999_3", "1720_0", "1720_2", "1720_10", "1720_a", "1720_b"
        ]


class TestPrecisionGrader:

    @pytest.mark.parametrize("distances, expected", [
        ([0.05, 0.1], "EXCELLENT"),
        ([0.2, 0.6], "GOOD"),
        ([0.2, 0.2, 0.2, 3.0], "FAIR"),
        ([3.0, 10.0], "POOR"),
    ])
    def test_distance_grades(self, distances, expected):
        assert PrecisionGrader.assess(assemble_result("dtw", distances)) == expected

    @pytest.mark.parametrize("score, expected", [
        (1.0, "EXCELLENT"),
        (0.85, "GOOD"),
        (2.0 / 3.0, "FAIR"),
        (0.1, "POOR"),
        (None, "POOR"),
    ])
    def test_lcss_graded_by_score(self, score, expected):
        result = assemble_result("lcss", [0.0], score=score, threshold=1.0)
        assert PrecisionGrader.assess(result) == expected

    def test_custom_thresholds(self):
        result = assemble_result("euclidean", [0.2, 0.3])
        strict = {"EXCELLENT": {"average": 0.01, "max": 0.01}}
        assert PrecisionGrader.assess(result, strict) == "POOR"

    def test_assess_all_uses_config_thresholds(self, soll_points, ist_points):
        results = evaluate(soll_points, ist_points)
        grades = PrecisionGrader.assess_all(results)
        assert grades["euclidean"] == "GOOD"
        assert grades["lcss"] == "EXCELLENT"

        lenient = MetricsConfig(precision_thresholds={"EXCELLENT": {"average": 1.0, "max": 1.0}})
        assert PrecisionGrader.assess_all(results, lenient)["euclidean"] == "EXCELLENT"
