# trajectory_metrics/records.py
"""
Translation between metric results and the flattened record schemas.

Results are persisted as snake_case rows (``dfd_min_distance``,
``sidtw_soll_x``, ``points_order``, ...) and shown by the application with
camelCase keys (``DFDMinDistance``, ``SIDTWSollX``, ``pointsOrder``, ...).
This layer converts between MetricResult objects, storage rows and
application records, and rebuilds trajectories from stored position rows.
The metric engines never see either schema.
"""
import logging
import math
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .constants import (
    APPLICATION_PREFIXES,
    COORDINATE_AXES,
    METRIC_EUCLIDEAN,
    METRIC_LCSS,
    STORAGE_PREFIXES,
)
from .exceptions import EmptyInputError, RecordMappingError
from .results import MetricResult
from .trajectory import Point, Trajectory

logger = logging.getLogger(__name__)

_COMMON_KEYS = {
    "bahn_id": "bahnID",
    "segment_id": "segmentID",
    "points_order": "pointsOrder",
    "evaluation": "evaluation",
}

_FIELD_SUFFIXES = {
    "min_distance": "MinDistance",
    "max_distance": "MaxDistance",
    "average_distance": "AvgDistance",
    "standard_deviation": "StdDeviation",
    "distances": "Distances",
    "score": "Score",
    "threshold": "Threshold",
}
for _role in ("soll", "ist"):
    for _axis in COORDINATE_AXES:
        _FIELD_SUFFIXES[f"{_role}_{_axis}"] = f"{_role.capitalize()}{_axis.upper()}"
del _role, _axis


def _build_key_map() -> Dict[str, str]:
    key_map = dict(_COMMON_KEYS)
    for storage_prefix, app_prefix in APPLICATION_PREFIXES.items():
        for storage_suffix, app_suffix in _FIELD_SUFFIXES.items():
            key_map[f"{storage_prefix}_{storage_suffix}"] = f"{app_prefix}{app_suffix}"
    return key_map


STORAGE_TO_APPLICATION = _build_key_map()
APPLICATION_TO_STORAGE = {v: k for k, v in STORAGE_TO_APPLICATION.items()}


def _translate(record: Mapping[str, Any], key_map: Dict[str, str], schema: str) -> Dict[str, Any]:
    translated = {}
    for key, value in record.items():
        if key not in key_map:
            raise RecordMappingError(f"Key '{key}' has no {schema} counterpart.")
        translated[key_map[key]] = value
    return translated


def to_application(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a snake_case storage record into the camelCase application schema."""
    return _translate(record, STORAGE_TO_APPLICATION, "application")


def to_storage(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a camelCase application record into the snake_case storage schema."""
    return _translate(record, APPLICATION_TO_STORAGE, "storage")


def storage_prefix(metric: str) -> str:
    try:
        return STORAGE_PREFIXES[metric]
    except KeyError as e:
        raise RecordMappingError(f"No storage prefix for metric '{metric}'.", metric=metric) from e


def _stored_value(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return float(value)


def to_info_record(
    result: MetricResult,
    bahn_id: str,
    segment_id: str,
    evaluation: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Summary row of one result, e.g. ``{"bahn_id", "segment_id", "dfd_min_distance", ...}``.

    LCSS rows also carry ``lcss_score`` and ``lcss_threshold``.
    """
    prefix = storage_prefix(result.metric)
    record = {
        "bahn_id": bahn_id,
        "segment_id": segment_id,
        f"{prefix}_min_distance": _stored_value(result.min_distance),
        f"{prefix}_max_distance": _stored_value(result.max_distance),
        f"{prefix}_average_distance": _stored_value(result.average_distance),
        f"{prefix}_standard_deviation": _stored_value(result.standard_deviation),
    }
    if result.metric == METRIC_LCSS:
        record[f"{prefix}_score"] = result.score
        record[f"{prefix}_threshold"] = result.threshold
    record["evaluation"] = evaluation
    return record


def to_position_records(result: MetricResult, bahn_id: str, segment_id: str) -> List[Dict[str, Any]]:
    """
    One row per coupled sample pair, numbered by ``points_order``.

    Euclidean rows hold only the distance; the other metrics add the
    coordinates of both coupled samples (``<prefix>_soll_x`` ... ``<prefix>_ist_z``).
    """
    prefix = storage_prefix(result.metric)
    with_coordinates = result.metric != METRIC_EUCLIDEAN
    if with_coordinates and (result.aligned_soll is None or result.aligned_ist is None):
        raise RecordMappingError(
            "Result carries no aligned coordinates.", metric=result.metric
        )

    rows = []
    for order, dist in enumerate(result.distances):
        row = {
            "bahn_id": bahn_id,
            "segment_id": segment_id,
            f"{prefix}_distances": float(dist),
        }
        if with_coordinates:
            for role, samples in (("soll", result.aligned_soll), ("ist", result.aligned_ist)):
                coords = samples[order]
                for axis_index, axis in enumerate(COORDINATE_AXES):
                    value = coords[axis_index] if axis_index < len(coords) else None
                    row[f"{prefix}_{role}_{axis}"] = None if value is None else float(value)
        row["points_order"] = order
        rows.append(row)
    return rows


def _as_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise RecordMappingError(f"Value {value!r} of '{key}' is not numeric.") from e


def trajectory_from_records(
    rows: Iterable[Mapping[str, Any]],
    role: str,
    name: Optional[str] = None,
) -> Trajectory:
    """
    Rebuild a trajectory from position rows (``x_soll``/``y_soll``/``z_soll`` or
    ``x_ist``/... plus an optional ``timestamp``), keeping row order.

    Raises:
        EmptyInputError: If there are no rows.
        RecordMappingError: If a coordinate column is missing or not numeric.
    """
    rows = list(rows)
    if not rows:
        raise EmptyInputError(f"No {role} position rows given.")

    axes = [a for a in COORDINATE_AXES if f"{a}_{role}" in rows[0]]
    if len(axes) < 2 or axes[:2] != ["x", "y"]:
        raise RecordMappingError(
            f"Position rows need at least 'x_{role}' and 'y_{role}' columns."
        )

    points = []
    for index, row in enumerate(rows):
        coords = []
        for axis in axes:
            key = f"{axis}_{role}"
            if key not in row:
                raise RecordMappingError(f"Row {index} is missing '{key}'.")
            coords.append(_as_float(row[key], key))
        timestamp = row.get("timestamp")
        points.append(
            Point(
                tuple(coords),
                timestamp=None if timestamp is None else _as_float(timestamp, "timestamp"),
            )
        )
    return Trajectory(tuple(points), role=role, name=name)


def segments_from_records(rows: Iterable[Mapping[str, Any]], role: str) -> "OrderedDict[str, Trajectory]":
    """Group position rows by ``segment_id`` into one trajectory per segment."""
    grouped: "OrderedDict[str, List[Mapping[str, Any]]]" = OrderedDict()
    for row in rows:
        if "segment_id" not in row:
            raise RecordMappingError("Position row has no 'segment_id'.")
        grouped.setdefault(str(row["segment_id"]), []).append(row)

    segments = OrderedDict()
    for segment_id, segment_rows in grouped.items():
        bahn_id = segment_rows[0].get("bahn_id")
        segments[segment_id] = trajectory_from_records(
            segment_rows, role, name=None if bahn_id is None else str(bahn_id)
        )
    logger.debug(f"Grouped {role} rows into {len(segments)} segment(s)")
    return segments
