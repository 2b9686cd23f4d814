"""
Matrix-to-points transformation.

Flattens a Prometheus matrix into the two dashboard point views. Series are
taken in backend order and samples in series order; both views are filled
in the same pass so index i of each refers to the same sample. Nothing is
sorted, deduplicated or gap-filled.

Value conversion:
- DataPoint.y truncates toward zero and may be negative
- MetricPoint.value truncates toward zero and is clamped at 0
- NaN and +/-Inf have no integer form and raise InvalidSampleError
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timezone

from node_observer.api_types import PrometheusRangeResult
from node_observer.exceptions import InvalidSampleError
from node_observer.types import DataPoint, MetricPoint

logger = logging.getLogger(__name__)


def transform_matrix(
    series: Iterable[PrometheusRangeResult], query: str = ""
) -> tuple[list[DataPoint], list[MetricPoint]]:
    """
    Convert matrix series into aligned DataPoint and MetricPoint lists.

    Args:
        series: Matrix series in backend order.
        query: Expression that produced the series, used in errors and logs.

    Returns:
        Tuple of (data_points, metric_points) of equal length.

    Raises:
        InvalidSampleError: If any sample value is not finite.
    """
    data_points: list[DataPoint] = []
    metric_points: list[MetricPoint] = []

    for item in series:
        for timestamp, raw_value in item.values:
            try:
                value = float(raw_value)
            except ValueError as e:
                raise InvalidSampleError(query, raw_value) from e
            if not math.isfinite(value):
                raise InvalidSampleError(query, raw_value)

            truncated = int(value)
            if truncated < 0:
                logger.warning(
                    "Negative sample %s at %s clamped to 0: %s", raw_value, timestamp, query
                )

            data_points.append(DataPoint(x=math.floor(timestamp), y=truncated))
            metric_points.append(
                MetricPoint(
                    timestamp=datetime.fromtimestamp(timestamp, tz=timezone.utc),
                    value=max(truncated, 0),
                )
            )

    return data_points, metric_points
