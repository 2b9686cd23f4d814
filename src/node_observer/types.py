"""
Shared data types for node metric collection.

This module defines the internal data structures that flow between the
query builder, the Prometheus client, the series transformer and the
metric assembler. These are internal types, not API models.

All types use @dataclass for simplicity. Pydantic models are reserved for
parsing external payloads (see node_observer.api_types).

Naming follows the dashboard's metric API:
- DataPoint is the compact (x, y) point used for lightweight charting
- MetricPoint is the timestamped point used by aggregation-aware consumers
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any


class AggregationMode(str, Enum):
    """How downstream consumers combine a metric's points with others."""

    SUM = "sum"
    MAX = "max"
    MIN = "min"
    DEFAULT = "default"


@dataclass(frozen=True)
class QuerySpec:
    """
    A single PromQL expression paired with the metric name it produces.

    Attributes:
        expression: PromQL expression, already scoped to one node.
        metric_name: Dashboard metric name (e.g., "disk/used").
    """

    expression: str
    metric_name: str


@dataclass(frozen=True)
class TimeWindow:
    """
    Trailing range-query window, computed once per collection.

    Attributes:
        start: Window start (timezone-aware, UTC).
        end: Window end (timezone-aware, UTC).
        step: Sampling resolution.
    """

    start: datetime
    end: datetime
    step: timedelta

    @classmethod
    def trailing(
        cls,
        duration: timedelta = timedelta(minutes=10),
        step: timedelta = timedelta(minutes=1),
        now: datetime | None = None,
    ) -> "TimeWindow":
        """
        Build a window of the given duration that ends at now.

        Args:
            duration: Length of the window.
            step: Sampling resolution.
            now: End of the window. Defaults to the current UTC time.

        Returns:
            TimeWindow covering [now - duration, now].
        """
        end = now if now is not None else datetime.now(timezone.utc)
        return cls(start=end - duration, end=end, step=step)

    def as_params(self) -> dict[str, str]:
        """Render the window as Prometheus query_range parameters."""
        return {
            "start": f"{self.start.timestamp():.3f}",
            "end": f"{self.end.timestamp():.3f}",
            "step": f"{int(self.step.total_seconds())}s",
        }


@dataclass(frozen=True)
class DataPoint:
    """
    Compact chart point.

    Attributes:
        x: Sample time as integer seconds since the Unix epoch.
        y: Sample value truncated toward zero.
    """

    x: int
    y: int


@dataclass(frozen=True)
class MetricPoint:
    """
    Timestamped point for aggregation-aware consumers.

    Attributes:
        timestamp: Sample time (timezone-aware, UTC).
        value: Sample value truncated toward zero, never negative.
    """

    timestamp: datetime
    value: int


@dataclass
class Metric:
    """
    One named metric with two aligned views of the same samples.

    data_points and metric_points always have the same length, and the
    entries at the same index come from the same source sample.

    Attributes:
        metric_name: Dashboard metric name (e.g., "network/send").
        data_points: Compact (x, y) points.
        metric_points: Timestamped points.
        aggregate: Aggregation policy tag for downstream consumers.
    """

    metric_name: str
    data_points: list[DataPoint] = field(default_factory=list)
    metric_points: list[MetricPoint] = field(default_factory=list)
    aggregate: AggregationMode = AggregationMode.SUM

    def to_dict(self) -> dict[str, Any]:
        """Render in the dashboard metric JSON shape."""
        return {
            "dataPoints": [{"x": p.x, "y": p.y} for p in self.data_points],
            "metricPoints": [
                {
                    "timestamp": p.timestamp.isoformat().replace("+00:00", "Z"),
                    "value": p.value,
                }
                for p in self.metric_points
            ],
            "metricName": self.metric_name,
            "aggregation": self.aggregate.value,
        }


MetricBatch = list[Metric]
"""Ordered metrics for one node, one per QuerySpec."""
