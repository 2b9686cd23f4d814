"""
Node resource metrics for the dashboard.

This package resolves a cluster node's internal IP, runs a fixed set of
PromQL range queries against the Prometheus server on that node, and
reshapes the results into dashboard metrics. It includes:

- NodeMetricsCollector: Query, transform and assemble one node's metrics
- PrometheusClient: Range-query client with typed result shapes
- Node and Prometheus response types for API parsing
- Factory functions and a Typer CLI
"""

__version__ = "0.1.0"

from node_observer.address import resolve_internal_ip
from node_observer.api_types import (
    Node,
    NodeAddress,
    PrometheusQueryResponse,
    PrometheusRangeResult,
)
from node_observer.collector import NodeMetricsCollector, assemble_metric
from node_observer.config import Settings
from node_observer.exceptions import (
    AddressNotFoundError,
    BackendQueryError,
    BackendUnreachableError,
    InvalidSampleError,
    NodeObserverError,
    UnexpectedResultShapeError,
)
from node_observer.factory import create_node_metrics_collector, get_node_metrics
from node_observer.prom_client import PrometheusClient
from node_observer.queries import QUERY_PORT, SCRAPE_PORT, build_query_set
from node_observer.transform import transform_matrix
from node_observer.types import (
    AggregationMode,
    DataPoint,
    Metric,
    MetricBatch,
    MetricPoint,
    QuerySpec,
    TimeWindow,
)

__all__ = [
    "__version__",
    # Collection
    "NodeMetricsCollector",
    "assemble_metric",
    "create_node_metrics_collector",
    "get_node_metrics",
    "resolve_internal_ip",
    "build_query_set",
    "transform_matrix",
    "QUERY_PORT",
    "SCRAPE_PORT",
    # Clients
    "PrometheusClient",
    # Config
    "Settings",
    # Data types
    "AggregationMode",
    "DataPoint",
    "Metric",
    "MetricBatch",
    "MetricPoint",
    "QuerySpec",
    "TimeWindow",
    # API types
    "Node",
    "NodeAddress",
    "PrometheusQueryResponse",
    "PrometheusRangeResult",
    # Errors
    "NodeObserverError",
    "AddressNotFoundError",
    "BackendUnreachableError",
    "BackendQueryError",
    "UnexpectedResultShapeError",
    "InvalidSampleError",
]
