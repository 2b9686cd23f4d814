"""
Pydantic models for external payloads.

This module provides Pydantic models for parsing:
- Kubernetes Node objects (as returned by `kubectl get node -o json`)
- Prometheus HTTP API range-query responses

These are API response types for external data validation. Internal
types (Metric, DataPoint, etc.) are dataclasses in node_observer.types.

Notes:
- Prometheus returns sample values as strings, including "NaN" and "+Inf"
- Prometheus timestamps are unix seconds as floats
- The result shape is a tagged union keyed by resultType
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Kubernetes Node Types
# =============================================================================
# Based on: https://kubernetes.io/docs/reference/kubernetes-api/cluster-resources/node-v1/
# Only the fields needed to resolve a node address are modelled.

NODE_INTERNAL_IP = "InternalIP"
NODE_EXTERNAL_IP = "ExternalIP"
NODE_HOSTNAME = "Hostname"


class NodeAddress(BaseModel):
    """
    A typed network address reported by a node.

    type is one of InternalIP, ExternalIP, Hostname, InternalDNS or
    ExternalDNS. Unknown types are accepted and simply never matched.
    """

    model_config = ConfigDict(extra="ignore")

    type: str
    address: str


class NodeStatus(BaseModel):
    """The subset of node status used here."""

    model_config = ConfigDict(extra="ignore")

    addresses: list[NodeAddress] = Field(default_factory=list)


class NodeMetadata(BaseModel):
    """Object metadata; only the name is needed."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""


class Node(BaseModel):
    """
    A cluster node.

    Example payload:
    {
        "metadata": {"name": "worker-1"},
        "status": {
            "addresses": [
                {"type": "InternalIP", "address": "10.0.0.5"},
                {"type": "Hostname", "address": "worker-1"}
            ]
        }
    }
    """

    model_config = ConfigDict(extra="ignore")

    metadata: NodeMetadata = Field(default_factory=NodeMetadata)
    status: NodeStatus = Field(default_factory=NodeStatus)

    @property
    def name(self) -> str:
        return self.metadata.name


# =============================================================================
# Prometheus Response Types
# =============================================================================
# Based on: https://prometheus.io/docs/prometheus/latest/querying/api/
# IMPORTANT: sample values are strings and must be converted to float


class PrometheusVectorResult(BaseModel):
    """
    Single result from an instant vector.

    The value tuple is [unix_timestamp, "string_value"].
    """

    metric: dict[str, str] = Field(default_factory=dict)
    value: tuple[float, str]


class PrometheusRangeResult(BaseModel):
    """
    Single labelled series from a range (matrix) result.

    values is a list of [unix_timestamp, "string_value"] pairs in time order.
    """

    metric: dict[str, str] = Field(default_factory=dict)
    values: list[tuple[float, str]] = Field(default_factory=list)


class MatrixData(BaseModel):
    resultType: Literal["matrix"]
    result: list[PrometheusRangeResult]


class VectorData(BaseModel):
    resultType: Literal["vector"]
    result: list[PrometheusVectorResult]


class ScalarData(BaseModel):
    resultType: Literal["scalar"]
    result: tuple[float, str]


class StringData(BaseModel):
    resultType: Literal["string"]
    result: tuple[float, str]


PrometheusData = Annotated[
    Union[MatrixData, VectorData, ScalarData, StringData],
    Field(discriminator="resultType"),
]
"""The 'data' field of a successful response, discriminated by resultType."""


class PrometheusQueryResponse(BaseModel):
    """
    Response from GET /api/v1/query_range.

    Example response:
    {
        "status": "success",
        "data": {
            "resultType": "matrix",
            "result": [
                {
                    "metric": {"instance": "10.0.0.5:9100"},
                    "values": [[1700000000, "42.7"], [1700000060, "43.1"]]
                }
            ]
        }
    }

    Error responses carry no data:
    {"status": "error", "errorType": "bad_data", "error": "parse error ..."}
    """

    status: Literal["success", "error"]
    data: PrometheusData | None = None
    errorType: str | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)
