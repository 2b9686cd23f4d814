"""
Factory functions for creating node metric collectors.

The Prometheus server is reached through the node itself, so the HTTP
client can only be built once the node's internal IP is known.
get_node_metrics() does the whole round trip and closes the client.
"""

from datetime import timedelta

import httpx

from node_observer.address import resolve_internal_ip
from node_observer.api_types import Node
from node_observer.collector import NodeMetricsCollector
from node_observer.config import Settings
from node_observer.prom_client import PrometheusClient
from node_observer.types import MetricBatch


def create_node_metrics_collector(
    prometheus_url: str,
    settings: Settings | None = None,
    http: httpx.AsyncClient | None = None,
) -> NodeMetricsCollector:
    """
    Create a collector for the Prometheus server at prometheus_url.

    Args:
        prometheus_url: Prometheus API URL (e.g., "http://10.0.0.5:30900")
        settings: Collection settings. Defaults to Settings().
        http: Optional pre-configured httpx client for Prometheus.
            If None, a new client is created with the configured timeout.
            The caller owns the client and must close it.

    Returns:
        NodeMetricsCollector ready for use.
    """
    settings = settings or Settings()
    if http is None:
        http = httpx.AsyncClient(base_url=prometheus_url, timeout=settings.timeout_seconds)

    return NodeMetricsCollector(
        prom=PrometheusClient(http=http),
        scrape_port=settings.scrape_port,
        window=timedelta(minutes=settings.window_minutes),
        step=timedelta(seconds=settings.step_seconds),
    )


async def get_node_metrics(
    node: Node,
    settings: Settings | None = None,
    concurrent: bool = False,
) -> MetricBatch:
    """
    Collect the resource metric batch for a node.

    Example:
        node = Node.model_validate(json.loads(node_json))
        metrics = await get_node_metrics(node)
        for metric in metrics:
            print(metric.metric_name, len(metric.data_points))

    Raises:
        NodeObserverError: Any collection failure; no partial batch.
    """
    settings = settings or Settings()
    node_ip = resolve_internal_ip(node)

    async with httpx.AsyncClient(
        base_url=settings.prometheus_url_for(node_ip),
        timeout=settings.timeout_seconds,
    ) as http:
        collector = create_node_metrics_collector(
            str(http.base_url), settings=settings, http=http
        )
        return await collector.collect_for_ip(node_ip, concurrent=concurrent)
