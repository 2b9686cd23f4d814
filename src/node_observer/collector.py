"""
NodeMetricsCollector - resource utilization metrics for one node.

Ties the pieces together for a single collection:
1. Resolve the node's internal IP
2. Build the ordered query set for that IP
3. Capture one TimeWindow shared by every query
4. Run each range query and transform its matrix
5. Assemble one Metric per query, in query order

Any failure aborts the collection and propagates to the caller. There is
no partial batch: either every metric is returned or an exception is.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta

from node_observer.address import resolve_internal_ip
from node_observer.api_types import Node, PrometheusRangeResult
from node_observer.prom_client import PrometheusClient
from node_observer.queries import SCRAPE_PORT, build_query_set
from node_observer.transform import transform_matrix
from node_observer.types import AggregationMode, Metric, MetricBatch, QuerySpec, TimeWindow

logger = logging.getLogger(__name__)


def assemble_metric(
    spec: QuerySpec,
    series: list[PrometheusRangeResult],
    aggregate: AggregationMode = AggregationMode.SUM,
) -> Metric:
    """
    Build the Metric for one query from its matrix series.

    Args:
        spec: The query the series answer.
        series: Matrix series in backend order.
        aggregate: Aggregation policy tag.

    Returns:
        Metric named after the query, with aligned point views.
    """
    data_points, metric_points = transform_matrix(series, query=spec.expression)
    return Metric(
        metric_name=spec.metric_name,
        data_points=data_points,
        metric_points=metric_points,
        aggregate=aggregate,
    )


@dataclass
class NodeMetricsCollector:
    """
    Collects the node resource metric batch through a PrometheusClient.

    The client must already point at the Prometheus server for the node
    (see node_observer.factory). The collector holds no state between
    calls.

    Attributes:
        prom: Prometheus client for range queries
        scrape_port: node_exporter port used in instance labels
        window: Length of the trailing query window
        step: Range query resolution
        aggregate: Aggregation policy tagged on every metric

    Example:
        async with httpx.AsyncClient(base_url="http://10.0.0.5:30900") as http:
            collector = NodeMetricsCollector(prom=PrometheusClient(http=http))
            metrics = await collector.collect(node)
    """

    prom: PrometheusClient
    scrape_port: int = SCRAPE_PORT
    window: timedelta = timedelta(minutes=10)
    step: timedelta = timedelta(minutes=1)
    aggregate: AggregationMode = AggregationMode.SUM

    async def collect(self, node: Node, concurrent: bool = False) -> MetricBatch:
        """
        Collect every metric for a node.

        Args:
            node: The node to collect metrics for.
            concurrent: Run the queries in parallel. The first failure
                cancels the remaining queries. Output order is unchanged.

        Returns:
            One Metric per query, in query order.

        Raises:
            AddressNotFoundError: If the node has no internal IP.
            BackendUnreachableError, BackendQueryError,
            UnexpectedResultShapeError: From the first failing query.
        """
        node_ip = resolve_internal_ip(node)
        return await self.collect_for_ip(node_ip, concurrent=concurrent)

    async def collect_for_ip(self, node_ip: str, concurrent: bool = False) -> MetricBatch:
        """Collect every metric for an already resolved node IP."""
        specs = build_query_set(node_ip, scrape_port=self.scrape_port)
        window = TimeWindow.trailing(duration=self.window, step=self.step)
        logger.debug(
            "Collecting %d metrics for %s over %s..%s",
            len(specs), node_ip, window.start, window.end,
        )

        if concurrent:
            return await self._collect_concurrent(specs, window)

        metrics: MetricBatch = []
        for spec in specs:
            metrics.append(await self._collect_one(spec, window))
        return metrics

    async def _collect_one(self, spec: QuerySpec, window: TimeWindow) -> Metric:
        series = await self.prom.range_query_matrix(spec.expression, window)
        return assemble_metric(spec, series, self.aggregate)

    async def _collect_concurrent(
        self, specs: list[QuerySpec], window: TimeWindow
    ) -> MetricBatch:
        # TaskGroup cancels sibling tasks as soon as one fails
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(self._collect_one(spec, window)) for spec in specs]
        except ExceptionGroup as eg:
            raise eg.exceptions[0]

        return [task.result() for task in tasks]
