"""
Prometheus API client for node range queries.

This module provides the PrometheusClient class for running PromQL range
queries against the Prometheus server that scrapes a node. It supports:
- Range queries over a fixed TimeWindow
- Matrix extraction with exhaustive handling of every result shape

Key design decisions:
- Uses injected httpx.AsyncClient (base_url and timeout are set by the caller)
- Translates httpx and validation failures into node_observer exceptions
- Fails loudly: nothing is retried, no partial result is returned
"""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from node_observer.api_types import (
    MatrixData,
    PrometheusQueryResponse,
    PrometheusRangeResult,
    ScalarData,
    StringData,
    VectorData,
)
from node_observer.exceptions import (
    BackendQueryError,
    BackendUnreachableError,
    UnexpectedResultShapeError,
)
from node_observer.types import TimeWindow

logger = logging.getLogger(__name__)

QUERY_RANGE_PATH = "/api/v1/query_range"


@dataclass
class PrometheusClient:
    """
    Prometheus API client with injected httpx client.

    The httpx.AsyncClient should be pre-configured with the Prometheus server
    base_url (e.g., http://10.0.0.5:30900) and a request timeout.

    Example:
        async with httpx.AsyncClient(base_url="http://10.0.0.5:30900", timeout=10.0) as http:
            client = PrometheusClient(http=http)
            series = await client.range_query_matrix("up", TimeWindow.trailing())
    """

    http: httpx.AsyncClient

    async def range_query(self, query: str, window: TimeWindow) -> PrometheusQueryResponse:
        """
        Execute a range query over the given window.

        Args:
            query: PromQL query string
            window: Time range and step shared by every query of a collection

        Returns:
            Parsed successful response

        Raises:
            BackendUnreachableError: On connection failures, timeouts,
                undecodable bodies and redirect loops
            BackendQueryError: On HTTP errors or status != "success"
            UnexpectedResultShapeError: On a body that is not a valid response
        """
        params = {"query": query, **window.as_params()}
        logger.debug("Range query %s %s", params, self.http.base_url)

        try:
            response = await self.http.get(QUERY_RANGE_PATH, params=params)
        except httpx.RequestError as e:
            # TransportError, DecodingError and TooManyRedirects
            raise BackendUnreachableError(
                str(self.http.base_url), str(e) or type(e).__name__
            ) from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_type, reason = _error_details(response)
            raise BackendQueryError(
                query,
                reason,
                error_type=error_type,
                status_code=response.status_code,
            ) from e

        try:
            data = PrometheusQueryResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise UnexpectedResultShapeError(query, "invalid response body") from e

        if data.status != "success":
            raise BackendQueryError(
                query, data.error or data.status, error_type=data.errorType
            )

        for warning in data.warnings:
            logger.warning("Prometheus warning for %s: %s", query, warning)

        return data

    async def range_query_matrix(
        self, query: str, window: TimeWindow
    ) -> list[PrometheusRangeResult]:
        """
        Execute a range query and return its series.

        Args:
            query: PromQL query string
            window: Time range and step

        Returns:
            Series in the order Prometheus returned them

        Raises:
            UnexpectedResultShapeError: If the result is a vector, scalar,
                string or missing
            BackendUnreachableError, BackendQueryError: See range_query()
        """
        response = await self.range_query(query, window)
        data = response.data

        if isinstance(data, MatrixData):
            return data.result
        if isinstance(data, (VectorData, ScalarData, StringData)):
            raise UnexpectedResultShapeError(query, data.resultType)
        raise UnexpectedResultShapeError(query, "empty")


def _error_details(response: httpx.Response) -> tuple[str | None, str]:
    """
    Extract (errorType, error) from a Prometheus error response.

    Prometheus answers rejected queries with a JSON error envelope; proxies
    in front of it may not. Falls back to the HTTP reason phrase.
    """
    fallback = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    try:
        body = response.json()
    except ValueError:
        return None, fallback

    if not isinstance(body, dict):
        return None, fallback
    return body.get("errorType"), body.get("error") or fallback
