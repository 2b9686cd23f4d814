"""
Exception classes for node metric collection.

Every failure aborts the whole collection; no partial batch is returned
and nothing is retried here. Callers catch NodeObserverError to handle any
of them uniformly.

- AddressNotFoundError: node reports no usable internal address
- BackendUnreachableError: Prometheus could not be reached
- BackendQueryError: Prometheus rejected or failed the query
- UnexpectedResultShapeError: result was not a matrix
- InvalidSampleError: a sample value cannot be represented as an integer
"""


class NodeObserverError(Exception):
    """Base class for all node metric collection failures."""


class AddressNotFoundError(NodeObserverError):
    """
    Raised when a node has no InternalIP address.

    Attributes:
        node_name: Name of the node, empty if unknown
    """

    def __init__(self, node_name: str = "") -> None:
        self.node_name = node_name
        target = f"node {node_name!r}" if node_name else "node"
        super().__init__(f"No InternalIP address found for {target}")


class BackendUnreachableError(NodeObserverError):
    """
    Raised when the Prometheus server cannot be reached.

    Covers connection failures, timeouts, undecodable bodies and redirect loops.

    Attributes:
        url: The request URL that failed
        reason: Transport error description
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Prometheus unreachable at {url}: {reason}")


class BackendQueryError(NodeObserverError):
    """
    Raised when Prometheus rejects or fails a query.

    Attributes:
        query: The PromQL expression
        reason: Error description from Prometheus or the HTTP layer
        error_type: Prometheus errorType (e.g., "bad_data"), if reported
        status_code: HTTP status code, if the failure was an HTTP error
    """

    def __init__(
        self,
        query: str,
        reason: str,
        error_type: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.query = query
        self.reason = reason
        self.error_type = error_type
        self.status_code = status_code
        prefix = f"{error_type}: " if error_type else ""
        super().__init__(f"Prometheus query failed ({prefix}{reason}): {query}")


class UnexpectedResultShapeError(NodeObserverError):
    """
    Raised when a range query result is not a matrix.

    Attributes:
        query: The PromQL expression
        result_type: The shape that was returned (e.g., "vector", "scalar")
    """

    def __init__(self, query: str, result_type: str) -> None:
        self.query = query
        self.result_type = result_type
        super().__init__(
            f"Expected matrix result, got {result_type}: {query}"
        )


class InvalidSampleError(UnexpectedResultShapeError):
    """
    Raised when a sample value is not finite (NaN or +/-Inf).

    Attributes:
        value: The raw sample value string
    """

    def __init__(self, query: str, value: str) -> None:
        super().__init__(query, "matrix")
        self.value = value
        self.args = (f"Non-finite sample value {value!r} in result of: {query}",)
