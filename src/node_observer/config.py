"""Environment-based configuration for node metric collection."""

from pydantic_settings import BaseSettings

from node_observer.queries import QUERY_PORT, SCRAPE_PORT


class Settings(BaseSettings):
    """Node observer configuration.

    All settings can be overridden via environment variables with
    NODE_OBSERVER_ prefix. For example:
        NODE_OBSERVER_QUERY_PORT=9090
        NODE_OBSERVER_TIMEOUT_SECONDS=5
    """

    # Prometheus endpoint; derived from the node IP unless overridden
    prometheus_url: str | None = None
    query_port: int = QUERY_PORT

    # node_exporter scrape port used in instance labels
    scrape_port: int = SCRAPE_PORT

    # Range query window
    window_minutes: int = 10
    step_seconds: int = 60

    # Per-request HTTP timeout
    timeout_seconds: float = 10.0

    model_config = {"env_prefix": "NODE_OBSERVER_"}

    def prometheus_url_for(self, node_ip: str) -> str:
        """Prometheus base URL for a node."""
        if self.prometheus_url:
            return self.prometheus_url
        return f"http://{node_ip}:{self.query_port}"
