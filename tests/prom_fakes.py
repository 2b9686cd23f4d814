"""Fake Prometheus server for tests, served through an httpx transport."""

import asyncio
from typing import Any

import httpx


def matrix(*series: list[tuple[float, str]]) -> dict[str, Any]:
    """Build a successful matrix response, one series per argument."""
    return {
        "status": "success",
        "data": {
            "resultType": "matrix",
            "result": [
                {"metric": {"instance": f"series-{i}"}, "values": [list(v) for v in values]}
                for i, values in enumerate(series)
            ],
        },
    }


class FakePrometheus(httpx.AsyncBaseTransport):
    """
    Mock transport answering /api/v1/query_range.

    Responses are looked up by PromQL expression. Each entry is one of:
    - dict: JSON body returned with status 200
    - (status_code, body): body is a dict (JSON) or str (raw text)
    - (status_code, body, headers): body is raw bytes sent as a stream
    - Exception: raised from the transport (e.g., httpx.ConnectError)
    Unknown expressions get the default response.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        default: Any = None,
        delays: dict[str, float] | None = None,
    ):
        self.responses = responses or {}
        self.default = default if default is not None else matrix([(1700000000, "42.7")])
        self.delays = delays or {}
        self.requests: list[httpx.Request] = []
        self.started = asyncio.Event()
        self.release: asyncio.Event | None = None
        self.completed = 0

    @property
    def queries(self) -> list[str]:
        return [r.url.params.get("query", "") for r in self.requests]

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.started.set()
        query = request.url.params.get("query", "")

        if self.release is not None:
            await self.release.wait()
        if query in self.delays:
            await asyncio.sleep(self.delays[query])
        self.completed += 1

        entry = self.responses.get(query, self.default)
        if isinstance(entry, Exception):
            raise entry

        if isinstance(entry, tuple) and len(entry) == 3:
            status_code, body, headers = entry
            return httpx.Response(
                status_code=status_code,
                headers=headers,
                stream=httpx.ByteStream(body),
                request=request,
            )

        status_code, body = entry if isinstance(entry, tuple) else (200, entry)
        if isinstance(body, str):
            return httpx.Response(status_code=status_code, text=body, request=request)
        return httpx.Response(status_code=status_code, json=body, request=request)


def http_client(transport: FakePrometheus) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=transport, base_url="http://10.0.0.5:30900")
