"""Tests for the node-observer CLI."""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from node_observer.cli import _latest_value, app
from node_observer.exceptions import BackendUnreachableError
from node_observer.types import DataPoint, Metric, MetricPoint

runner = CliRunner()


def sample_metrics() -> list[Metric]:
    ts = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
    return [
        Metric(
            metric_name=name,
            data_points=[DataPoint(x=1700000000, y=42)],
            metric_points=[MetricPoint(timestamp=ts, value=42)],
        )
        for name in ("disk/used", "disk/read", "disk/write", "network/send", "network/receive")
    ]


def test_collect_json_output():
    with patch("node_observer.cli.get_node_metrics", AsyncMock(return_value=sample_metrics())) as mock:
        result = runner.invoke(app, ["collect", "--internal-ip", "10.0.0.5", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [m["metricName"] for m in data] == [
        "disk/used", "disk/read", "disk/write", "network/send", "network/receive"
    ]
    assert data[0]["dataPoints"] == [{"x": 1700000000, "y": 42}]

    node = mock.call_args.args[0]
    assert node.status.addresses[0].address == "10.0.0.5"


def test_collect_table_output():
    with patch("node_observer.cli.get_node_metrics", AsyncMock(return_value=sample_metrics())):
        result = runner.invoke(app, ["collect", "--internal-ip", "10.0.0.5", "--name", "worker-1"])

    assert result.exit_code == 0, result.output
    assert "worker-1" in result.output
    assert "disk/used" in result.output
    assert "percent" in result.output


def test_collect_prometheus_override_reaches_settings():
    with patch("node_observer.cli.get_node_metrics", AsyncMock(return_value=[])) as mock:
        result = runner.invoke(
            app,
            ["collect", "--internal-ip", "10.0.0.5", "--prometheus", "http://prom:9090", "--json"],
        )

    assert result.exit_code == 0, result.output
    assert mock.call_args.kwargs["settings"].prometheus_url == "http://prom:9090"


def test_collect_node_file_without_internal_ip_fails(tmp_path):
    node_file = tmp_path / "node.json"
    node_file.write_text(
        json.dumps(
            {
                "metadata": {"name": "edge-1"},
                "status": {"addresses": [{"type": "ExternalIP", "address": "203.0.113.7"}]},
            }
        )
    )

    result = runner.invoke(app, ["collect", "--node-file", str(node_file)])

    assert result.exit_code == 1
    assert "No InternalIP address found for node 'edge-1'" in result.output


def test_collect_backend_error_exits_1():
    error = BackendUnreachableError("http://10.0.0.5:30900", "connection refused")
    with patch("node_observer.cli.get_node_metrics", AsyncMock(side_effect=error)):
        result = runner.invoke(app, ["collect", "--internal-ip", "10.0.0.5"])

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_collect_requires_node_source():
    result = runner.invoke(app, ["collect"])

    assert result.exit_code == 1
    assert "--node-file or --internal-ip" in result.output


def test_collect_invalid_node_file(tmp_path):
    node_file = tmp_path / "node.json"
    node_file.write_text("{not json")

    result = runner.invoke(app, ["collect", "--node-file", str(node_file)])

    assert result.exit_code == 1
    assert "cannot read node" in result.output


def test_collect_non_utf8_node_file(tmp_path):
    node_file = tmp_path / "node.json"
    node_file.write_bytes(b"\xff\xfe\x00{")

    result = runner.invoke(app, ["collect", "--node-file", str(node_file)])

    assert result.exit_code == 1
    assert "cannot read node" in result.output


def test_latest_column_uses_newest_sample_across_series():
    # Two series flattened in backend order: the newest sample is not last
    metric = Metric(
        metric_name="disk/read",
        data_points=[DataPoint(x=1700000060, y=7777), DataPoint(x=1700000000, y=1111)],
    )

    with patch("node_observer.cli.get_node_metrics", AsyncMock(return_value=[metric])):
        result = runner.invoke(app, ["collect", "--internal-ip", "10.0.0.5"])

    assert result.exit_code == 0, result.output
    assert "7777" in result.output
    assert "1111" not in result.output


def test_latest_value_of_empty_metric():
    assert _latest_value(Metric(metric_name="disk/read")) == "-"
