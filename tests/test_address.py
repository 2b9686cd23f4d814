"""Tests for internal IP resolution."""

import pytest

from node_observer.address import resolve_internal_ip
from node_observer.api_types import Node, NodeAddress
from node_observer.exceptions import AddressNotFoundError, NodeObserverError


def make_node(*addresses: tuple[str, str], name: str = "worker-1") -> Node:
    return Node.model_validate(
        {
            "metadata": {"name": name},
            "status": {"addresses": [{"type": t, "address": a} for t, a in addresses]},
        }
    )


def test_returns_internal_ip():
    node = make_node(("Hostname", "worker-1"), ("InternalIP", "10.0.0.5"))
    assert resolve_internal_ip(node) == "10.0.0.5"


def test_first_internal_ip_wins():
    node = make_node(("InternalIP", "10.0.0.5"), ("InternalIP", "10.0.0.6"))
    assert resolve_internal_ip(node) == "10.0.0.5"


def test_skips_empty_internal_ip():
    node = make_node(("InternalIP", ""), ("InternalIP", "10.0.0.6"))
    assert resolve_internal_ip(node) == "10.0.0.6"


def test_ignores_external_ip_and_unknown_types():
    node = make_node(("ExternalIP", "203.0.113.7"), ("SomethingNew", "x"), ("InternalIP", "10.1.2.3"))
    assert resolve_internal_ip(node) == "10.1.2.3"


def test_no_internal_ip_raises_address_not_found():
    node = make_node(("ExternalIP", "203.0.113.7"), ("Hostname", "worker-1"))

    with pytest.raises(AddressNotFoundError, match="worker-1") as exc_info:
        resolve_internal_ip(node)

    assert exc_info.value.node_name == "worker-1"
    assert isinstance(exc_info.value, NodeObserverError)


def test_empty_address_list_raises():
    with pytest.raises(AddressNotFoundError):
        resolve_internal_ip(make_node())


def test_accepts_bare_address_list():
    addresses = [NodeAddress(type="InternalIP", address="192.168.1.10")]
    assert resolve_internal_ip(addresses) == "192.168.1.10"


def test_parses_kubectl_node_json_with_extra_fields():
    node = Node.model_validate(
        {
            "apiVersion": "v1",
            "kind": "Node",
            "metadata": {"name": "worker-2", "labels": {"role": "worker"}},
            "spec": {"podCIDR": "10.244.1.0/24"},
            "status": {
                "addresses": [{"type": "InternalIP", "address": "10.0.0.9"}],
                "capacity": {"cpu": "4"},
            },
        }
    )

    assert node.name == "worker-2"
    assert resolve_internal_ip(node) == "10.0.0.9"
