"""Resolve the network address a node's metrics are queried through."""

import logging
from collections.abc import Iterable

from node_observer.api_types import NODE_INTERNAL_IP, Node, NodeAddress
from node_observer.exceptions import AddressNotFoundError

logger = logging.getLogger(__name__)


def resolve_internal_ip(node: Node | Iterable[NodeAddress]) -> str:
    """
    Return the first non-empty InternalIP address of a node.

    Args:
        node: A Node, or the node's address list directly.

    Returns:
        The internal IP address string.

    Raises:
        AddressNotFoundError: If no InternalIP entry with an address exists.
    """
    if isinstance(node, Node):
        name = node.name
        addresses: Iterable[NodeAddress] = node.status.addresses
    else:
        name = ""
        addresses = node

    for address in addresses:
        if address.type == NODE_INTERNAL_IP and address.address:
            logger.debug("Node %s internal IP: %s", name or "<unnamed>", address.address)
            return address.address

    raise AddressNotFoundError(name)
