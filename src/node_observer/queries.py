"""
PromQL query set for node resource utilization.

The five queries below are read by node_exporter metric names and must stay
byte-for-byte compatible with the Prometheus deployment they target. The
order of build_query_set() is the order of the resulting metric batch.

Metric sources (node_exporter, pre-0.16 names):
- Disk used: node_filesystem_free / node_filesystem_size
- Disk read/write: node_disk_bytes_read / node_disk_bytes_written
- Network send/receive: node_network_transmit_bytes / node_network_receive_bytes
"""

from node_observer.types import QuerySpec

# node_exporter scrape port, used in the instance label
SCRAPE_PORT = 9100

# Prometheus NodePort service port on every node
QUERY_PORT = 30900

DISK_USED = "disk/used"
DISK_READ = "disk/read"
DISK_WRITE = "disk/write"
NETWORK_SEND = "network/send"
NETWORK_RECEIVE = "network/receive"

METRIC_NAMES = (DISK_USED, DISK_READ, DISK_WRITE, NETWORK_SEND, NETWORK_RECEIVE)

# Graph legend label and unit per metric
METRIC_DISPLAY: dict[str, tuple[str, str]] = {
    DISK_USED: ("Disk Used", "percent"),
    DISK_READ: ("Disk Read", "bytes/s"),
    DISK_WRITE: ("Disk Write", "bytes/s"),
    NETWORK_SEND: ("Network Send", "bytes/s"),
    NETWORK_RECEIVE: ("Network Receive", "bytes/s"),
}


def build_query_set(node_ip: str, scrape_port: int = SCRAPE_PORT) -> list[QuerySpec]:
    """
    Build the ordered query set for one node.

    Args:
        node_ip: The node's internal IP address.
        scrape_port: Port node_exporter listens on.

    Returns:
        Five QuerySpecs in metric order: disk/used, disk/read, disk/write,
        network/send, network/receive.
    """
    instance = f"{node_ip}:{scrape_port}"

    return [
        QuerySpec(
            metric_name=DISK_USED,
            expression=f'100 - 100*sum(node_filesystem_free{{device!="rootfs",instance="{instance}"}})'
            f' / sum(node_filesystem_size{{device!="rootfs",instance="{instance}"}})',
        ),
        QuerySpec(
            metric_name=DISK_READ,
            expression=f'sum by (instance) (rate(node_disk_bytes_read{{instance="{instance}"}}[2m]))',
        ),
        QuerySpec(
            metric_name=DISK_WRITE,
            expression=f'sum by (instance) (rate(node_disk_bytes_written{{instance="{instance}"}}[2m]))',
        ),
        QuerySpec(
            metric_name=NETWORK_SEND,
            expression=f'sum by (instance) (rate(node_network_transmit_bytes'
            f'{{instance="{instance}",device!~"lo"}}[5m]))',
        ),
        QuerySpec(
            metric_name=NETWORK_RECEIVE,
            expression=f'sum by (instance) (rate(node_network_receive_bytes'
            f'{{instance="{instance}",device!~"lo"}}[5m]))',
        ),
    ]
