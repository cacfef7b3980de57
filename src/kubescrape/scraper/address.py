"""Node address selection for kubelet scraping."""

from collections.abc import Sequence

from kubernetes.client.models import V1Node

from kubescrape.core.exceptions import NodeAddressError
from kubescrape.core.models import DEFAULT_ADDRESS_TYPE_PRIORITY, NodeAddressType
from kubescrape.utils.logging import get_logger

logger = get_logger(__name__)


def resolve_node_address(
    node: V1Node,
    priority: Sequence[NodeAddressType | str] = DEFAULT_ADDRESS_TYPE_PRIORITY,
) -> str:
    """Pick the address of a node to connect to.

    The first address whose type appears earliest in the priority list wins.
    Among addresses of the same type the one listed first by the node is used.

    Args:
        node: Node object as returned by the Kubernetes API
        priority: Address types in order of preference

    Returns:
        The selected address

    Raises:
        NodeAddressError: If a priority entry is not an address type, or the node
            reports no address of a listed type
    """
    try:
        wanted_types = [NodeAddressType(t).value for t in priority]
    except ValueError as e:
        raise NodeAddressError(f"Unknown node address type: {e}") from e

    name = node.metadata.name if node.metadata else None
    addresses = (node.status.addresses if node.status else None) or []

    for wanted in wanted_types:
        for address in addresses:
            if address.type == wanted and address.address:
                logger.debug("node_address_resolved", node=name, type=wanted)
                return address.address

    known = [a.type for a in addresses]
    logger.warning("node_address_not_found", node=name, address_types=known)
    raise NodeAddressError(f"Node {name} has no address of types {wanted_types}")
