"""
Subnet address arithmetic.

cidrsubnet follows the Terraform function of the same name: extend the
prefix of `prefix` by `newbits` and pick the `netnum`-th block of the
resulting size.
"""

import ipaddress

from infra.graph.errors import InvalidAttributeError


def cidrsubnet(prefix: str, newbits: int, netnum: int) -> str:
    """
    Calculate a subnet address within a given network block.

    Args:
        prefix: Parent network in CIDR notation (e.g., '10.0.0.0/16')
        newbits: Number of bits to add to the parent prefix length
        netnum: Index of the sub-block, must fit in `newbits` bits

    Returns:
        Subnet in CIDR notation

    Raises:
        InvalidAttributeError: If the prefix is malformed or the sub-block does not exist

    Example:
        >>> cidrsubnet("10.0.0.0/16", 8, 1)
        '10.0.1.0/24'
    """
    try:
        network = ipaddress.ip_network(prefix, strict=False)
    except ValueError as e:
        raise InvalidAttributeError(f"Invalid CIDR block '{prefix}': {e}") from e

    if newbits < 0:
        raise InvalidAttributeError(f"newbits must be non-negative, got {newbits}")

    new_prefix = network.prefixlen + newbits
    if new_prefix > network.max_prefixlen:
        raise InvalidAttributeError(
            f"Cannot extend /{network.prefixlen} by {newbits} bits "
            f"(max /{network.max_prefixlen})"
        )

    if netnum < 0 or netnum >= 2 ** newbits:
        raise InvalidAttributeError(
            f"netnum {netnum} does not fit in {newbits} bits for {prefix}"
        )

    block_size = 2 ** (network.max_prefixlen - new_prefix)
    base = int(network.network_address) + netnum * block_size
    subnet = type(network)((base, new_prefix))
    return str(subnet)


def blocks_overlap(a: str, b: str) -> bool:
    """Check whether two CIDR blocks share any address."""
    return ipaddress.ip_network(a).overlaps(ipaddress.ip_network(b))


def block_contains(outer: str, inner: str) -> bool:
    """Check whether `inner` lies entirely inside `outer`."""
    inner_net = ipaddress.ip_network(inner)
    outer_net = ipaddress.ip_network(outer)
    if inner_net.version != outer_net.version:
        return False
    return inner_net.subnet_of(outer_net)
