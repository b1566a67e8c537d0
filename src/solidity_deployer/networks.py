"""Network lookup helpers for solidity-deployer library."""

from typing import Any, Dict

from .constants import NETWORK_ALIASES, NETWORK_CONFIG
from .exceptions import NetworkNotFoundError


def canonical_network_name(network: str) -> str:
    """
    Convert a network name to its canonical form.

    Args:
        network: Network name (canonical or alias, e.g. "homestead")

    Returns:
        Canonical network name
    """
    name = network.lower()
    return NETWORK_ALIASES.get(name, name)


def get_network_config(network: str) -> Dict[str, Any]:
    """
    Get network information (chain ID, name, explorer URL).

    Raises:
        NetworkNotFoundError: If the network is unknown
    """
    name = canonical_network_name(network)
    if name not in NETWORK_CONFIG:
        raise NetworkNotFoundError(f"Network '{network}' is not supported")
    return NETWORK_CONFIG[name]


def explorer_address_url(network: str, address: str) -> str:
    """Block explorer URL for an address on a network."""
    return f"{get_network_config(network)['block_explorer_url']}/address/{address}"
