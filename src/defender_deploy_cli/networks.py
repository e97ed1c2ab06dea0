"""Chain ID to network name resolution for defender-deploy-cli."""

import logging
from typing import Dict, Mapping, Optional

from .constants import DEFENDER_NETWORKS
from .exceptions import NetworkResolutionError

logger = logging.getLogger(__name__)


class NetworkResolver:
    """Maps chain IDs to the network names known to the deployment service."""

    def __init__(self, networks: Optional[Mapping[str, int]] = None):
        """
        Initialize the resolver.

        Args:
            networks: Mapping of network name -> chain ID
                      If None, uses the bundled DEFENDER_NETWORKS table
        """
        if networks is None:
            networks = DEFENDER_NETWORKS

        self._by_chain_id: Dict[int, str] = {}
        for name, chain_id in networks.items():
            self._by_chain_id.setdefault(chain_id, name)

    def from_chain_id(self, chain_id: int) -> Optional[str]:
        """Return the network name for a chain ID, or None if unsupported."""
        return self._by_chain_id.get(chain_id)

    def resolve(self, chain_id: str) -> str:
        """
        Resolve a decimal chain ID string to a network name.

        Args:
            chain_id: Chain ID as typed on the command line

        Returns:
            Network name (e.g., "mainnet" for "1")

        Raises:
            NetworkResolutionError: If the chain ID is not a decimal integer
                                    or is not supported
        """
        text = chain_id.strip()
        unsupported = NetworkResolutionError(
            f"Network {text or chain_id} is not supported by OpenZeppelin Defender"
        )
        # ASCII digits only
        if not (text.isascii() and text.isdigit()):
            raise unsupported

        try:
            value = int(text)
        except ValueError as e:
            # Longer than the interpreter's int conversion limit
            raise unsupported from e

        network = self.from_chain_id(value)
        if network is None:
            raise unsupported

        logger.debug("Resolved chain ID %s to network %s", text, network)
        return network


def resolve_network(chain_id: str, networks: Optional[Mapping[str, int]] = None) -> str:
    """Resolve a chain ID string against the given (or bundled) network table."""
    return NetworkResolver(networks).resolve(chain_id)
