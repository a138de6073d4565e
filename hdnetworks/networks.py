"""Deployment network configuration: network name -> provider factory and network id."""

import copy
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

import structlog

from hdnetworks import config, utils
from hdnetworks.exceptions import ProviderConstructionError, UnknownNetwork
from hdnetworks.models import NetworkEntry
from hdnetworks.provider import HDWalletProvider

logger = structlog.get_logger(__name__)


class NetworkConfig:
    """Read-only mapping of network names to their entries."""

    def __init__(self, networks: Mapping[str, NetworkEntry]) -> None:
        self._networks: Mapping[str, NetworkEntry] = MappingProxyType(dict(networks))

    @property
    def networks(self) -> Mapping[str, NetworkEntry]:
        return self._networks

    def resolve(self, name: str) -> NetworkEntry:
        """
        Look up a network entry by name.

        Args:
            name: Network name (e.g., "ropsten")

        Returns:
            The NetworkEntry for that name

        Raises:
            UnknownNetwork: If the name is not configured
        """
        try:
            return self._networks[name]
        except KeyError:
            known = ", ".join(sorted(self._networks)) or "none"
            raise UnknownNetwork(f"Unknown network {name!r} (known: {known})") from None

    def names(self) -> List[str]:
        return list(self._networks)

    def __contains__(self, name: object) -> bool:
        return name in self._networks

    def __iter__(self) -> Iterator[str]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)

    def __repr__(self) -> str:
        return f"NetworkConfig({', '.join(self._networks)})"


def make_provider_factory(
    network: str,
    settings: Dict[str, Any],
) -> Callable[[], HDWalletProvider]:
    """
    Build the deferred provider factory for a network.

    The settings are copied here; only the environment (mnemonic, endpoint
    variables) is read when the factory is called.
    """
    settings = copy.deepcopy(settings)
    table = {network: settings}

    def provider_factory() -> HDWalletProvider:
        endpoint = config.get_rpc_endpoint(network, table)
        if not endpoint:
            raise ProviderConstructionError(
                f"No RPC endpoint for {network!r}: set {settings.get('rpc_env', 'an RPC URL')} "
                f"or {config.INFURA_API_KEY_ENV}"
            )

        provider = HDWalletProvider(
            config.get_mnemonic(),
            endpoint,
            address_index=settings.get("address_index", 0),
            num_addresses=settings.get("num_addresses", 1),
            derivation_path=settings.get("derivation_path", config.DEFAULT_DERIVATION_PATH),
        )
        logger.debug(
            "provider_factory_invoked",
            network=network,
            endpoint=utils.redact_endpoint(endpoint),
        )
        return provider

    return provider_factory


def load_network_config(
    networks: Optional[Dict[str, Dict[str, Any]]] = None,
) -> NetworkConfig:
    """
    Build the network configuration from settings.

    Args:
        networks: Settings table (defaults to config.NETWORKS)

    Returns:
        NetworkConfig with one lazily-evaluated entry per network
    """
    if networks is None:
        networks = config.NETWORKS

    entries = {
        name: NetworkEntry(
            provider_factory=make_provider_factory(name, settings),
            network_id=settings["network_id"],
        )
        for name, settings in networks.items()
    }
    return NetworkConfig(entries)
