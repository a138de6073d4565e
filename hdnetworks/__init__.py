"""
hdnetworks: deployment networks backed by an HD wallet provider
"""

from importlib.metadata import PackageNotFoundError, version

import structlog

from . import utils
from .exceptions import HDNetworksError, ProviderConstructionError, UnknownNetwork
from .models import DerivedAccount, NetworkEntry, SignedTx
from .networks import NetworkConfig, load_network_config
from .provider import HDWalletProvider

# Quiet by default for library use; the CLI reconfigures from its flags
if not structlog.is_configured():
    utils.configure_logging()

try:
    __version__ = version("hdnetworks")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "NetworkConfig",
    "NetworkEntry",
    "load_network_config",
    "HDWalletProvider",
    "SignedTx",
    "DerivedAccount",
    "HDNetworksError",
    "UnknownNetwork",
    "ProviderConstructionError",
]
