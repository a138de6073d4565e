#!/usr/bin/env python3
"""
Configuration module for hdnetworks.
Stores deployment networks, RPC endpoint templates and secret lookups.
Secrets are read from environment variables (or a .env file), never from source.
"""

import os
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

MNEMONIC_ENV = "MNEMONIC"
INFURA_API_KEY_ENV = "INFURA_API_KEY"

DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/"


def get_env(key: str, default: str) -> str:
    """Get environment variable with fallback to default."""
    return os.getenv(key, default)


# Deployment networks
# Structure: NETWORKS[network] -> settings
# "rpc_template" may reference {api_key}, filled from INFURA_API_KEY at call time.
NETWORKS: Dict[str, Dict[str, Any]] = {
    "ropsten": {
        "network_id": 3,
        "rpc_env": "ROPSTEN_RPC",
        "rpc_template": "https://ropsten.infura.io/v3/{api_key}",
        "address_index": 0,
        "num_addresses": 1,
    },
    "development": {
        "network_id": 5777,  # Ganache
        "rpc_env": "DEVELOPMENT_RPC",
        "rpc_template": "http://127.0.0.1:8545",
        "address_index": 0,
        "num_addresses": 1,
    },
}


def get_mnemonic() -> str:
    """Get the wallet mnemonic phrase, or an empty string if unset."""
    return get_env(MNEMONIC_ENV, "").strip()


def get_infura_api_key() -> Optional[str]:
    """Get the Infura access key, or None if unset."""
    api_key = get_env(INFURA_API_KEY_ENV, "").strip()
    return api_key or None


def get_network_settings(
    network: str,
    networks: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Optional[Dict[str, Any]]:
    """
    Get settings for a given network.

    Args:
        network: Network name (e.g., "ropsten", "development")
        networks: Settings table to look in (defaults to NETWORKS)

    Returns:
        Settings dictionary, or None if not found
    """
    if networks is None:
        networks = NETWORKS
    return networks.get(network)


def get_rpc_endpoint(
    network: str,
    networks: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Optional[str]:
    """
    Get RPC endpoint for a given network.

    The network's override variable (e.g. ROPSTEN_RPC) wins over the template.

    Args:
        network: Network name (e.g., "ropsten", "development")
        networks: Settings table to look in (defaults to NETWORKS)

    Returns:
        RPC endpoint URL as string, or None if it cannot be built
    """
    settings = get_network_settings(network, networks)
    if settings is None:
        return None

    rpc_env = settings.get("rpc_env")
    if rpc_env:
        override = get_env(rpc_env, "").strip()
        if override:
            return override

    template = settings.get("rpc_template")
    if not template:
        return None

    if "{api_key}" in template:
        api_key = get_infura_api_key()
        if api_key is None:
            return None
        return template.format(api_key=api_key)

    return template


def list_networks() -> list[str]:
    """List all available network names."""
    return list(NETWORKS.keys())
