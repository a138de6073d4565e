"""Custom exception classes for hdnetworks."""


class HDNetworksError(Exception):
    """Base exception for network configuration errors."""

    pass


class UnknownNetwork(HDNetworksError, KeyError):
    """Raised when a requested network is not in the configuration."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class ProviderConstructionError(HDNetworksError, ValueError):
    """Raised when a provider cannot be built from its mnemonic or endpoint."""

    pass
