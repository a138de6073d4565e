"""Data models for hdnetworks."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Protocol


class Provider(Protocol):
    """Signing and transport capability handed out by a network entry."""

    def sign(self, tx: Dict[str, Any]) -> "SignedTx":
        ...

    def endpoint(self) -> str:
        ...


@dataclass(frozen=True)
class NetworkEntry:
    """A deployment target: a deferred provider factory and its network id."""
    provider_factory: Callable[[], Provider]
    network_id: int

    def __post_init__(self) -> None:
        if not callable(self.provider_factory):
            raise ValueError("provider_factory must be callable")
        if isinstance(self.network_id, bool) or not isinstance(self.network_id, int):
            raise ValueError(f"network_id must be an integer, got {self.network_id!r}")
        if self.network_id <= 0:
            raise ValueError(f"network_id must be positive, got {self.network_id}")

    def provider(self) -> Provider:
        """Build a new provider for this network."""
        return self.provider_factory()


@dataclass(frozen=True)
class SignedTx:
    """Signed transaction data model."""
    raw_transaction: bytes
    tx_hash: bytes
    sender: str

    @property
    def raw_transaction_hex(self) -> str:
        return "0x" + self.raw_transaction.hex()

    @property
    def tx_hash_hex(self) -> str:
        return "0x" + self.tx_hash.hex()


@dataclass(frozen=True)
class DerivedAccount:
    """Public view of an HD-derived account."""
    index: int
    path: str
    address: str
