"""HD wallet provider: mnemonic-derived accounts over a remote node endpoint."""

from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import structlog
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import ValidationError
from web3 import LegacyWebSocketProvider, Web3

from hdnetworks import utils
from hdnetworks.config import DEFAULT_DERIVATION_PATH
from hdnetworks.exceptions import ProviderConstructionError
from hdnetworks.models import DerivedAccount, SignedTx

logger = structlog.get_logger(__name__)

HTTP_SCHEMES = ("http", "https")
WS_SCHEMES = ("ws", "wss")


def validate_endpoint(endpoint_url: str) -> str:
    """Return the endpoint URL or raise ProviderConstructionError if malformed."""
    if not endpoint_url or not endpoint_url.strip():
        raise ProviderConstructionError("Endpoint URL is empty")

    endpoint_url = endpoint_url.strip()
    if any(ch.isspace() for ch in endpoint_url) or "<" in endpoint_url or ">" in endpoint_url:
        # Template placeholders such as "<infura API key>" were never substituted
        raise ProviderConstructionError(
            f"Endpoint URL contains placeholder text: {utils.redact_endpoint(endpoint_url)}"
        )

    try:
        parts = urlsplit(endpoint_url)
        parts.port
    except ValueError as e:
        raise ProviderConstructionError(f"Invalid endpoint URL: {e}") from e

    if parts.scheme not in HTTP_SCHEMES + WS_SCHEMES:
        raise ProviderConstructionError(
            f"Unsupported endpoint scheme {parts.scheme!r}; expected one of "
            f"{', '.join(HTTP_SCHEMES + WS_SCHEMES)}"
        )
    if not parts.hostname:
        raise ProviderConstructionError("Endpoint URL has no host")

    return endpoint_url


class HDWalletProvider:
    """Signs with accounts derived from a mnemonic and talks to one RPC endpoint."""

    def __init__(
        self,
        mnemonic: str,
        endpoint_url: str,
        address_index: int = 0,
        num_addresses: int = 1,
        derivation_path: str = DEFAULT_DERIVATION_PATH,
    ):
        """
        Initialize the provider and derive its accounts.

        Args:
            mnemonic: BIP-39 mnemonic phrase
            endpoint_url: Node endpoint (http, https, ws or wss)
            address_index: First derivation index to use
            num_addresses: Number of consecutive accounts to derive

        Raises:
            ProviderConstructionError: If the mnemonic, endpoint or account window is invalid
        """
        if not mnemonic or not mnemonic.strip():
            raise ProviderConstructionError("Mnemonic is empty")
        if address_index < 0:
            raise ProviderConstructionError(f"address_index must be >= 0, got {address_index}")
        if num_addresses < 1:
            raise ProviderConstructionError(f"num_addresses must be >= 1, got {num_addresses}")

        self._endpoint = validate_endpoint(endpoint_url)
        self.address_index = address_index
        self.num_addresses = num_addresses
        self.derivation_path = derivation_path

        self._accounts = self._derive_accounts(mnemonic.strip())
        self._w3: Optional[Web3] = None

        logger.debug(
            "provider_constructed",
            endpoint=utils.redact_endpoint(self._endpoint),
            addresses=len(self._accounts),
        )

    def _derive_accounts(self, mnemonic: str) -> List[Any]:
        """Derive the account window from the mnemonic."""
        Account.enable_unaudited_hdwallet_features()

        accounts = []
        for index in range(self.address_index, self.address_index + self.num_addresses):
            path = f"{self.derivation_path}{index}"
            try:
                accounts.append((index, path, Account.from_mnemonic(mnemonic, account_path=path)))
            except (ValidationError, ValueError) as e:
                # Do not echo the phrase back
                raise ProviderConstructionError(
                    f"Invalid mnemonic or derivation path {path!r}: "
                    f"{type(e).__name__}"
                ) from e
        return accounts

    def __repr__(self) -> str:
        return (
            f"HDWalletProvider(endpoint={utils.redact_endpoint(self._endpoint)!r}, "
            f"addresses={len(self._accounts)})"
        )

    def endpoint(self) -> str:
        """Return the configured endpoint URL."""
        return self._endpoint

    @property
    def addresses(self) -> List[str]:
        return [account.address for _, _, account in self._accounts]

    @property
    def accounts(self) -> List[DerivedAccount]:
        return [
            DerivedAccount(index=index, path=path, address=account.address)
            for index, path, account in self._accounts
        ]

    def get_address(self, index: int = 0) -> str:
        """Return the index-th derived address, relative to address_index."""
        if index < 0 or index >= len(self._accounts):
            raise IndexError(
                f"Account index {index} out of range (provider has {len(self._accounts)})"
            )
        return self._accounts[index][2].address

    def _signer(self, address: Optional[str]) -> Any:
        if address is None:
            return self._accounts[0][2]

        checksum = Web3.to_checksum_address(address)
        for _, _, account in self._accounts:
            if account.address == checksum:
                return account
        raise ValueError(f"Address {checksum} is not managed by this provider")

    def sign(self, tx: Dict[str, Any]) -> SignedTx:
        """
        Sign a transaction dictionary.

        The signer is the account named by tx["from"], or the first derived
        account when "from" is absent.

        Args:
            tx: Transaction fields (nonce, gas, gasPrice or EIP-1559 fees, chainId, ...)

        Returns:
            SignedTx with raw bytes, hash and sender address
        """
        signer = self._signer(tx.get("from"))
        unsigned = {key: value for key, value in tx.items() if key != "from"}
        signed = signer.sign_transaction(unsigned)

        return SignedTx(
            raw_transaction=bytes(signed.raw_transaction),
            tx_hash=bytes(signed.hash),
            sender=signer.address,
        )

    def sign_message(self, text: str, index: int = 0) -> str:
        """Sign a personal message (EIP-191) and return the 0x signature."""
        self.get_address(index)
        signed = self._accounts[index][2].sign_message(encode_defunct(text=text))
        return "0x" + bytes(signed.signature).hex()

    @property
    def web3(self) -> Web3:
        """Web3 instance for the endpoint, created on first use."""
        if self._w3 is None:
            scheme = urlsplit(self._endpoint).scheme
            if scheme in WS_SCHEMES:
                self._w3 = Web3(LegacyWebSocketProvider(self._endpoint))
            else:
                self._w3 = Web3(Web3.HTTPProvider(self._endpoint))
        return self._w3

    def connect(self) -> Web3:
        """Return a connected Web3 instance or raise if unreachable."""
        w3 = self.web3

        if not w3.is_connected():
            raise ConnectionError(
                f"Failed to connect to RPC endpoint: {utils.redact_endpoint(self._endpoint)}"
            )

        logger.debug("provider_connected", endpoint=utils.redact_endpoint(self._endpoint))
        return w3

    def chain_id(self) -> int:
        """Return the chain id reported by the node."""
        return int(self.connect().eth.chain_id)

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        """
        Fill in missing fields, sign and broadcast a transaction.

        Args:
            tx: Transaction fields; nonce, chainId, gas and gasPrice are filled when absent

        Returns:
            Transaction hash as 0x hex string

        Raises:
            ConnectionError: If unable to connect to RPC endpoint
        """
        w3 = self.connect()

        tx = dict(tx)
        sender = self._signer(tx.get("from")).address
        tx["from"] = sender

        if "nonce" not in tx:
            tx["nonce"] = w3.eth.get_transaction_count(sender)
        if "chainId" not in tx:
            tx["chainId"] = w3.eth.chain_id
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = w3.eth.gas_price
        if "gas" not in tx:
            tx["gas"] = w3.eth.estimate_gas(tx)

        signed = self.sign(tx)
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)

        logger.debug("transaction_sent", sender=sender, tx_hash=signed.tx_hash_hex)
        return "0x" + bytes(tx_hash).hex()
