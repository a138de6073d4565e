"""Shared pytest fixtures for hdnetworks tests."""

import pytest

# Well-known development mnemonic (Hardhat/Anvil default accounts)
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_API_KEY = "0123456789abcdef0123456789abcdef"

ADDRESS_0 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ADDRESS_1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ADDRESS_2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"

ENV_KEYS = ["MNEMONIC", "INFURA_API_KEY", "ROPSTEN_RPC", "DEVELOPMENT_RPC"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without secrets or endpoint overrides."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def wallet_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide a mnemonic and an Infura key through the environment."""
    monkeypatch.setenv("MNEMONIC", TEST_MNEMONIC)
    monkeypatch.setenv("INFURA_API_KEY", TEST_API_KEY)


@pytest.fixture
def endpoint() -> str:
    """Return an Infura-style endpoint with an embedded key."""
    return f"https://ropsten.infura.io/v3/{TEST_API_KEY}"


@pytest.fixture
def sample_tx() -> dict:
    """Return a legacy transaction ready to sign."""
    return {
        "to": ADDRESS_1,
        "value": 1,
        "gas": 21000,
        "gasPrice": 10**9,
        "nonce": 0,
        "chainId": 3,
    }
