"""Tests for the hdnetworks command line interface."""

from unittest.mock import MagicMock

import pytest

from conftest import ADDRESS_0, ADDRESS_1, ADDRESS_2, TEST_API_KEY, TEST_MNEMONIC
from hdnetworks.cli import HDNetworksCLI, main
from hdnetworks.provider import HDWalletProvider


def fake_web3(network_id: str = "3", chain_id: int = 3) -> MagicMock:
    w3 = MagicMock()
    w3.is_connected.return_value = True
    w3.net.version = network_id
    w3.eth.chain_id = chain_id
    w3.eth.block_number = 12345
    return w3


class TestCommands:
    def test_list(self, capsys):
        assert main(["list"]) == 0

        out = capsys.readouterr().out
        assert "ropsten" in out
        assert "network_id=3" in out
        assert "development" in out

    def test_show(self, capsys, wallet_env):
        assert main(["show", "ropsten"]) == 0

        out = capsys.readouterr().out
        assert ADDRESS_0 in out
        assert "12 words (hidden)" in out
        assert TEST_API_KEY not in out
        assert TEST_MNEMONIC not in out

    def test_show_unknown_network(self, capsys):
        assert main(["show", "nonexistent"]) == 1
        assert "Unknown network 'nonexistent'" in capsys.readouterr().out

    def test_show_without_secrets(self, capsys):
        assert main(["show", "ropsten"]) == 1
        assert "[error]" in capsys.readouterr().out

    def test_accounts_count(self, capsys, wallet_env):
        assert main(["accounts", "ropsten", "--count", "3"]) == 0

        out = capsys.readouterr().out
        for address in (ADDRESS_0, ADDRESS_1, ADDRESS_2):
            assert address in out
        assert "m/44'/60'/0'/0/2" in out

    @pytest.mark.parametrize("count", ["0", "-2", "three"])
    def test_accounts_invalid_count(self, capsys, wallet_env, count):
        with pytest.raises(SystemExit) as exc_info:
            main(["accounts", "ropsten", "--count", count])
        assert exc_info.value.code == 2
        assert "--count" in capsys.readouterr().err

    def test_missing_command(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2


class TestStatus:
    """Test the connectivity check with a patched web3 connection."""

    def test_reachable(self, capsys, monkeypatch, wallet_env):
        monkeypatch.setattr(HDWalletProvider, "connect", lambda self: fake_web3())

        assert main(["status", "ropsten"]) == 0

        out = capsys.readouterr().out
        assert "Block number: 12345" in out
        assert "ropsten is reachable" in out
        assert TEST_API_KEY not in out

    def test_network_id_mismatch(self, capsys, monkeypatch, wallet_env):
        monkeypatch.setattr(
            HDWalletProvider, "connect", lambda self: fake_web3(network_id="1", chain_id=1)
        )

        assert main(["status", "ropsten"]) == 0
        assert "[warn]" in capsys.readouterr().out

    def test_connection_error(self, capsys, monkeypatch, wallet_env):
        def refuse(self):
            raise ConnectionError("Failed to connect to RPC endpoint")

        monkeypatch.setattr(HDWalletProvider, "connect", refuse)

        assert main(["status", "ropsten"]) == 1
        assert "Failed to connect" in capsys.readouterr().out


def test_cli_initialization():
    cli = HDNetworksCLI()
    assert set(cli.actions) == {"list", "show", "accounts", "status"}
    assert callable(cli.run)
