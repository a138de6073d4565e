"""Command line interface for hdnetworks."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Optional, Tuple

from hdnetworks import config, utils
from hdnetworks.exceptions import HDNetworksError
from hdnetworks.networks import NetworkConfig, load_network_config
from hdnetworks.provider import HDWalletProvider


class HDNetworksCLI:
    """Main CLI class for hdnetworks."""

    def __init__(self, network_config: Optional[NetworkConfig] = None) -> None:
        self.network_config = network_config or load_network_config()
        self.actions: Dict[str, Tuple[str, Callable[[argparse.Namespace], None]]] = {
            "list": ("List configured networks", self.list_networks),
            "show": ("Show network details", self.show_network),
            "accounts": ("List derived accounts", self.list_accounts),
            "status": ("Check node connectivity", self.check_status),
        }

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser from the action table."""
        parser = argparse.ArgumentParser(
            prog="hdnetworks",
            description="Deployment networks backed by an HD wallet provider",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Log debug events",
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        for name, (label, _) in self.actions.items():
            subparser = subparsers.add_parser(name, help=label)
            if name != "list":
                subparser.add_argument("network", help="Network name (e.g. ropsten)")
            if name == "accounts":
                subparser.add_argument(
                    "--count",
                    type=positive_int,
                    default=None,
                    help="Number of accounts to derive (defaults to the network setting)",
                )

        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Parse arguments, dispatch the action and return the exit status."""
        args = self.build_parser().parse_args(argv)
        utils.configure_logging(args.verbose)

        label, callback = self.actions[args.command]
        utils.section_header(label)
        try:
            callback(args)
        except (HDNetworksError, ConnectionError) as e:
            utils.error(str(e))
            return 1
        return 0

    def list_networks(self, args: argparse.Namespace) -> None:
        """Print every configured network and its id."""
        for name, entry in self.network_config.networks.items():
            print(f"{utils.bold(name)}  network_id={entry.network_id}")

    def show_network(self, args: argparse.Namespace) -> None:
        """Print network id, redacted endpoint and first address."""
        entry = self.network_config.resolve(args.network)
        print(f"{utils.bold('Network:')} {args.network}")
        print(f"{utils.bold('Network ID:')} {entry.network_id}")
        print(f"{utils.bold('Mnemonic:')} {utils.describe_mnemonic(config.get_mnemonic())}")

        provider = entry.provider()
        print(f"{utils.bold('Endpoint:')} {utils.redact_endpoint(provider.endpoint())}")
        print(f"{utils.bold('Address:')} {provider.get_address()}")

    def list_accounts(self, args: argparse.Namespace) -> None:
        """Print derivation path and address of each derived account."""
        entry = self.network_config.resolve(args.network)
        provider = entry.provider()

        if args.count is not None:
            provider = HDWalletProvider(
                config.get_mnemonic(),
                provider.endpoint(),
                address_index=provider.address_index,
                num_addresses=args.count,
                derivation_path=provider.derivation_path,
            )

        for account in provider.accounts:
            print(f"{account.path}  {utils.bold_cyan(account.address)}")

    def check_status(self, args: argparse.Namespace) -> None:
        """Connect to the node and compare its network id with the configured id."""
        entry = self.network_config.resolve(args.network)
        provider = entry.provider()

        utils.info(f"Connecting to {utils.redact_endpoint(provider.endpoint())}")
        w3 = provider.connect()
        network_id = int(w3.net.version)
        chain_id = int(w3.eth.chain_id)
        block_number = w3.eth.block_number

        utils.result(f"Network ID: {network_id}")
        utils.result(f"Chain ID: {chain_id}")
        utils.result(f"Block number: {block_number}")

        if network_id != entry.network_id:
            utils.warn(
                f"Node reports network id {network_id} but {args.network} is configured "
                f"with network id {entry.network_id}"
            )
        else:
            utils.success(f"{args.network} is reachable")


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    cli = HDNetworksCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
