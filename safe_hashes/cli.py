"""
safe-hashes command line.

Don't trust, verify: recompute the domain, message and Safe transaction
hashes of a pending multisig transaction before signing it.

Example:
    safe-hashes --network ethereum --address 0x1234...5678 --nonce 42 --output json
"""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console

from safe_hashes import __version__, config
from safe_hashes.api import SafeTransactionService
from safe_hashes.exceptions import MultipleTransactionsError, SafeHashesError
from safe_hashes.hashing import compute_hashes
from safe_hashes.networks import get_network
from safe_hashes.onchain import compare, read_onchain_hashes, safe_contract
from safe_hashes.render import render_json, render_networks, render_terminal

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("safe_hashes")

EXIT_ERROR = 1
EXIT_MISMATCH = 2


def _fail(error: SafeHashesError, output: str) -> None:
    """Report a terminal error for the request and exit. No hashes are printed."""
    if output == "json":
        if isinstance(error, MultipleTransactionsError):
            payload = {"warning": str(error), "endpoint": error.endpoint}
        else:
            payload = {"error": str(error), "stage": error.stage}
        click.echo(json.dumps(payload))
    elif isinstance(error, MultipleTransactionsError):
        err_console.print(
            "Warning: Several transactions with identical nonce values have been detected.",
            style="yellow", highlight=False, soft_wrap=True,
        )
        err_console.print(f"Please check the API endpoint for details: {error.endpoint}", highlight=False, soft_wrap=True)
    else:
        err_console.print(f"Error ({error.stage}): {error}", style="bold red", highlight=False, soft_wrap=True)
    sys.exit(EXIT_ERROR)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--network", help="Network name, see --list-networks.")
@click.option("--address", help="Safe multisig address.")
@click.option("--nonce", type=click.IntRange(min=0), help="Safe transaction nonce.")
@click.option("--output", type=click.Choice(config.OUTPUT_FORMATS), default=config.OUTPUT,
              show_default=True, help="Output format.")
@click.option("--rpc-url", default=config.RPC_URL,
              help="JSON-RPC endpoint; cross-check the hashes against the Safe contract.")
@click.option("--list-networks", is_flag=True, help="List supported networks and their chain IDs.")
@click.version_option(__version__, prog_name="safe-hashes")
def cli(network, address, nonce, output, rpc_url, list_networks) -> None:
    """Calculate the Safe transaction hashes for a pending multisig transaction."""
    logging.basicConfig(
        level=config.LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if list_networks:
        render_networks(console)
        return

    if not network or not address or nonce is None:
        raise click.UsageError("--network, --address and --nonce are required")

    try:
        selected = get_network(network)
        with SafeTransactionService(selected.api_url) as service:
            tx = service.fetch_transaction(address, nonce)
        result = compute_hashes(selected.chain_id, address, tx)
    except SafeHashesError as e:
        _fail(e, output)

    warnings = list(result.warnings)
    integrity_ok = True

    claimed = tx.claimed_safe_tx_hash
    computed = "0x" + bytes(result.hashes.safe_tx_hash).hex()
    if claimed and claimed != computed:
        integrity_ok = False
        message = f"transaction service reports safeTxHash {claimed}, recomputed {computed}"
        logger.warning(message)
        warnings.append(message)

    if rpc_url:
        try:
            onchain = read_onchain_hashes(safe_contract(rpc_url, result.safe_address), tx)
        except SafeHashesError as e:
            _fail(e, output)
        mismatches = compare(result, onchain)
        if mismatches:
            integrity_ok = False
            warnings.extend(mismatches)
        else:
            logger.info("on-chain check passed (Safe %s)", onchain.version or "unknown version")

    if output == "json":
        click.echo(render_json(result, warnings))
    else:
        render_terminal(result, selected, console, warnings)

    if not integrity_ok:
        sys.exit(EXIT_MISMATCH)


def main():
    cli()


if __name__ == "__main__":
    main()
