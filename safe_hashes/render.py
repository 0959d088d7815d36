"""
Renderers for a computed HashResult.

Two independent views over the same value: a structured dict for JSON output
and labelled lines for a terminal. Neither touches the hashing code.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

from eth_utils import to_hex
from rich.console import Console
from rich.text import Text

from safe_hashes.hashing import HashResult, format_hash
from safe_hashes.networks import NETWORKS, Network
from safe_hashes.transaction import SafeTransaction

ETH_TRANSFER_METHOD = "0x (ETH Transfer)"
UNDECODED_METHOD = "Unknown (no decoding available)"


def method_label(tx: SafeTransaction) -> str:
    if tx.decoded_method:
        return tx.decoded_method
    return UNDECODED_METHOD if tx.data else ETH_TRANSFER_METHOD


def parameters(tx: SafeTransaction) -> List[Any]:
    return list(tx.decoded_parameters or [])


# ------------------------------------------------------------
#  Structured (JSON)
# ------------------------------------------------------------

def to_json_dict(result: HashResult, warnings: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    tx = result.transaction
    payload = {
        "transactionData": {
            "multisigAddress": result.safe_address,
            "to": tx.to,
            "data": tx.data_hex,
            "encodedMessage": to_hex(bytes(result.encoded_message)),
            "method": method_label(tx),
            "parameters": parameters(tx),
        },
        "hashes": {
            "domainHash": format_hash(result.hashes.domain_hash),
            "messageHash": format_hash(result.hashes.message_hash),
            "safeTransactionHash": to_hex(bytes(result.hashes.safe_tx_hash)),
        },
    }
    warnings = list(result.warnings if warnings is None else warnings)
    if warnings:
        payload["warnings"] = warnings
    return payload


def render_json(result: HashResult, warnings: Optional[Iterable[str]] = None) -> str:
    return json.dumps(to_json_dict(result, warnings), indent=2)


# ------------------------------------------------------------
#  Human-readable (terminal)
# ------------------------------------------------------------

def _print(console: Console, text: Text) -> None:
    # soft_wrap keeps the 700-character encoded message on one line
    console.print(text, soft_wrap=True, highlight=False)


def print_banner(console: Console, title: str) -> None:
    rule = "=" * (len(title) + 4)
    _print(console, Text(rule))
    _print(console, Text(f"= {title} ="))
    _print(console, Text(rule))
    _print(console, Text(""))


def print_header(console: Console, header: str) -> None:
    _print(console, Text(header, style="underline"))


def print_field(console: Console, label: str, value: Any, style: str = "green") -> None:
    _print(console, Text.assemble(f"{label}: ", (str(value), style)))


def render_terminal(
    result: HashResult,
    network: Network,
    console: Console,
    warnings: Optional[Iterable[str]] = None,
) -> None:
    tx = result.transaction

    print_banner(console, "Selected Network Configurations")
    print_field(console, "Network", network.name)
    print_field(console, "Chain ID", result.chain_id)
    _print(console, Text(""))

    print_banner(console, "Transaction Data and Computed Hashes")
    print_header(console, "Transaction Data")
    print_field(console, "Multisig address", result.safe_address)
    print_field(console, "To", tx.to)
    print_field(console, "Data", tx.data_hex)
    print_field(console, "Encoded message", to_hex(bytes(result.encoded_message)))
    print_field(console, "Method", method_label(tx))
    print_field(console, "Parameters", json.dumps(parameters(tx), separators=(",", ":")))
    _print(console, Text(""))

    print_header(console, "Hashes")
    print_field(console, "Domain hash", format_hash(result.hashes.domain_hash))
    print_field(console, "Message hash", format_hash(result.hashes.message_hash))
    print_field(console, "Safe transaction hash", to_hex(bytes(result.hashes.safe_tx_hash)))

    warnings = list(result.warnings if warnings is None else warnings)
    if warnings:
        _print(console, Text(""))
        print_header(console, "Warnings")
        for message in warnings:
            _print(console, Text(f"Warning: {message}", style="bold yellow"))


def render_networks(console: Console) -> None:
    _print(console, Text("Supported Networks:"))
    for name in sorted(NETWORKS):
        _print(console, Text(f"  {name} ({NETWORKS[name].chain_id})"))
