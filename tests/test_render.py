"""Tests for the JSON and terminal renderers."""

import io
import json

import pytest
from hexbytes import HexBytes
from rich.console import Console

from safe_hashes.hashing import compute_hashes
from safe_hashes.networks import get_network
from safe_hashes.render import (
    ETH_TRANSFER_METHOD,
    UNDECODED_METHOD,
    render_json,
    render_networks,
    render_terminal,
    to_json_dict,
)
from safe_hashes.transaction import SafeTransaction
from conftest import ERC20, ERC20_DATA, GOLDEN, SAFE, SAFE_SEPOLIA, USDC, api_transaction


@pytest.fixture
def erc20_result():
    tx = SafeTransaction.from_api(api_transaction())
    return compute_hashes(ERC20["chain_id"], SAFE_SEPOLIA, tx)


@pytest.fixture
def zero_result():
    return compute_hashes(1, SAFE, SafeTransaction())


def plain_console():
    buf = io.StringIO()
    return Console(file=buf, force_terminal=False, color_system=None, width=80), buf


class TestJson:

    def test_structure(self, erc20_result):
        payload = to_json_dict(erc20_result)
        assert set(payload) == {"transactionData", "hashes"}
        data = payload["transactionData"]
        assert data["multisigAddress"] == SAFE_SEPOLIA
        assert data["to"] == USDC
        assert data["data"] == ERC20_DATA
        assert data["encodedMessage"].startswith("0xbb8310d486368db6bd6f849402fdd73ad53d316b5a4b2644ad6efe0f941286d8")
        assert len(data["encodedMessage"]) == 2 + 352 * 2
        assert data["method"] == "transfer"
        assert data["parameters"][1]["value"] == "1000000"

    def test_hash_casing(self, erc20_result):
        hashes = to_json_dict(erc20_result)["hashes"]
        assert hashes["domainHash"] == "0x" + ERC20["domain"].upper()
        assert hashes["messageHash"] == "0x" + ERC20["message"].upper()
        assert hashes["safeTransactionHash"] == "0x" + ERC20["safe_tx"]

    def test_eth_transfer_defaults(self, zero_result):
        data = to_json_dict(zero_result)["transactionData"]
        assert data["data"] == "0x"
        assert data["method"] == ETH_TRANSFER_METHOD
        assert data["parameters"] == []

    def test_undecoded_calldata(self):
        result = compute_hashes(1, SAFE, SafeTransaction(data=HexBytes("0x1234")))
        assert to_json_dict(result)["transactionData"]["method"] == UNDECODED_METHOD

    def test_warnings_only_when_present(self):
        result = compute_hashes(1, SAFE, SafeTransaction(operation=3))
        assert "operation 3" in to_json_dict(result)["warnings"][0]
        assert "warnings" not in to_json_dict(result, warnings=[])

    def test_render_json_round_trips(self, zero_result):
        payload = json.loads(render_json(zero_result))
        assert payload["hashes"]["safeTransactionHash"] == "0x" + GOLDEN["safe_tx"]


class TestTerminal:

    def test_groups_and_labels(self, erc20_result):
        console, buf = plain_console()
        render_terminal(erc20_result, get_network("sepolia"), console)
        out = buf.getvalue()

        assert "= Selected Network Configurations =" in out
        assert "Network: sepolia" in out
        assert "Chain ID: 11155111" in out
        assert "= Transaction Data and Computed Hashes =" in out
        assert out.index("Transaction Data\n") < out.index("Hashes\n")
        assert f"Multisig address: {SAFE_SEPOLIA}" in out
        assert f"To: {USDC}" in out
        assert f"Data: {ERC20_DATA}" in out
        assert "Method: transfer" in out
        assert 'Parameters: [{"name":"to"' in out
        assert "Domain hash: 0x" + ERC20["domain"].upper() in out
        assert "Message hash: 0x" + ERC20["message"].upper() in out
        assert "Safe transaction hash: 0x" + ERC20["safe_tx"] in out
        assert "Warnings" not in out

    def test_encoded_message_is_not_wrapped(self, erc20_result):
        console, buf = plain_console()
        render_terminal(erc20_result, get_network("sepolia"), console)
        lines = [line for line in buf.getvalue().splitlines() if line.startswith("Encoded message: ")]
        assert len(lines) == 1
        assert len(lines[0]) == len("Encoded message: ") + 2 + 704

    def test_no_markup_interpretation(self):
        tx = SafeTransaction(decoded_method="[bold]x[/bold]", decoded_parameters=["[red]"])
        console, buf = plain_console()
        render_terminal(compute_hashes(1, SAFE, tx), get_network("ethereum"), console)
        assert "Method: [bold]x[/bold]" in buf.getvalue()

    def test_warnings_section(self):
        console, buf = plain_console()
        result = compute_hashes(1, SAFE, SafeTransaction(operation=2))
        render_terminal(result, get_network("ethereum"), console, warnings=list(result.warnings) + ["extra"])
        out = buf.getvalue()
        assert "Warnings" in out
        assert "Warning: operation 2" in out
        assert "Warning: extra" in out


def test_render_networks():
    console, buf = plain_console()
    render_networks(console)
    lines = buf.getvalue().splitlines()
    assert lines[0] == "Supported Networks:"
    assert "  ethereum (1)" in lines
    assert "  aurora (1313161554)" in lines
    assert len(lines) == 22
