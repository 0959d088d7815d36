"""
Shared fixtures and reference vectors.

Expected hashes were recorded once from an independent Keccak-256 / ABI
implementation and are compared byte for byte.
"""

from __future__ import annotations

import copy
import json

import httpx
import pytest

from safe_hashes.api import SafeTransactionService

ZERO = "0x0000000000000000000000000000000000000000"
SAFE = "0x1234567890123456789012345678901234567890"
SAFE_SEPOLIA = "0x5afe5afE5afE5afE5afE5aFe5aFe5Afe5Afe5AfE"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
# USDC with its last nibble changed and the casing kept: a broken EIP-55 checksum
BAD_CHECKSUM = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB4a"
MULTISEND = "0x40A2aCCbd92BCA938b02010E17A5b8929b49130D"

EMPTY_KECCAK = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"

# chainId 1, SAFE, every field zero / default, data 0x, nonce 0
GOLDEN = {
    "domain": "3888d34b69042fc92d822804722836d705e22c56efd96e8e04c0de3ec131831b",
    "message": "0dbbb7b51e261ff463b48851dfe9c0350bbf798b406605d374ec8c22ab65ae43",
    "safe_tx": "4ab5d2bc0ea050d1a3180cd143211f578b13ac46e74ed9bcf9d8ee4ae29ca1b2",
}

# USDC transfer(0xB0B0..., 1_000_000) from SAFE_SEPOLIA on sepolia, nonce 42
ERC20_DATA = (
    "0xa9059cbb"
    "000000000000000000000000b0b0b0b0b0b0b0b0b0b0b0b0b0b0b0b0b0b0b0b0"
    "00000000000000000000000000000000000000000000000000000000000f4240"
)
ERC20 = {
    "chain_id": 11155111,
    "data_hash": "5241e3e1d1a1aac506c5e17ffed4f1c15bcb29624363964e055704b396cfeff6",
    "domain": "1781d417aab29cfee0dcdca890d20c025850a6d0a3599a2ee8c877a2e7bc62ec",
    "message": "daa0e56adced8828e3a61e4c265bbb925654f2b004e471677facd34e6df13b7a",
    "safe_tx": "2f383d768bd577087c7b1b74c3392cedff67d49b929670d0c7b62a16765abf98",
}

# delegatecall to MULTISEND on gnosis (100), 1 ether, safeTxGas 50000, baseGas 21000, gasPrice 1, nonce 3
DELEGATECALL = {
    "chain_id": 100,
    "domain": "0b9160b0b2fde5907cb8b75c7e1ea18e1ffe521eaf96e9d32965aa5ce8a6d0c4",
    "message": "7b7abbbf76d5f1eec05f2d885dc000d019d3e3aac6ef09b5caef12dd2759f8d1",
    "safe_tx": "7df82b708008d9d782ed18f6b880dca429c3b93e6ae2ee0ea3da8895adfb6948",
}

# chainId 1, SAFE, data = 0xab * 300, nonce 7
BIG_DATA = {
    "data": "0x" + "ab" * 300,
    "data_hash": "315f259936b44c2fd956d917deacbaa548f17a9d26d17df4fa2bdec09966e007",
    "message": "4634ccaa17e22111cf8fdfee0bdc8d4b3d75948d2f75966b225411c69f2e574b",
    "safe_tx": "07b45988c49bf8edfcc618ff28777ceac5721eb0330c7357544c30dbabd51b4c",
}

# chainId 1, SAFE, all zero except operation = 2
OPERATION_2 = {
    "message": "8ac6f0e2c7f29a3bed528f93a5d00d2c6e8bebc8fc6183feede9e27604881b32",
    "safe_tx": "08249958bb63504b73c3f36fbb958eb67f22932d865daf5f3f5a44e94918a590",
}

# same as GOLDEN with nonce 1 / with chainId 5
NONCE_1 = {
    "message": "9598eb79a59669d59c9ee628a121701563ff0be323b30eb19b86c5ac45ae595d",
    "safe_tx": "629355ba6fc81c5a3b552c5a29212222ed7794fe95dc6b791ab2cfa654b4b0a8",
}
CHAIN_5 = {
    "domain": "52512d769357419e2ada2bb019c20b8a85389bae8f8f8b0ec04792dad2f77b48",
    "safe_tx": "c5b72b53de91b9685af45af9d2f4db8765d26dc43e22d44c1b9d8e4a13d4225e",
}


def api_transaction(**overrides):
    """One ``results[]`` entry shaped like the Safe transaction service returns it."""
    tx = {
        "safe": SAFE_SEPOLIA,
        "to": USDC,
        "value": "0",
        "data": ERC20_DATA,
        "operation": 0,
        "gasToken": ZERO,
        "safeTxGas": "0",
        "baseGas": "0",
        "gasPrice": "0",
        "refundReceiver": ZERO,
        "nonce": 42,
        "safeTxHash": "0x" + ERC20["safe_tx"],
        "dataDecoded": {
            "method": "transfer",
            "parameters": [
                {"name": "to", "type": "address", "value": "0xB0B0b0B0B0B0B0b0B0B0B0b0b0b0b0B0b0b0B0B0"},
                {"name": "value", "type": "uint256", "value": "1000000"},
            ],
        },
        "isExecuted": False,
    }
    tx.update(overrides)
    return tx


def api_page(*results):
    return {"count": len(results), "next": None, "previous": None, "results": list(results)}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers every request with one canned response and keeps the requests."""

    def __init__(self, payload=None, status_code=200, text=None):
        self.requests = []
        self.payload = copy.deepcopy(payload)
        self.status_code = status_code
        self.text = text
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, content=json.dumps(self.payload).encode(),
                              headers={"content-type": "application/json"})


@pytest.fixture
def make_service():
    """Build a SafeTransactionService backed by a RecordingTransport."""

    def factory(payload=None, status_code=200, text=None,
                base_url="https://safe-transaction-sepolia.safe.global"):
        transport = RecordingTransport(payload, status_code, text)
        return SafeTransactionService(base_url, transport=transport), transport

    return factory
