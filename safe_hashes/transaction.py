"""
Normalized Safe multisig transaction.

A SafeTransaction is built from one result of the Safe transaction service
(``SafeTransaction.from_api``) and is the only input the hash composer reads
besides the chain id and the Safe address. Parsing fails fast on anything
that does not fit its Solidity type; semantic oddities that still hash
(an operation outside call/delegatecall) are reported by ``validate()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from eth_utils import is_hex, remove_0x_prefix, to_checksum_address, to_hex
from hexbytes import HexBytes

from safe_hashes.encoding import is_valid_address
from safe_hashes.exceptions import MalformedInputError

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

OPERATION_CALL = 0
OPERATION_DELEGATECALL = 1
OPERATION_NAMES = {OPERATION_CALL: "call", OPERATION_DELEGATECALL: "delegatecall"}


# ------------------------------------------------------------
#  Field parsers
# ------------------------------------------------------------

def parse_address(field_name: str, raw: Any) -> str:
    """Checksummed address; missing values become the zero address."""
    if raw is None or raw == "":
        return ZERO_ADDRESS
    if not isinstance(raw, str):
        raise MalformedInputError(field_name, f"expected a hex address string, got {type(raw).__name__}")
    if not is_valid_address(raw):
        raise MalformedInputError(field_name, f"not a valid 20-byte address: {raw!r}")
    return to_checksum_address(raw)


def parse_uint(field_name: str, raw: Any, bits: int = 256) -> int:
    """Non-negative integer from an int or a decimal string; missing values become 0."""
    if raw is None or raw == "":
        return 0
    if isinstance(raw, bool):
        raise MalformedInputError(field_name, "expected an integer, got bool")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not (text.isascii() and text.isdigit()):
            raise MalformedInputError(field_name, f"not a non-negative decimal integer: {raw!r}")
        value = int(text)
    else:
        raise MalformedInputError(field_name, f"expected an integer, got {type(raw).__name__}")

    if value < 0:
        raise MalformedInputError(field_name, "must not be negative")
    if value >> bits:
        raise MalformedInputError(field_name, f"does not fit in uint{bits}")
    return value


def parse_data(raw: Any) -> HexBytes:
    """Calldata from a 0x-prefixed hex string; missing values become empty bytes."""
    if raw is None:
        return HexBytes(b"")
    if isinstance(raw, (bytes, bytearray)):
        return HexBytes(raw)
    if not isinstance(raw, str) or not raw.startswith(("0x", "0X")):
        raise MalformedInputError("data", "expected a 0x-prefixed hex string")
    body = remove_0x_prefix(raw)
    # HexBytes would silently left-pad an odd-length string
    if len(body) % 2 or (body and not is_hex(body)):
        raise MalformedInputError("data", "not an even-length hex string")
    return HexBytes(bytes.fromhex(body))


# ------------------------------------------------------------
#  Record
# ------------------------------------------------------------

@dataclass(frozen=True)
class SafeTransaction:
    to: str = ZERO_ADDRESS
    value: int = 0
    data: HexBytes = field(default_factory=lambda: HexBytes(b""))
    operation: int = OPERATION_CALL
    safe_tx_gas: int = 0
    base_gas: int = 0
    gas_price: int = 0
    gas_token: str = ZERO_ADDRESS
    refund_receiver: str = ZERO_ADDRESS
    nonce: int = 0
    # Informational only, never hashed
    decoded_method: Optional[str] = None
    decoded_parameters: Optional[List[Any]] = None
    claimed_safe_tx_hash: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "SafeTransaction":
        """Build a record from one ``results[]`` entry of the multisig-transactions endpoint."""
        if not isinstance(payload, dict):
            raise MalformedInputError("transaction", f"expected an object, got {type(payload).__name__}")

        decoded = payload.get("dataDecoded")
        method = parameters = None
        if isinstance(decoded, dict):
            method = decoded.get("method")
            parameters = decoded.get("parameters")

        claimed = payload.get("safeTxHash")
        return cls(
            to=parse_address("to", payload.get("to")),
            value=parse_uint("value", payload.get("value")),
            data=parse_data(payload.get("data")),
            operation=parse_uint("operation", payload.get("operation"), bits=8),
            safe_tx_gas=parse_uint("safeTxGas", payload.get("safeTxGas")),
            base_gas=parse_uint("baseGas", payload.get("baseGas")),
            gas_price=parse_uint("gasPrice", payload.get("gasPrice")),
            gas_token=parse_address("gasToken", payload.get("gasToken")),
            refund_receiver=parse_address("refundReceiver", payload.get("refundReceiver")),
            nonce=parse_uint("nonce", payload.get("nonce")),
            decoded_method=method,
            decoded_parameters=parameters,
            claimed_safe_tx_hash=claimed.lower() if isinstance(claimed, str) else None,
        )

    def validate(self) -> List[str]:
        """
        Return semantic warnings. They never block hashing: a suspicious
        transaction must still produce a hash so it can be audited.
        """
        warnings = []
        if self.operation not in OPERATION_NAMES:
            warnings.append(
                f"operation {self.operation} is neither call (0) nor delegatecall (1); "
                "it is not a valid Safe operation"
            )
        elif self.operation == OPERATION_DELEGATECALL:
            logger.info("transaction %d is a delegatecall to %s", self.nonce, self.to)

        for message in warnings:
            logger.warning(message)
        return warnings

    @property
    def operation_name(self) -> str:
        return OPERATION_NAMES.get(self.operation, f"unknown ({self.operation})")

    @property
    def data_hex(self) -> str:
        return to_hex(bytes(self.data))
