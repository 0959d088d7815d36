"""
Safe transaction hash composer.

    domainHash  = keccak256(abi.encode(DOMAIN_SEPARATOR_TYPEHASH, chainId, safe))
    messageHash = keccak256(abi.encode(SAFE_TX_TYPEHASH, to, value, keccak256(data), operation,
                                       safeTxGas, baseGas, gasPrice, gasToken, refundReceiver, nonce))
    safeTxHash  = keccak256(0x19 || 0x01 || domainHash || messageHash)

Pure functions: no I/O, no caching, no shared state. Either a complete
HashResult comes back or MalformedInputError is raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from eth_utils import to_checksum_address, to_hex
from hexbytes import HexBytes

from safe_hashes import encoding, keccak
from safe_hashes.exceptions import MalformedInputError
from safe_hashes.transaction import SafeTransaction


@dataclass(frozen=True)
class SafeTxHashes:
    domain_hash: HexBytes
    message_hash: HexBytes
    safe_tx_hash: HexBytes


@dataclass(frozen=True)
class HashResult:
    """Hashes plus everything that went into them, for the renderers."""

    chain_id: int
    safe_address: str
    transaction: SafeTransaction
    encoded_message: HexBytes
    hashes: SafeTxHashes
    warnings: Tuple[str, ...] = ()


def format_hash(value) -> str:
    """Display case: lowercase ``0x`` prefix, uppercase hex body. Idempotent."""
    text = to_hex(bytes(value)) if isinstance(value, (bytes, bytearray)) else str(value)
    if text[:2].lower() == "0x":
        return "0x" + text[2:].upper()
    return "0x" + text.upper()


def domain_hash(chain_id: int, safe_address) -> bytes:
    return keccak.digest(
        encoding.encode_domain_separator(keccak.DOMAIN_SEPARATOR_TYPEHASH, chain_id, safe_address)
    )


def encode_message(tx: SafeTransaction) -> bytes:
    if not isinstance(tx.data, (bytes, bytearray)):
        # from_api always yields HexBytes; a hand-built record may not
        raise MalformedInputError("data", f"expected bytes, got {type(tx.data).__name__}")
    return encoding.encode_safe_tx_message(
        keccak.SAFE_TX_TYPEHASH,
        tx.to,
        tx.value,
        keccak.digest(tx.data),
        tx.operation,
        tx.safe_tx_gas,
        tx.base_gas,
        tx.gas_price,
        tx.gas_token,
        tx.refund_receiver,
        tx.nonce,
    )


def message_hash(tx: SafeTransaction) -> bytes:
    return keccak.digest(encode_message(tx))


def signing_hash(domain: bytes, message: bytes) -> bytes:
    return keccak.digest(encoding.encode_signing_preimage(domain, message))


def compute_hashes(chain_id: int, safe_address: str, tx: SafeTransaction) -> HashResult:
    """Run the three stages for one transaction of the Safe at ``safe_address``."""
    if not isinstance(tx, SafeTransaction):
        raise MalformedInputError("transaction", f"expected SafeTransaction, got {type(tx).__name__}")

    warnings = tx.validate()

    domain = domain_hash(chain_id, safe_address)
    encoded = encode_message(tx)
    message = keccak.digest(encoded)
    safe_tx = signing_hash(domain, message)

    return HashResult(
        chain_id=chain_id,
        safe_address=to_checksum_address(safe_address),
        transaction=tx,
        encoded_message=HexBytes(encoded),
        hashes=SafeTxHashes(
            domain_hash=HexBytes(domain),
            message_hash=HexBytes(message),
            safe_tx_hash=HexBytes(safe_tx),
        ),
        warnings=tuple(warnings),
    )
