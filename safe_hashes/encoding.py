"""
Canonical encoder for the Safe EIP-712 hash formulas.

Domain separator and SafeTx message are static ABI encodings (32-byte
big-endian words, integers and addresses left-padded). The signing preimage
is packed: 0x19 0x01 followed by the two hashes, no padding.

Every argument is checked before it reaches eth_abi. A value that does not fit
its Solidity type raises MalformedInputError instead of being truncated,
wrapped or right-padded.
"""

from eth_abi import encode
from eth_utils import is_address, is_checksum_address, is_integer, to_canonical_address

from safe_hashes.exceptions import MalformedInputError

WORD_SIZE = 32
DOMAIN_SEPARATOR_SIZE = 3 * WORD_SIZE
SAFE_TX_MESSAGE_SIZE = 11 * WORD_SIZE
SIGNING_PREIMAGE_SIZE = 2 + 2 * WORD_SIZE

EIP191_PREFIX = b"\x19\x01"

DOMAIN_SEPARATOR_TYPES = ["bytes32", "uint256", "address"]
SAFE_TX_TYPES = [
    "bytes32",  # SAFE_TX_TYPEHASH
    "address",  # to
    "uint256",  # value
    "bytes32",  # keccak256(data)
    "uint8",    # operation
    "uint256",  # safeTxGas
    "uint256",  # baseGas
    "uint256",  # gasPrice
    "address",  # gasToken
    "address",  # refundReceiver
    "uint256",  # nonce
]


# ------------------------------------------------------------
#  Argument checks
# ------------------------------------------------------------

def _word(field, value) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise MalformedInputError(field, f"expected 32 bytes, got {type(value).__name__}")
    if len(value) != WORD_SIZE:
        raise MalformedInputError(field, f"expected 32 bytes, got {len(value)}")
    return bytes(value)


def _uint(field, value, bits=256) -> int:
    # bool is an int subclass; eth_utils.is_integer rejects it
    if not is_integer(value):
        raise MalformedInputError(field, f"expected an integer, got {type(value).__name__}")
    if value < 0:
        raise MalformedInputError(field, "must not be negative")
    if value >> bits:
        raise MalformedInputError(field, f"does not fit in uint{bits}")
    return value


def is_valid_address(value) -> bool:
    """20-byte address; a mixed-case hex string must also carry a valid EIP-55 checksum."""
    if not is_address(value):
        return False
    if isinstance(value, str):
        body = value[2:]
        # eth-utils >= 6 no longer verifies the checksum inside is_address
        if body != body.lower() and body != body.upper():
            return is_checksum_address(value)
    return True


def _address(field, value) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise MalformedInputError(field, f"expected 20 bytes, got {len(value)}")
        value = bytes(value)
    if not is_valid_address(value):
        raise MalformedInputError(field, f"not a valid address: {value!r}")
    return to_canonical_address(value)


# ------------------------------------------------------------
#  Encoders
# ------------------------------------------------------------

def encode_domain_separator(domain_typehash, chain_id, verifying_contract) -> bytes:
    """abi.encode(DOMAIN_SEPARATOR_TYPEHASH, chainId, address(this)), 96 bytes."""
    return encode(
        DOMAIN_SEPARATOR_TYPES,
        [
            _word("domainTypeHash", domain_typehash),
            _uint("chainId", chain_id),
            _address("verifyingContract", verifying_contract),
        ],
    )


def encode_safe_tx_message(
    tx_typehash,
    to,
    value,
    data_hash,
    operation,
    safe_tx_gas,
    base_gas,
    gas_price,
    gas_token,
    refund_receiver,
    nonce,
) -> bytes:
    """
    abi.encode of the SafeTx struct with ``data`` replaced by keccak256(data).

    Always 352 bytes, whatever the length of the original data.
    """
    return encode(
        SAFE_TX_TYPES,
        [
            _word("txTypeHash", tx_typehash),
            _address("to", to),
            _uint("value", value),
            _word("dataHash", data_hash),
            _uint("operation", operation, bits=8),
            _uint("safeTxGas", safe_tx_gas),
            _uint("baseGas", base_gas),
            _uint("gasPrice", gas_price),
            _address("gasToken", gas_token),
            _address("refundReceiver", refund_receiver),
            _uint("nonce", nonce),
        ],
    )


def encode_signing_preimage(domain_hash, message_hash) -> bytes:
    """abi.encodePacked(bytes1(0x19), bytes1(0x01), domainHash, messageHash), 66 bytes."""
    return EIP191_PREFIX + _word("domainHash", domain_hash) + _word("messageHash", message_hash)
