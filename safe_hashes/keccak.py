"""
Keccak-256 for Safe transaction hashing.

Ethereum Keccak-256 (original Keccak padding), not NIST SHA3-256. The digest
is delegated to eth_utils, which binds the pycryptodome implementation through
eth-hash.
"""

from eth_utils import keccak

# keccak256("EIP712Domain(uint256 chainId,address verifyingContract)")
DOMAIN_SEPARATOR_TYPEHASH = bytes.fromhex(
    "47e79534a245952e8b16893a336b85a3d9ea9fa8c573f3d803afb92a79469218"
)

# keccak256("SafeTx(address to,uint256 value,bytes data,uint8 operation,uint256 safeTxGas,
#            uint256 baseGas,uint256 gasPrice,address gasToken,address refundReceiver,uint256 nonce)")
SAFE_TX_TYPEHASH = bytes.fromhex(
    "bb8310d486368db6bd6f849402fdd73ad53d316b5a4b2644ad6efe0f941286d8"
)

# keccak256(b"")
EMPTY_DATA_HASH = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)

DIGEST_SIZE = 32


def digest(data) -> bytes:
    """Return the 32-byte Keccak-256 digest of ``data`` (bytes-like, may be empty)."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"keccak digest expects bytes, got {type(data).__name__}")
    return keccak(bytes(data))
