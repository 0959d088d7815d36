"""safe-hashes: independent verification of Safe multisig transaction hashes."""

__version__ = "0.1.0"

from safe_hashes.hashing import HashResult, SafeTxHashes, compute_hashes, format_hash  # noqa: E402
from safe_hashes.transaction import SafeTransaction  # noqa: E402

__all__ = [
    "HashResult",
    "SafeTransaction",
    "SafeTxHashes",
    "compute_hashes",
    "format_hash",
]
