"""
Optional on-chain cross-check.

Reads the domain separator and transaction hash straight from the deployed
Safe contract over JSON-RPC and compares them with the locally computed
values. Read-only: nothing is signed or sent, and the chain's answers never
replace a local hash, they only confirm or contradict it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from web3 import Web3

from safe_hashes.exceptions import OnchainError
from safe_hashes.hashing import HashResult
from safe_hashes.transaction import SafeTransaction

logger = logging.getLogger(__name__)

# Minimal Safe ABI (>= 1.3.0), only the views we need
SAFE_ABI = [
    {"inputs": [], "name": "VERSION", "outputs": [{"internalType": "string", "name": "", "type": "string"}],
     "stateMutability": "view", "type": "function"},
    {"inputs": [], "name": "domainSeparator", "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
     "stateMutability": "view", "type": "function"},
    {"inputs": [
        {"internalType": "address", "name": "to", "type": "address"},
        {"internalType": "uint256", "name": "value", "type": "uint256"},
        {"internalType": "bytes", "name": "data", "type": "bytes"},
        {"internalType": "enum Enum.Operation", "name": "operation", "type": "uint8"},
        {"internalType": "uint256", "name": "safeTxGas", "type": "uint256"},
        {"internalType": "uint256", "name": "baseGas", "type": "uint256"},
        {"internalType": "uint256", "name": "gasPrice", "type": "uint256"},
        {"internalType": "address", "name": "gasToken", "type": "address"},
        {"internalType": "address", "name": "refundReceiver", "type": "address"},
        {"internalType": "uint256", "name": "_nonce", "type": "uint256"}],
     "name": "getTransactionHash", "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
     "stateMutability": "view", "type": "function"},
]


@dataclass(frozen=True)
class OnchainHashes:
    chain_id: int
    version: Optional[str]
    domain_separator: bytes
    safe_tx_hash: bytes


def safe_contract(rpc_url: str, safe_address: str):
    w3 = Web3(Web3.HTTPProvider(rpc_url))
    return w3.eth.contract(address=Web3.to_checksum_address(safe_address), abi=SAFE_ABI)


def read_onchain_hashes(contract, tx: SafeTransaction) -> OnchainHashes:
    """Call the Safe's view functions for ``tx``. Raises OnchainError on any RPC failure."""
    try:
        chain_id = contract.w3.eth.chain_id
        domain_separator = contract.functions.domainSeparator().call()
        safe_tx_hash = contract.functions.getTransactionHash(
            tx.to,
            tx.value,
            bytes(tx.data),
            tx.operation,
            tx.safe_tx_gas,
            tx.base_gas,
            tx.gas_price,
            tx.gas_token,
            tx.refund_receiver,
            tx.nonce,
        ).call()
    except Exception as e:
        raise OnchainError(f"could not read Safe {contract.address}: {e}") from e

    try:
        version = contract.functions.VERSION().call()
    except Exception as e:
        # VERSION() is informational; very old deployments lack it
        logger.debug("VERSION() unavailable on %s: %s", contract.address, e)
        version = None

    return OnchainHashes(
        chain_id=int(chain_id),
        version=version,
        domain_separator=bytes(domain_separator),
        safe_tx_hash=bytes(safe_tx_hash),
    )


def compare(result: HashResult, onchain: OnchainHashes) -> List[str]:
    """Return one message per disagreement between the local result and the chain."""
    mismatches = []
    if onchain.chain_id != result.chain_id:
        mismatches.append(
            f"RPC endpoint is on chain {onchain.chain_id}, expected {result.chain_id}"
        )
    if onchain.domain_separator != bytes(result.hashes.domain_hash):
        mismatches.append(
            f"domain separator mismatch: contract 0x{onchain.domain_separator.hex()}, "
            f"computed 0x{bytes(result.hashes.domain_hash).hex()}"
        )
    if onchain.safe_tx_hash != bytes(result.hashes.safe_tx_hash):
        mismatches.append(
            f"Safe transaction hash mismatch: contract 0x{onchain.safe_tx_hash.hex()}, "
            f"computed 0x{bytes(result.hashes.safe_tx_hash).hex()}"
        )

    for message in mismatches:
        logger.warning(message)
    return mismatches
