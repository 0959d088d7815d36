"""
Safe transaction service client.

Fetches the pending multisig transaction for one (Safe, nonce) pair. The
service is only a data source: nothing it returns is trusted beyond its
shape, and its own ``safeTxHash`` is kept for comparison, never reused.

Usage:
    from safe_hashes.api import SafeTransactionService
    from safe_hashes.networks import get_network

    with SafeTransactionService(get_network("ethereum").api_url) as service:
        tx = service.fetch_transaction("0x1234...5678", nonce=42)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from eth_utils import to_checksum_address

from safe_hashes import config
from safe_hashes.encoding import is_valid_address
from safe_hashes.exceptions import (
    MalformedInputError,
    MultipleTransactionsError,
    NoTransactionError,
    SafeApiError,
)
from safe_hashes.transaction import SafeTransaction

logger = logging.getLogger(__name__)


class SafeTransactionService:
    """Client for one network's transaction service.

    Args:
        base_url: service root, e.g. https://safe-transaction-mainnet.safe.global
        timeout: request timeout in seconds
        retries: connection retries (handled by the httpx transport)
        transport: custom httpx transport, mainly for tests
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = config.TIMEOUT,
        retries: int = config.RETRIES,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            follow_redirects=True,
            transport=transport or httpx.HTTPTransport(retries=retries),
        )

    def endpoint(self, safe_address: str, nonce: int) -> str:
        return f"{self.base_url}{self._path(safe_address)}?nonce={nonce}"

    @staticmethod
    def _path(safe_address: str) -> str:
        return f"/api/v1/safes/{safe_address}/multisig-transactions/"

    def _get(self, path: str, **params) -> Any:
        try:
            resp = self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise SafeApiError(None, str(e)) from e

        # 3xx only survives here without a usable Location header
        if resp.status_code >= 300:
            raise SafeApiError(resp.status_code, resp.text[:200] or resp.reason_phrase)
        try:
            return resp.json()
        except ValueError as e:
            raise SafeApiError(resp.status_code, "response is not valid JSON") from e

    def list_transactions(self, safe_address: str, nonce: int) -> dict:
        """Raw page of multisig transactions proposed for ``nonce``."""
        if not is_valid_address(safe_address):
            raise MalformedInputError("address", f"not a valid Safe address: {safe_address!r}")
        if isinstance(nonce, bool) or not isinstance(nonce, int) or nonce < 0:
            raise MalformedInputError("nonce", f"must be a non-negative integer, got {nonce!r}")

        safe_address = to_checksum_address(safe_address)
        logger.debug("GET %s", self.endpoint(safe_address, nonce))
        page = self._get(self._path(safe_address), nonce=nonce)
        if not isinstance(page, dict) or not isinstance(page.get("results"), list):
            raise SafeApiError(None, "unexpected response shape: missing 'results'")
        return page

    def fetch_transaction(self, safe_address: str, nonce: int) -> SafeTransaction:
        """The one transaction proposed for ``nonce``, or an AmbiguousResultError."""
        page = self.list_transactions(safe_address, nonce)
        results = page["results"]
        count = page.get("count")
        if not isinstance(count, int):
            count = len(results)
        endpoint = self.endpoint(to_checksum_address(safe_address), nonce)

        if count == 0 or not results:
            raise NoTransactionError(endpoint)
        if count > 1 or len(results) > 1:
            raise MultipleTransactionsError(endpoint, max(count, len(results)))

        tx = SafeTransaction.from_api(results[0])
        if tx.nonce != nonce:
            raise MalformedInputError("nonce", f"service returned nonce {tx.nonce}, requested {nonce}")
        return tx

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
