"""
Error hierarchy for safe-hashes.

Each error names the stage that failed (validation, network selection,
ambiguous data, relay fetch, on-chain check) so the CLI can tell the user
where the pipeline stopped. No partial hash triple is ever returned.
"""


class SafeHashesError(Exception):
    """Base error for everything raised by safe-hashes."""

    stage = "unknown"


class MalformedInputError(SafeHashesError, ValueError):
    """A transaction field failed validation or could not be encoded."""

    stage = "validation"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"invalid {field}: {reason}")


class UnsupportedNetworkError(SafeHashesError, KeyError):
    stage = "network"

    def __init__(self, network: str):
        self.network = network
        super().__init__(network)

    def __str__(self):
        return f"unsupported network: {self.network!r} (see --list-networks)"


class AmbiguousResultError(SafeHashesError):
    """The relay did not resolve exactly one transaction for the nonce."""

    stage = "ambiguous-data"


class NoTransactionError(AmbiguousResultError):
    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        super().__init__("No transaction is available for this nonce!")


class MultipleTransactionsError(AmbiguousResultError):
    def __init__(self, endpoint: str, count: int):
        self.endpoint = endpoint
        self.count = count
        super().__init__(
            "Several transactions with identical nonce values have been detected. "
            "Please check the API endpoint for details."
        )


class SafeApiError(SafeHashesError):
    """The transaction service could not be reached or answered with an error."""

    stage = "network-fetch"

    def __init__(self, status_code, detail: str):
        self.status_code = status_code
        self.detail = detail
        if status_code is None:
            super().__init__(f"Safe transaction service unreachable: {detail}")
        else:
            super().__init__(f"Safe transaction service error {status_code}: {detail}")


class OnchainError(SafeHashesError):
    """The optional RPC cross-check could not read the Safe contract."""

    stage = "onchain"
