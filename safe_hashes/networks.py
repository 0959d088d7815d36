"""
Networks served by the Safe transaction service.

See https://docs.safe.global/core-api/transaction-service-supported-networks.
The registry is built once at import and is read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from safe_hashes.exceptions import UnsupportedNetworkError


@dataclass(frozen=True)
class Network:
    name: str
    chain_id: int
    api_url: str


def _service_url(slug: str) -> str:
    return f"https://safe-transaction-{slug}.safe.global"


# name -> (chain id, transaction service slug)
_NETWORKS = {
    "arbitrum": (42161, "arbitrum"),
    "aurora": (1313161554, "aurora"),
    "avalanche": (43114, "avalanche"),
    "base": (8453, "base"),
    "base-sepolia": (84532, "base-sepolia"),
    "blast": (81457, "blast"),
    "bsc": (56, "bsc"),
    "celo": (42220, "celo"),
    "ethereum": (1, "mainnet"),
    "gnosis": (100, "gnosis-chain"),
    "gnosis-chiado": (10200, "chiado"),
    "linea": (59144, "linea"),
    "mantle": (5000, "mantle"),
    "optimism": (10, "optimism"),
    "polygon": (137, "polygon"),
    "polygon-zkevm": (1101, "zkevm"),
    "scroll": (534352, "scroll"),
    "sepolia": (11155111, "sepolia"),
    "worldchain": (480, "worldchain"),
    "xlayer": (195, "xlayer"),
    "zksync": (324, "zksync"),
}

NETWORKS: Mapping[str, Network] = MappingProxyType({
    name: Network(name=name, chain_id=chain_id, api_url=_service_url(slug))
    for name, (chain_id, slug) in _NETWORKS.items()
})


def get_network(name: str) -> Network:
    try:
        return NETWORKS[name.strip().lower()]
    except (KeyError, AttributeError):
        raise UnsupportedNetworkError(name) from None

