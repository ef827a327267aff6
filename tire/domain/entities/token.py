from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


QueryKind = Literal["volume", "liquidity", "new"]
TokenSource = Literal["MIX", "SUBGRAPH_ONLY", "DS_ONLY"]
ResponseSource = Literal["MIX", "SUBGRAPH", "DS"]


@dataclass(frozen=True)
class PairToken:
    address: str
    symbol: str
    name: str
    decimals: str


@dataclass(frozen=True)
class PairRecord:
    id: str
    token0: PairToken
    token1: PairToken
    reserve0: str
    reserve1: str
    reserve_usd: str
    volume_usd: str
    tx_count: str
    created_at_timestamp: str
    total_supply: str


@dataclass(frozen=True)
class PoolContribution:
    address: str
    liquidity: float
    volume: float
    created: int


@dataclass(frozen=True)
class BestPool:
    address: str
    liquidity: float


@dataclass
class TokenAggregate:
    address: str
    symbol: str
    name: str
    earliest_created: int
    best_pool: BestPool
    total_liquidity: float = 0.0
    total_volume: float = 0.0
    weighted_price: float = 0.0
    total_weight: float = 0.0
    pool_count: int = 0
    pools: list[PoolContribution] = field(default_factory=list)


@dataclass(frozen=True)
class TokenRow:
    address: str
    symbol: str
    name: str
    price: float
    price_change_24h: float
    volume_24h: float
    liquidity: float
    pair_created_at: int
    pool_count: int
    url: str
    pair_address: str
    source: TokenSource


@dataclass(frozen=True)
class EnrichmentRecord:
    address: str
    name: str
    symbol: str
    price_usd: str
    price_change_24h: float
    liquidity_usd: float | None = None
    volume_24h: float | None = None
