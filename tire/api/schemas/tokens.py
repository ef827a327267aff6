from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TokenRowResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str
    symbol: str
    name: str
    price: float
    price_change_24h: float = Field(alias="priceChange24h")
    volume_24h: float = Field(alias="volume24h")
    liquidity: float
    pair_created_at: int = Field(alias="pairCreatedAt")
    pool_count: int = Field(alias="poolCount")
    url: str
    pair_address: str = Field(alias="pairAddress")
    source: Literal["MIX", "SUBGRAPH_ONLY", "DS_ONLY"]


class TokensResponse(BaseModel):
    source: Literal["MIX", "SUBGRAPH", "DS"]
    coverage: int
    tokens: list[TokenRowResponse]


class HealthResponse(BaseModel):
    ok: bool
    ts: int
    cache_size: int
