from __future__ import annotations

from collections.abc import Iterable, Mapping
import math

from tire.domain.entities.token import (
    BestPool,
    PairRecord,
    PoolContribution,
    QueryKind,
    TokenAggregate,
    TokenRow,
)


DEFAULT_EXCLUDED_SYMBOLS = frozenset({"WPLS", "WETH"})
DEFAULT_EXPLORER_BASE_URL = "https://dexscreener.com/pulsechain"

SORT_KEYS = {
    "volume": lambda row: row.volume_24h,
    "liquidity": lambda row: row.liquidity,
    "new": lambda row: row.pair_created_at,
}


def parse_amount(value: str | None) -> float:
    """Parse a subgraph decimal string; empty means zero, garbage means NaN."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def parse_timestamp_ms(value: str | None) -> int:
    try:
        return int(value) * 1000
    except (TypeError, ValueError):
        return 0


def finite_or_zero(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def aggregate_pairs(
    pairs: Iterable[PairRecord],
    *,
    excluded_symbols: Iterable[str] = DEFAULT_EXCLUDED_SYMBOLS,
) -> dict[str, TokenAggregate]:
    excluded = frozenset(excluded_symbols)
    aggregates: dict[str, TokenAggregate] = {}

    for pair in pairs:
        reserve_usd = parse_amount(pair.reserve_usd)
        volume_usd = parse_amount(pair.volume_usd)
        created_at = parse_timestamp_ms(pair.created_at_timestamp)

        if reserve_usd <= 0 and volume_usd <= 0:
            continue

        # The subgraph does not expose a per-side USD split.
        side_liquidity = reserve_usd * 0.5
        side_volume = volume_usd / 2

        for token in (pair.token0, pair.token1):
            if not token.address or token.symbol in excluded:
                continue

            aggregate = aggregates.get(token.address)
            if aggregate is None:
                aggregate = TokenAggregate(
                    address=token.address,
                    symbol=token.symbol,
                    name=token.name,
                    earliest_created=created_at,
                    best_pool=BestPool(address=pair.id, liquidity=0.0),
                )
                aggregates[token.address] = aggregate

            aggregate.total_liquidity += side_liquidity
            aggregate.total_volume += side_volume
            aggregate.earliest_created = min(aggregate.earliest_created, created_at)
            aggregate.pool_count += 1

            if side_liquidity > aggregate.best_pool.liquidity:
                aggregate.best_pool = BestPool(address=pair.id, liquidity=side_liquidity)

            aggregate.pools.append(
                PoolContribution(
                    address=pair.id,
                    liquidity=side_liquidity,
                    volume=side_volume,
                    created=created_at,
                )
            )

    return aggregates


def to_token_row(
    aggregate: TokenAggregate,
    *,
    explorer_base_url: str = DEFAULT_EXPLORER_BASE_URL,
) -> TokenRow:
    # weighted_price is never accumulated; price stays 0 until enrichment overlays it.
    price = aggregate.weighted_price / aggregate.total_weight if aggregate.total_weight > 0 else 0.0
    best_address = aggregate.best_pool.address

    return TokenRow(
        address=aggregate.address,
        symbol=aggregate.symbol or "Unknown",
        name=aggregate.name or "Unknown Token",
        price=finite_or_zero(price),
        price_change_24h=0.0,
        volume_24h=finite_or_zero(aggregate.total_volume),
        liquidity=finite_or_zero(aggregate.total_liquidity),
        pair_created_at=aggregate.earliest_created,
        pool_count=aggregate.pool_count,
        url=f"{explorer_base_url.rstrip('/')}/{best_address}",
        pair_address=best_address,
        source="SUBGRAPH_ONLY",
    )


def build_token_rows(
    aggregates: Mapping[str, TokenAggregate],
    *,
    view: QueryKind,
    limit: int,
    explorer_base_url: str = DEFAULT_EXPLORER_BASE_URL,
) -> list[TokenRow]:
    """Project aggregates in insertion order, cut to ``limit``, then sort by the view key.

    The cut happens before the sort, so a token aggregated after the first
    ``limit`` entries never reaches the result even if it ranks higher.
    """
    rows = [
        to_token_row(aggregate, explorer_base_url=explorer_base_url)
        for aggregate in aggregates.values()
    ][:limit]

    sort_key = SORT_KEYS.get(view)
    if sort_key is not None:
        rows.sort(key=sort_key, reverse=True)
    return rows
