from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
import math

from tire.domain.entities.token import EnrichmentRecord, TokenRow


def normalize_address(value: str) -> str:
    return value.strip().lower()


def _price_or(value: str | None, fallback: float) -> float:
    try:
        price = float(value) if value else math.nan
    except (TypeError, ValueError):
        return fallback
    if math.isnan(price) or price == 0:
        return fallback
    return price


def overlay_record(row: TokenRow, record: EnrichmentRecord | None) -> TokenRow:
    if record is None:
        return replace(row, source="SUBGRAPH_ONLY")

    return replace(
        row,
        price=_price_or(record.price_usd, row.price),
        price_change_24h=record.price_change_24h or 0.0,
        volume_24h=record.volume_24h or row.volume_24h,
        liquidity=record.liquidity_usd or row.liquidity,
        source="MIX",
    )


def overlay_records(
    rows: list[TokenRow],
    records: Mapping[str, EnrichmentRecord],
) -> list[TokenRow]:
    return [overlay_record(row, records.get(normalize_address(row.address))) for row in rows]
