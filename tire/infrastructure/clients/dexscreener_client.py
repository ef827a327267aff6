from __future__ import annotations

import logging
import math

import httpx

from tire.domain.entities.token import EnrichmentRecord
from tire.domain.exceptions import EnrichmentBatchFailedError


logger = logging.getLogger(__name__)

USER_AGENT = "TIRE/1.0"


def _float_or_none(value) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _section(pair: dict, key: str) -> dict:
    value = pair.get(key)
    return value if isinstance(value, dict) else {}


class DexscreenerClient:
    def __init__(
        self,
        api_base: str,
        chain: str,
        timeout_seconds: float,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.chain = chain
        self.timeout = timeout_seconds
        self._transport = transport

    def fetch_token_pairs(self, addresses: list[str]) -> list[EnrichmentRecord]:
        if not addresses:
            return []

        url = f"{self.api_base}/tokens/v1/{self.chain}/{','.join(addresses)}"
        try:
            with httpx.Client(
                timeout=self.timeout,
                transport=self._transport,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise EnrichmentBatchFailedError(
                f"Dexscreener request failed: {exc}",
                addresses=addresses,
            ) from exc

        # tokens/v1 answers with a bare list; older endpoints wrap it in "pairs".
        if isinstance(payload, dict):
            pairs = payload.get("pairs")
        else:
            pairs = payload
        if not isinstance(pairs, list):
            return []

        records: list[EnrichmentRecord] = []
        for pair in pairs:
            if not isinstance(pair, dict):
                continue
            base_token = pair.get("baseToken")
            if not isinstance(base_token, dict):
                continue
            address = base_token.get("address")
            if not address or not isinstance(address, str):
                continue
            price_change = _section(pair, "priceChange")
            liquidity = _section(pair, "liquidity")
            volume = _section(pair, "volume")
            records.append(
                EnrichmentRecord(
                    address=address,
                    name=str(base_token.get("name") or ""),
                    symbol=str(base_token.get("symbol") or ""),
                    price_usd=str(pair.get("priceUsd") or "0"),
                    price_change_24h=_float_or_none(price_change.get("h24")) or 0.0,
                    liquidity_usd=_float_or_none(liquidity.get("usd")),
                    volume_24h=_float_or_none(volume.get("h24")),
                )
            )

        logger.debug(
            "dexscreener_client: fetched requested=%s pairs=%s records=%s",
            len(addresses),
            len(pairs),
            len(records),
        )
        return records
