from __future__ import annotations

from dataclasses import dataclass
import logging
import time

import httpx

from tire.domain.entities.token import PairRecord, PairToken, QueryKind
from tire.domain.exceptions import SourceUnavailableError


logger = logging.getLogger(__name__)


PAIR_FIELDS = """
      id
      token0 {
        id
        symbol
        name
        decimals
      }
      token1 {
        id
        symbol
        name
        decimals
      }
      reserve0
      reserve1
      reserveUSD
      volumeUSD
      txCount
      createdAtTimestamp
      totalSupply
"""

PAIRS_BY_VOLUME_QUERY = """
query GetPairsByVolume($first: Int!, $skip: Int!) {
  pairs(
    first: $first,
    skip: $skip,
    orderBy: volumeUSD,
    orderDirection: desc,
    where: { volumeUSD_gt: "0" }
  ) {%s  }
}
""" % PAIR_FIELDS

PAIRS_BY_LIQUIDITY_QUERY = """
query GetPairsByLiquidity($first: Int!, $skip: Int!) {
  pairs(
    first: $first,
    skip: $skip,
    orderBy: reserveUSD,
    orderDirection: desc,
    where: { reserveUSD_gt: "0" }
  ) {%s  }
}
""" % PAIR_FIELDS

NEW_PAIRS_QUERY = """
query GetNewPairs($first: Int!, $skip: Int!, $timestamp: Int!) {
  pairs(
    first: $first,
    skip: $skip,
    orderBy: createdAtTimestamp,
    orderDirection: desc,
    where: { createdAtTimestamp_gte: $timestamp }
  ) {%s  }
}
""" % PAIR_FIELDS

QUERIES: dict[str, str] = {
    "volume": PAIRS_BY_VOLUME_QUERY,
    "liquidity": PAIRS_BY_LIQUIDITY_QUERY,
    "new": NEW_PAIRS_QUERY,
}


@dataclass(frozen=True)
class PulseXSubgraphClientSettings:
    subgraph_url: str
    timeout_seconds: float
    max_retries: int = 3
    retry_base_delay_ms: int = 250
    retry_multiplier: float = 3


class PulseXSubgraphClient:
    def __init__(
        self,
        settings: PulseXSubgraphClientSettings,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    def fetch_pairs(
        self,
        *,
        query_kind: QueryKind,
        first: int,
        skip: int,
        timestamp: int | None = None,
    ) -> list[PairRecord]:
        query = QUERIES.get(query_kind)
        if query is None:
            raise ValueError(f"Unsupported pairs query: {query_kind}")

        variables: dict = {"first": first, "skip": skip}
        if query_kind == "new":
            if timestamp is None:
                raise ValueError("timestamp is required for the new pairs query.")
            variables["timestamp"] = timestamp

        rows = self._post_graphql(query=query, variables=variables, result_key="pairs")
        records = [_to_pair_record(row) for row in rows if isinstance(row, dict)]
        if len(records) < len(rows):
            logger.warning(
                "pulsex_subgraph_client: malformed_rows_skipped skip=%s skipped=%s",
                skip,
                len(rows) - len(records),
            )
        return records

    def _post_graphql(self, *, query: str, variables: dict, result_key: str) -> list:
        attempts = max(1, self._settings.max_retries)
        base_delay = max(0, self._settings.retry_base_delay_ms) / 1000.0
        last_exc: Exception | None = None

        for attempt in range(attempts):
            try:
                with httpx.Client(
                    timeout=self._settings.timeout_seconds,
                    transport=self._transport,
                ) as client:
                    response = client.post(
                        self._settings.subgraph_url,
                        json={"query": query, "variables": variables},
                    )
                    response.raise_for_status()
                    payload = response.json()

                if not isinstance(payload, dict):
                    raise ValueError("Unexpected GraphQL payload shape.")
                errors = payload.get("errors") or []
                if errors:
                    if not isinstance(errors, list):
                        errors = [errors]
                    message = " | ".join(_error_message(err) for err in errors)
                    raise RuntimeError(f"GraphQL error: {message}")

                data = payload.get("data") or {}
                if not isinstance(data, dict):
                    raise ValueError("Unexpected GraphQL data shape.")
                rows = data.get(result_key) or []
                if not isinstance(rows, list):
                    raise ValueError(f"Unexpected GraphQL {result_key} shape.")
                return rows
            except (httpx.HTTPError, RuntimeError, ValueError) as exc:
                last_exc = exc
                logger.warning(
                    "pulsex_subgraph_client: graphql_attempt_failed attempt=%s/%s skip=%s error=%s",
                    attempt + 1,
                    attempts,
                    variables.get("skip"),
                    exc,
                )
                if attempt == attempts - 1:
                    break
                time.sleep(base_delay * self._settings.retry_multiplier**attempt)

        raise SourceUnavailableError(
            f"GraphQL request failed after {attempts} attempts: {last_exc}",
            cause=last_exc,
        ) from last_exc


def _error_message(err) -> str:
    if isinstance(err, dict):
        return str(err.get("message", err))
    return str(err)


def _to_pair_token(row: dict | None) -> PairToken:
    if not isinstance(row, dict):
        row = {}
    return PairToken(
        address=str(row.get("id") or ""),
        symbol=str(row.get("symbol") or ""),
        name=str(row.get("name") or ""),
        decimals=str(row.get("decimals") or ""),
    )


def _to_pair_record(row: dict) -> PairRecord:
    return PairRecord(
        id=str(row.get("id") or ""),
        token0=_to_pair_token(row.get("token0")),
        token1=_to_pair_token(row.get("token1")),
        reserve0=str(row.get("reserve0") or ""),
        reserve1=str(row.get("reserve1") or ""),
        reserve_usd=str(row.get("reserveUSD") or ""),
        volume_usd=str(row.get("volumeUSD") or ""),
        tx_count=str(row.get("txCount") or ""),
        created_at_timestamp=str(row.get("createdAtTimestamp") or ""),
        total_supply=str(row.get("totalSupply") or ""),
    )
