from __future__ import annotations

from functools import lru_cache

from tire.application.use_cases.enrich_tokens import EnrichTokensUseCase
from tire.application.use_cases.fetch_pairs import FetchPairsUseCase
from tire.application.use_cases.get_tokens import GetTokensUseCase
from tire.infrastructure.cache.ttl_cache import TtlResultCache
from tire.infrastructure.clients.dexscreener_client import DexscreenerClient
from tire.infrastructure.clients.pulsex_subgraph_client import (
    PulseXSubgraphClient,
    PulseXSubgraphClientSettings,
)
from tire.shared.config import get_settings


@lru_cache(maxsize=1)
def get_tokens_cache() -> TtlResultCache:
    settings = get_settings()
    return TtlResultCache(ttl_seconds=settings.tokens_cache_ttl_seconds)


@lru_cache(maxsize=1)
def _get_pulsex_subgraph_client() -> PulseXSubgraphClient:
    settings = get_settings()
    return PulseXSubgraphClient(
        PulseXSubgraphClientSettings(
            subgraph_url=settings.pulsex_subgraph_url,
            timeout_seconds=settings.graph_request_timeout_seconds,
            max_retries=settings.graph_max_retries,
            retry_base_delay_ms=settings.graph_retry_base_delay_ms,
            retry_multiplier=settings.graph_retry_multiplier,
        )
    )


@lru_cache(maxsize=1)
def _get_dexscreener_client() -> DexscreenerClient:
    settings = get_settings()
    return DexscreenerClient(
        api_base=settings.dexscreener_api_base,
        chain=settings.dexscreener_chain,
        timeout_seconds=settings.dexscreener_timeout_seconds,
    )


def get_get_tokens_use_case() -> GetTokensUseCase:
    settings = get_settings()
    return GetTokensUseCase(
        fetch_pairs_use_case=FetchPairsUseCase(
            pair_source=_get_pulsex_subgraph_client(),
            page_size=settings.graph_page_size,
        ),
        enrich_tokens_use_case=EnrichTokensUseCase(
            enrichment_port=_get_dexscreener_client(),
            batch_size=settings.enrichment_batch_size,
            max_concurrency=settings.enrichment_max_concurrency,
        ),
        cache=get_tokens_cache(),
        excluded_symbols=settings.excluded_symbols,
        explorer_base_url=settings.explorer_base_url,
    )
