from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    pulsex_subgraph_url: str
    graph_request_timeout_seconds: float
    graph_max_retries: int
    graph_retry_base_delay_ms: int
    graph_retry_multiplier: float
    graph_page_size: int
    dexscreener_api_base: str
    dexscreener_chain: str
    dexscreener_timeout_seconds: float
    enrichment_batch_size: int
    enrichment_max_concurrency: int
    tokens_cache_ttl_seconds: float
    excluded_symbols: tuple[str, ...]
    explorer_base_url: str
    log_level: str
    log_format: str


def get_settings() -> Settings:
    return Settings(
        pulsex_subgraph_url=_env(
            "PULSEX_SUBGRAPH_URL",
            "https://graph.pulsechain.com/subgraphs/name/pulsechain/pulsex/graphql",
        ),
        graph_request_timeout_seconds=float(_env("GRAPH_REQUEST_TIMEOUT_SECONDS", "10")),
        graph_max_retries=int(_env("GRAPH_MAX_RETRIES", "3")),
        graph_retry_base_delay_ms=int(_env("GRAPH_RETRY_BASE_DELAY_MS", "250")),
        graph_retry_multiplier=float(_env("GRAPH_RETRY_MULTIPLIER", "3")),
        graph_page_size=int(_env("GRAPH_PAGE_SIZE", "1000")),
        dexscreener_api_base=_env("DEXSCREENER_API_BASE", "https://api.dexscreener.com"),
        dexscreener_chain=_env("DEXSCREENER_CHAIN", "pulsechain"),
        dexscreener_timeout_seconds=float(_env("DEXSCREENER_TIMEOUT_SECONDS", "10")),
        enrichment_batch_size=int(_env("ENRICHMENT_BATCH_SIZE", "30")),
        enrichment_max_concurrency=int(_env("ENRICHMENT_MAX_CONCURRENCY", "4")),
        tokens_cache_ttl_seconds=float(_env("TOKENS_CACHE_TTL_SECONDS", "30")),
        excluded_symbols=_csv("EXCLUDED_SYMBOLS", "WPLS,WETH"),
        explorer_base_url=_env("EXPLORER_BASE_URL", "https://dexscreener.com/pulsechain"),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_format=(_env("LOG_FORMAT", "text") or "text").lower(),
    )
