from __future__ import annotations

from collections.abc import Iterable
import logging

from tire.application.dto.tokens import (
    FetchPairsInput,
    GetTokensInput,
    GetTokensOutput,
)
from tire.application.ports.tokens_cache_port import TokensCachePort
from tire.application.use_cases.enrich_tokens import EnrichTokensUseCase
from tire.application.use_cases.fetch_pairs import FetchPairsUseCase
from tire.domain.exceptions import TokensInputError
from tire.domain.services.token_aggregation import (
    DEFAULT_EXCLUDED_SYMBOLS,
    DEFAULT_EXPLORER_BASE_URL,
    aggregate_pairs,
    build_token_rows,
)


logger = logging.getLogger(__name__)

VIEWS = ("volume", "liquidity", "new")
MAX_PAGES = 20
MAX_LIMIT = 1000


def build_cache_key(command: GetTokensInput) -> str:
    return f"tokens_{command.view}_{command.pages}_{command.age_days}_{command.limit}"


class GetTokensUseCase:
    def __init__(
        self,
        *,
        fetch_pairs_use_case: FetchPairsUseCase,
        enrich_tokens_use_case: EnrichTokensUseCase,
        cache: TokensCachePort,
        excluded_symbols: Iterable[str] = DEFAULT_EXCLUDED_SYMBOLS,
        explorer_base_url: str = DEFAULT_EXPLORER_BASE_URL,
    ):
        self._fetch_pairs_use_case = fetch_pairs_use_case
        self._enrich_tokens_use_case = enrich_tokens_use_case
        self._cache = cache
        self._excluded_symbols = frozenset(excluded_symbols)
        self._explorer_base_url = explorer_base_url

    def execute(self, command: GetTokensInput) -> GetTokensOutput:
        if command.view not in VIEWS:
            raise TokensInputError("View must be one of: volume, liquidity, new")
        if command.pages < 1 or command.pages > MAX_PAGES:
            raise TokensInputError(f"pages must be between 1 and {MAX_PAGES}.")
        if command.age_days < 1:
            raise TokensInputError("age_days must be >= 1.")
        if command.limit < 1 or command.limit > MAX_LIMIT:
            raise TokensInputError(f"limit must be between 1 and {MAX_LIMIT}.")

        cache_key = build_cache_key(command)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        logger.info(
            "get_tokens: cache_miss view=%s pages=%s age_days=%s limit=%s",
            command.view,
            command.pages,
            command.age_days,
            command.limit,
        )

        pairs = self._fetch_pairs_use_case.execute(
            FetchPairsInput(
                query_kind=command.view,
                pages=command.pages,
                age_days=command.age_days,
            )
        )
        if not pairs:
            empty = GetTokensOutput(source="SUBGRAPH", coverage=0, tokens=())
            self._cache.put(cache_key, empty)
            return empty

        aggregates = aggregate_pairs(pairs, excluded_symbols=self._excluded_symbols)
        rows = build_token_rows(
            aggregates,
            view=command.view,
            limit=command.limit,
            explorer_base_url=self._explorer_base_url,
        )
        logger.info(
            "get_tokens: aggregated pairs=%s tokens=%s returned=%s",
            len(pairs),
            len(aggregates),
            len(rows),
        )

        tokens = tuple(rows)
        enrichment_status = "failed"
        try:
            outcome = self._enrich_tokens_use_case.execute(rows)
        except Exception as exc:  # noqa: BLE001
            logger.error("get_tokens: enrichment_failed tokens=%s error=%s", len(rows), exc)
        else:
            tokens = outcome.rows
            enrichment_status = outcome.status

        result = GetTokensOutput(
            source="MIX",
            coverage=len(pairs),
            tokens=tokens,
            enrichment_status=enrichment_status,
        )
        self._cache.put(cache_key, result)
        return result
