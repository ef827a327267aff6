from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from tire.domain.entities.token import QueryKind, ResponseSource, TokenRow


EnrichmentStatus = Literal["full", "partial", "failed", "skipped"]


@dataclass(frozen=True)
class FetchPairsInput:
    query_kind: QueryKind
    pages: int
    age_days: int = 30


@dataclass(frozen=True)
class EnrichmentOutcome:
    rows: tuple[TokenRow, ...]
    batches_total: int
    batches_failed: int

    @property
    def status(self) -> EnrichmentStatus:
        if self.batches_total == 0:
            return "skipped"
        if self.batches_failed == 0:
            return "full"
        if self.batches_failed == self.batches_total:
            return "failed"
        return "partial"


@dataclass(frozen=True)
class GetTokensInput:
    view: str = "volume"
    pages: int = 10
    age_days: int = 30
    limit: int = 500


@dataclass(frozen=True)
class GetTokensOutput:
    source: ResponseSource
    coverage: int
    tokens: tuple[TokenRow, ...]
    enrichment_status: EnrichmentStatus = "skipped"
