from __future__ import annotations

from typing import Protocol

from tire.domain.entities.token import EnrichmentRecord


class TokenEnrichmentPort(Protocol):
    def fetch_token_pairs(self, addresses: list[str]) -> list[EnrichmentRecord]:
        ...
