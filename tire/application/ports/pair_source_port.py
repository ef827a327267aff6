from __future__ import annotations

from typing import Protocol

from tire.domain.entities.token import PairRecord, QueryKind


class PairSourcePort(Protocol):
    def fetch_pairs(
        self,
        *,
        query_kind: QueryKind,
        first: int,
        skip: int,
        timestamp: int | None = None,
    ) -> list[PairRecord]:
        ...
