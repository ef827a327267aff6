from __future__ import annotations

from collections.abc import Callable
import logging
import time

from tire.application.dto.tokens import FetchPairsInput
from tire.application.ports.pair_source_port import PairSourcePort
from tire.domain.entities.token import PairRecord
from tire.domain.exceptions import SourceUnavailableError


logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
MAX_PAGE_SIZE = 1000


class FetchPairsUseCase:
    def __init__(
        self,
        *,
        pair_source: PairSourcePort,
        page_size: int = MAX_PAGE_SIZE,
        clock: Callable[[], float] = time.time,
    ):
        self._pair_source = pair_source
        self._page_size = page_size
        self._clock = clock

    def execute(self, command: FetchPairsInput) -> list[PairRecord]:
        timestamp: int | None = None
        if command.query_kind == "new":
            timestamp = int(self._clock()) - command.age_days * SECONDS_PER_DAY

        pairs: list[PairRecord] = []
        for page in range(command.pages):
            try:
                rows = self._pair_source.fetch_pairs(
                    query_kind=command.query_kind,
                    first=self._page_size,
                    skip=page * self._page_size,
                    timestamp=timestamp,
                )
            except SourceUnavailableError as exc:
                logger.warning(
                    "fetch_pairs: page_failed query=%s page=%s collected=%s error=%s",
                    command.query_kind,
                    page,
                    len(pairs),
                    exc,
                )
                break

            if not rows:
                break
            pairs.extend(rows)
            if len(rows) < self._page_size:
                break

        logger.info(
            "fetch_pairs: fetched query=%s pages_budget=%s pairs=%s",
            command.query_kind,
            command.pages,
            len(pairs),
        )
        return pairs
