from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
from threading import BoundedSemaphore, Lock

from tire.application.dto.tokens import EnrichmentOutcome
from tire.application.ports.token_enrichment_port import TokenEnrichmentPort
from tire.domain.entities.token import EnrichmentRecord, TokenRow
from tire.domain.exceptions import EnrichmentBatchFailedError
from tire.domain.services.token_enrichment import normalize_address, overlay_records


logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 30
DEFAULT_MAX_CONCURRENCY = 4


def split_batches(addresses: list[str], batch_size: int) -> list[list[str]]:
    return [addresses[i : i + batch_size] for i in range(0, len(addresses), batch_size)]


class EnrichTokensUseCase:
    def __init__(
        self,
        *,
        enrichment_port: TokenEnrichmentPort,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1.")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1.")
        self._enrichment_port = enrichment_port
        self._batch_size = batch_size
        self._max_concurrency = max_concurrency

    def execute(self, rows: list[TokenRow]) -> EnrichmentOutcome:
        batches = split_batches([row.address for row in rows], self._batch_size)
        if not batches:
            return EnrichmentOutcome(rows=tuple(rows), batches_total=0, batches_failed=0)

        records: dict[str, EnrichmentRecord] = {}
        records_lock = Lock()
        permits = BoundedSemaphore(self._max_concurrency)

        def run_batch(batch_index: int, batch: list[str]) -> bool:
            with permits:
                try:
                    fetched = self._enrichment_port.fetch_token_pairs(batch)
                except EnrichmentBatchFailedError as exc:
                    logger.warning(
                        "enrich_tokens: batch_failed batch=%s/%s size=%s error=%s",
                        batch_index + 1,
                        len(batches),
                        len(batch),
                        exc,
                    )
                    return False
                except Exception as exc:  # noqa: BLE001
                    logger.error(
                        "enrich_tokens: batch_crashed batch=%s/%s size=%s error=%r",
                        batch_index + 1,
                        len(batches),
                        len(batch),
                        exc,
                    )
                    return False

            with records_lock:
                for record in fetched:
                    records[normalize_address(record.address)] = record
            return True

        # Workers beyond the permit count would only park on the semaphore.
        workers = min(len(batches), self._max_concurrency * 2)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(run_batch, range(len(batches)), batches))

        batches_failed = results.count(False)
        enriched = overlay_records(rows, records)

        logger.info(
            "enrich_tokens: completed tokens=%s batches=%s failed=%s records=%s",
            len(rows),
            len(batches),
            batches_failed,
            len(records),
        )
        return EnrichmentOutcome(
            rows=tuple(enriched),
            batches_total=len(batches),
            batches_failed=batches_failed,
        )
