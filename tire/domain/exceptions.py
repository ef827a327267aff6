from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class TokensInputError(DomainError):
    """Invalid parameters for the tokens listing."""


class SourceUnavailableError(DomainError):
    """Primary pair source failed after exhausting its retries."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class EnrichmentBatchFailedError(DomainError):
    """One batch request to the enrichment source failed."""

    def __init__(self, message: str, addresses: list[str] | None = None):
        super().__init__(message)
        self.addresses = list(addresses or [])
