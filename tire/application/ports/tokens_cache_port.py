from __future__ import annotations

from typing import Protocol

from tire.application.dto.tokens import GetTokensOutput


class TokensCachePort(Protocol):
    def get(self, key: str) -> GetTokensOutput | None:
        ...

    def put(self, key: str, value: GetTokensOutput) -> None:
        ...

    def size(self) -> int:
        ...
