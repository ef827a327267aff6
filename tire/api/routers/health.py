from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from tire.api.deps import get_tokens_cache
from tire.api.schemas.tokens import HealthResponse
from tire.application.ports.tokens_cache_port import TokensCachePort

router = APIRouter()


@router.get("/api/health", response_model=HealthResponse)
def health(cache: TokensCachePort = Depends(get_tokens_cache)):
    return HealthResponse(ok=True, ts=int(time.time()), cache_size=cache.size())
