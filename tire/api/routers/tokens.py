from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from tire.api.deps import get_get_tokens_use_case
from tire.api.schemas.tokens import TokenRowResponse, TokensResponse
from tire.application.dto.tokens import GetTokensInput
from tire.application.use_cases.get_tokens import MAX_LIMIT, MAX_PAGES, VIEWS, GetTokensUseCase
from tire.domain.exceptions import TokensInputError
from tire.shared.config import get_settings

router = APIRouter()


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid parameters", "message": message},
    )


@router.get("/api/tokens", response_model=TokensResponse)
def get_tokens(
    response: Response,
    view: str = "volume",
    pages: int = 10,
    age_days: int = Query(default=30, alias="ageDays"),
    limit: int = 500,
    use_case: GetTokensUseCase = Depends(get_get_tokens_use_case),
):
    if view not in VIEWS:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid view",
                "message": "View must be one of: volume, liquidity, new",
            },
        )

    try:
        result = use_case.execute(
            GetTokensInput(
                view=view,
                pages=min(pages, MAX_PAGES),
                age_days=max(1, age_days),
                limit=min(limit, MAX_LIMIT),
            )
        )
    except TokensInputError as exc:
        return _bad_request(str(exc))

    max_age = int(get_settings().tokens_cache_ttl_seconds)
    response.headers["Cache-Control"] = f"public, max-age={max_age}"
    return TokensResponse(
        source=result.source,
        coverage=result.coverage,
        tokens=[
            TokenRowResponse(
                address=row.address,
                symbol=row.symbol,
                name=row.name,
                price=row.price,
                price_change_24h=row.price_change_24h,
                volume_24h=row.volume_24h,
                liquidity=row.liquidity,
                pair_created_at=row.pair_created_at,
                pool_count=row.pool_count,
                url=row.url,
                pair_address=row.pair_address,
                source=row.source,
            )
            for row in result.tokens
        ],
    )
