"""API endpoints for the quote router."""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ecorouter.api.models import QuoteRequestModel, QuoteResponseModel
from ecorouter.config import get_default_router
from ecorouter.errors import ValidationError
from ecorouter.router import EcoRouter, QuoteRequest

logger = structlog.get_logger()

router = APIRouter()


def get_router() -> EcoRouter:
    """Dependency provider for the router instance.

    Override this in tests to inject a router with mock sources:
        app.dependency_overrides[get_router] = lambda: test_router

    Returns:
        The router used to quote requests.
    """
    return get_default_router()


@router.post("/{chain_id}/quote", response_model=None)
async def quote(
    chain_id: int,
    request: QuoteRequestModel,
    eco_router: EcoRouter = Depends(get_router),
) -> QuoteResponseModel | JSONResponse:
    """Quote a token pair across every enabled source.

    Error Handling:
        - Invalid request schema: 422 (pydantic)
        - Invalid amounts, slippage or token pair: 422 with the reason
        - Failing sources: listed in ``errors``, never an HTTP error
    """
    logger.info(
        "received_quote_request",
        chain_id=chain_id,
        token_in=request.token_in.address,
        token_out=request.token_out.address,
        direction=request.direction.value,
    )

    try:
        quote_request = QuoteRequest(
            token_in=request.token_in.to_token(chain_id),
            token_out=request.token_out.to_token(chain_id),
            amount=int(request.amount),
            direction=request.direction,
            chain_id=chain_id,
            maximum_slippage=request.maximum_slippage,
            enabled_sources=(
                frozenset(request.enabled_sources) if request.enabled_sources is not None else None
            ),
            timeout_seconds=request.timeout_seconds,
        )
        result = await eco_router.route(quote_request)
    except ValidationError as e:
        logger.warning("invalid_quote_request", chain_id=chain_id, error=str(e))
        return JSONResponse(status_code=422, content={"detail": str(e)})

    logger.info("returning_quote", chain_id=chain_id, **result.summary())
    return QuoteResponseModel.from_result(result)
