"""Pydantic request/response models for the quote API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ecorouter.models.percent import Percent
from ecorouter.models.result import EcoRouterResult, SourceError
from ecorouter.models.token import Token
from ecorouter.models.trade import Trade, TradeDirection
from ecorouter.models.types import Address, Uint256


class TokenModel(BaseModel):
    """Token as supplied by the caller."""

    address: Address
    symbol: str = ""
    decimals: int = Field(default=18, ge=0, le=77)

    def to_token(self, chain_id: int) -> Token:
        return Token(self.address, self.symbol, self.decimals, chain_id)


class QuoteRequestModel(BaseModel):
    """Body of POST /{chain_id}/quote.

    ``amount`` is the sell amount for exact_input and the buy amount for
    exact_output. Slippage is given in basis points (50 = 0.5%). timeoutSeconds
    overrides the server's default deadline.
    """

    token_in: TokenModel = Field(alias="tokenIn")
    token_out: TokenModel = Field(alias="tokenOut")
    amount: Uint256
    direction: TradeDirection = TradeDirection.EXACT_INPUT
    maximum_slippage_bps: int = Field(default=50, alias="maximumSlippageBps")
    enabled_sources: list[str] | None = Field(default=None, alias="enabledSources")
    timeout_seconds: float | None = Field(default=None, gt=0, le=60, alias="timeoutSeconds")

    model_config = {"populate_by_name": True}

    @property
    def maximum_slippage(self) -> Percent:
        return Percent.from_bps(self.maximum_slippage_bps)


class RouteHopModel(BaseModel):
    pool: Address
    token_in: Address = Field(serialization_alias="tokenIn")
    token_out: Address = Field(serialization_alias="tokenOut")
    fee: int | None = None


class TradeModel(BaseModel):
    """A ranked trade as returned to the caller."""

    source: str
    protocol: str
    direction: TradeDirection
    token_in: Address = Field(serialization_alias="tokenIn")
    token_out: Address = Field(serialization_alias="tokenOut")
    amount_in: Uint256 = Field(serialization_alias="amountIn")
    amount_out: Uint256 = Field(serialization_alias="amountOut")
    maximum_slippage: str = Field(serialization_alias="maximumSlippage")
    minimum_amount_out: Uint256 | None = Field(default=None, serialization_alias="minimumAmountOut")
    maximum_amount_in: Uint256 | None = Field(default=None, serialization_alias="maximumAmountIn")
    execution_price: str = Field(serialization_alias="executionPrice")
    route: list[RouteHopModel]

    @classmethod
    def from_trade(cls, trade: Trade) -> TradeModel:
        return cls(
            source=trade.source,
            protocol=trade.protocol.value,
            direction=trade.direction,
            token_in=trade.token_in.address,
            token_out=trade.token_out.address,
            amount_in=str(trade.amount_in),
            amount_out=str(trade.amount_out),
            maximum_slippage=str(trade.maximum_slippage),
            minimum_amount_out=(
                str(trade.minimum_amount_out) if trade.minimum_amount_out is not None else None
            ),
            maximum_amount_in=(
                str(trade.maximum_amount_in) if trade.maximum_amount_in is not None else None
            ),
            execution_price=str(trade.execution_price),
            route=[
                RouteHopModel(
                    pool=hop.pool, token_in=hop.token_in, token_out=hop.token_out, fee=hop.fee
                )
                for hop in trade.route
            ],
        )


class SourceErrorModel(BaseModel):
    source: str
    kind: str
    message: str

    @classmethod
    def from_error(cls, error: SourceError) -> SourceErrorModel:
        return cls(**error.to_dict())


class QuoteResponseModel(BaseModel):
    """Ranked trades (best first) plus per-source errors."""

    trades: list[TradeModel] = Field(default_factory=list)
    errors: list[SourceErrorModel] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: EcoRouterResult) -> QuoteResponseModel:
        return cls(
            trades=[TradeModel.from_trade(t) for t in result.trades],
            errors=[SourceErrorModel.from_error(e) for e in result.errors],
        )


__all__ = [
    "TokenModel",
    "QuoteRequestModel",
    "RouteHopModel",
    "TradeModel",
    "SourceErrorModel",
    "QuoteResponseModel",
]
