"""Factory pool discovery through the Curve HTTP API."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

import httpx
import structlog
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ecorouter.constants import WRAPPED_NATIVE_TOKENS, ChainId, is_native
from ecorouter.errors import NetworkError
from ecorouter.models.token import Token
from ecorouter.models.types import Address

from .registry import Fetcher
from .types import AnyPool, StableswapPool

logger = structlog.get_logger()

DEFAULT_CURVE_API_URL = "https://api.curve.fi"

# Curve API network slugs
CURVE_NETWORKS: Mapping[int, str] = MappingProxyType(
    {
        ChainId.MAINNET: "ethereum",
        ChainId.GNOSIS: "xdai",
        ChainId.ARBITRUM_ONE: "arbitrum",
    }
)


class CurveCoin(BaseModel):
    """A coin entry of the Curve getPools response."""

    model_config = {"populate_by_name": True, "extra": "ignore"}

    address: Address
    symbol: str
    decimals: int = Field(ge=0, le=77)


def _pool_token(coin: CurveCoin, chain_id: int) -> Token:
    if is_native(coin.address):
        wrapped = WRAPPED_NATIVE_TOKENS.get(chain_id)  # type: ignore[call-overload]
        if wrapped is not None:
            return wrapped
    return Token(coin.address, coin.symbol, coin.decimals, chain_id)


class CurvePoolData(BaseModel):
    """A pool entry of the Curve getPools response."""

    model_config = {"populate_by_name": True, "extra": "ignore"}

    address: Address
    name: str = ""
    coins: list[CurveCoin]
    underlying_coins: list[CurveCoin] | None = Field(default=None, alias="underlyingCoins")
    is_meta_pool: bool = Field(default=False, alias="isMetaPool")

    def to_pool(self, chain_id: int, *, is_crypto: bool = False) -> StableswapPool:
        """Convert to a StableswapPool for the given chain.

        Native coins are listed as the chain's wrapped-native token, which
        is how ETH-trading pools are represented for routing.
        """
        tokens = tuple(_pool_token(c, chain_id) for c in self.coins)
        underlying = (
            tuple(Token(c.address, c.symbol, c.decimals, chain_id) for c in self.underlying_coins)
            if self.underlying_coins
            else None
        )
        is_meta = self.is_meta_pool and underlying is not None
        return StableswapPool(
            address=self.address.lower(),
            name=self.name,
            tokens=tokens,
            meta_tokens=underlying if is_meta else None,
            underlying_tokens=None if is_meta else underlying,
            allows_trading_eth=any(is_native(c.address) for c in self.coins),
            is_meta=is_meta,
            is_crypto=is_crypto,
            is_factory=True,
        )


class CurvePoolsData(BaseModel):
    model_config = {"populate_by_name": True}

    pool_data: list[CurvePoolData] = Field(default_factory=list, alias="poolData")


class CurvePoolsResponse(BaseModel):
    """Envelope of the Curve getPools endpoint."""

    success: bool = True
    data: CurvePoolsData = Field(default_factory=CurvePoolsData)


class CurveApiFetcher:
    """Fetcher for Curve factory pools, layered over a static fetcher.

    Static pools are delegated to ``static``; factory pools come from
    ``GET {base_url}/api/getPools/{network}/{registry}`` for each configured
    registry.
    """

    def __init__(
        self,
        static: Fetcher,
        base_url: str = DEFAULT_CURVE_API_URL,
        registries: Sequence[str] = ("factory", "factory-crypto"),
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.static = static
        self.base_url = base_url.rstrip("/")
        self.registries = tuple(registries)
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def fetch_pools(self, chain_id: int) -> Sequence[AnyPool]:
        return await self.static.fetch_pools(chain_id)

    async def fetch_factory_pools(self, chain_id: int) -> Sequence[AnyPool]:
        """Fetch factory pools for a chain.

        Raises:
            NetworkError: If the API cannot be reached or answers garbage
        """
        network = CURVE_NETWORKS.get(chain_id)
        if network is None:
            return ()

        pools: list[AnyPool] = []
        for registry in self.registries:
            data = await self._get(f"{self.base_url}/api/getPools/{network}/{registry}")
            try:
                response = CurvePoolsResponse.model_validate(data)
            except PydanticValidationError as e:
                raise NetworkError(f"Malformed Curve API response for {registry}: {e}") from e

            if not response.success:
                logger.warning("curve_api_unsuccessful", network=network, registry=registry)
                continue

            is_crypto = "crypto" in registry
            for pool_data in response.data.pool_data:
                try:
                    pools.append(pool_data.to_pool(chain_id, is_crypto=is_crypto))
                except ValueError as e:
                    logger.debug("curve_api_pool_skipped", pool=pool_data.address, error=str(e))

        logger.info("curve_factory_pools_fetched", chain_id=chain_id, count=len(pools))
        return pools

    async def _get(self, url: str) -> object:
        try:
            if self._client is not None:
                response = await self._client.get(url, timeout=self.timeout_seconds)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise NetworkError(f"Curve API request failed: {e}") from e
        except ValueError as e:
            raise NetworkError(f"Curve API returned invalid JSON: {e}") from e


__all__ = ["CurveApiFetcher", "CurvePoolData", "CurvePoolsResponse", "CURVE_NETWORKS"]
