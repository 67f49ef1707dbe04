"""Pool registry supplying per-request pool snapshots.

Pools come from a Fetcher: a statically configured set plus dynamically
discovered factory pools. The registry merges both into an immutable
PoolSnapshot that every source reads during one request.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

import structlog

from ecorouter.errors import NetworkError
from ecorouter.models.types import normalize_address

from .types import AnyPool, ConcentratedPool, ConstantProductPool, StableswapPool

logger = structlog.get_logger()


class Fetcher(Protocol):
    """Source of known pools for a chain."""

    async def fetch_pools(self, chain_id: int) -> Sequence[AnyPool]:
        """Statically known pools of every family."""
        ...

    async def fetch_factory_pools(self, chain_id: int) -> Sequence[AnyPool]:
        """Pools discovered from factories, appended to the static set."""
        ...


class StaticFetcher:
    """Fetcher serving in-memory pool tables.

    Args:
        pools: chain_id -> statically configured pools
        factory_pools: chain_id -> pools reported as factory-discovered
    """

    def __init__(
        self,
        pools: Mapping[int, Iterable[AnyPool]] | None = None,
        factory_pools: Mapping[int, Iterable[AnyPool]] | None = None,
    ) -> None:
        self._pools = {chain: tuple(p) for chain, p in (pools or {}).items()}
        self._factory_pools = {chain: tuple(p) for chain, p in (factory_pools or {}).items()}

    async def fetch_pools(self, chain_id: int) -> Sequence[AnyPool]:
        return self._pools.get(chain_id, ())

    async def fetch_factory_pools(self, chain_id: int) -> Sequence[AnyPool]:
        return self._factory_pools.get(chain_id, ())


@dataclass(frozen=True)
class PoolSnapshot:
    """Read-only view of the pools known for one chain during one request."""

    chain_id: int
    stableswap: tuple[StableswapPool, ...] = ()
    constant_product: tuple[ConstantProductPool, ...] = ()
    concentrated: tuple[ConcentratedPool, ...] = ()

    @classmethod
    def from_pools(cls, chain_id: int, pools: Iterable[AnyPool]) -> PoolSnapshot:
        """Split pools by family, dropping duplicate addresses per family.

        Raises:
            TypeError: If a pool type is not supported
        """
        stableswap: dict[str, StableswapPool] = {}
        constant_product: dict[tuple[str, str], ConstantProductPool] = {}
        concentrated: dict[tuple[str, str], ConcentratedPool] = {}

        for pool in pools:
            address = normalize_address(pool.address)
            if isinstance(pool, StableswapPool):
                stableswap.setdefault(address, pool)
            elif isinstance(pool, ConstantProductPool):
                constant_product.setdefault((pool.source, address), pool)
            elif isinstance(pool, ConcentratedPool):
                concentrated.setdefault((pool.source, address), pool)
            else:
                raise TypeError(f"Unknown pool type: {type(pool)}")

        return cls(
            chain_id=chain_id,
            stableswap=tuple(stableswap.values()),
            constant_product=tuple(constant_product.values()),
            concentrated=tuple(concentrated.values()),
        )

    def constant_product_for(self, source: str) -> tuple[ConstantProductPool, ...]:
        """Constant-product pools belonging to one deployment."""
        return tuple(p for p in self.constant_product if p.source == source)

    def concentrated_for(self, source: str) -> tuple[ConcentratedPool, ...]:
        """Concentrated-liquidity pools belonging to one deployment."""
        return tuple(p for p in self.concentrated if p.source == source)

    @property
    def pool_count(self) -> int:
        return len(self.stableswap) + len(self.constant_product) + len(self.concentrated)


class PoolRegistry:
    """Builds pool snapshots from a Fetcher.

    Nothing is cached across requests: each snapshot() call fetches the
    static and factory pools once and freezes them.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    async def snapshot(self, chain_id: int) -> PoolSnapshot:
        """Fetch and freeze the pools for a chain.

        A failing factory fetch degrades to the static set.
        """
        pools = list(await self.fetcher.fetch_pools(chain_id))

        try:
            factory_pools = await self.fetcher.fetch_factory_pools(chain_id)
        except NetworkError as e:
            logger.warning(
                "factory_pool_fetch_failed",
                chain_id=chain_id,
                error=str(e),
                message="Continuing with statically configured pools",
            )
            factory_pools = ()
        except Exception:
            logger.exception("factory_pool_fetch_crashed", chain_id=chain_id)
            factory_pools = ()

        pools.extend(factory_pools)
        snapshot = PoolSnapshot.from_pools(chain_id, pools)
        logger.debug(
            "pool_snapshot_built",
            chain_id=chain_id,
            stableswap=len(snapshot.stableswap),
            constant_product=len(snapshot.constant_product),
            concentrated=len(snapshot.concentrated),
        )
        return snapshot


__all__ = ["Fetcher", "StaticFetcher", "PoolSnapshot", "PoolRegistry"]
