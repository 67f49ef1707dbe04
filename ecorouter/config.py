"""Router configuration and default router assembly."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

import structlog

from ecorouter.concentrated import SWAPR_V3_DEPLOYMENTS, UNISWAP_V3_DEPLOYMENTS
from ecorouter.concentrated import ConcentratedLiquidityAdapter
from ecorouter.constant_product import ConstantProductAdapter
from ecorouter.constants import ChainId
from ecorouter.pools.curve_api import CurveApiFetcher
from ecorouter.pools.registry import Fetcher, PoolRegistry
from ecorouter.pools.static import default_fetcher
from ecorouter.router import DEFAULT_TIMEOUT_SECONDS, EcoRouter, EcoRouterSourceOptions
from ecorouter.sources.base import QuoteSource
from ecorouter.stableswap import StableswapAdapter
from ecorouter.transport import Web3ViewCaller

logger = structlog.get_logger()

ENV_PREFIX = "ECOROUTER_"

# Source ids assembled per chain by create_default_router
CHAIN_SOURCES: Mapping[int, tuple[str, ...]] = MappingProxyType(
    {
        ChainId.MAINNET: ("curve", "uniswap-v2", "sushiswap", "uniswap-v3"),
        ChainId.GNOSIS: ("curve", "swapr-v3"),
        ChainId.ARBITRUM_ONE: ("curve", "uniswap-v3"),
    }
)


@dataclass(frozen=True)
class RouterConfig:
    """Settings for assembling an EcoRouter.

    Attributes:
        timeout_seconds: Deadline for each request's quote fan-out
        rpc_urls: chain_id -> JSON-RPC endpoint; chains without one get no sources
        enabled_sources: Source ids to assemble (None = all)
        use_multihops: Default for constant-product two-hop routing
        curve_api_url: Base URL for Curve factory pool discovery (None disables it)
        rpc_timeout_seconds: Per-call HTTP timeout for view calls
    """

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    rpc_urls: Mapping[int, str] = field(default_factory=dict)
    enabled_sources: frozenset[str] | None = None
    use_multihops: bool = True
    curve_api_url: str | None = None
    rpc_timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RouterConfig:
        """Read settings from ECOROUTER_* environment variables.

        - ECOROUTER_TIMEOUT_SECONDS: float
        - ECOROUTER_RPC_URL_<CHAIN_ID>: e.g. ECOROUTER_RPC_URL_1 (RPC_URL also sets mainnet)
        - ECOROUTER_ENABLED_SOURCES: comma-separated source ids
        - ECOROUTER_USE_MULTIHOPS: true/false
        - ECOROUTER_CURVE_API_URL: Curve API base URL

        Raises:
            ValueError: If a numeric setting cannot be parsed
        """
        env = os.environ if environ is None else environ

        rpc_urls: dict[int, str] = {}
        if env.get("RPC_URL"):
            rpc_urls[ChainId.MAINNET] = env["RPC_URL"]
        for key, value in env.items():
            if key.startswith(f"{ENV_PREFIX}RPC_URL_") and value:
                rpc_urls[int(key.removeprefix(f"{ENV_PREFIX}RPC_URL_"))] = value

        enabled = env.get(f"{ENV_PREFIX}ENABLED_SOURCES")
        enabled_sources = (
            frozenset(s.strip() for s in enabled.split(",") if s.strip()) if enabled else None
        )

        return cls(
            timeout_seconds=float(
                env.get(f"{ENV_PREFIX}TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
            ),
            rpc_urls=MappingProxyType(rpc_urls),
            enabled_sources=enabled_sources,
            use_multihops=_parse_bool(env.get(f"{ENV_PREFIX}USE_MULTIHOPS", "true")),
            curve_api_url=env.get(f"{ENV_PREFIX}CURVE_API_URL") or None,
        )

    def is_source_enabled(self, source: str) -> bool:
        return self.enabled_sources is None or source in self.enabled_sources


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()


def build_sources(
    config: RouterConfig,
    options: EcoRouterSourceOptions | None = None,
) -> list[QuoteSource]:
    """One adapter per source id for every chain with an RPC endpoint.

    Args:
        config: Router settings
        options: Per-family options; uniswap_v2.use_multihops overrides
            config.use_multihops
    """
    use_multihops = config.use_multihops
    if options is not None:
        use_multihops = options.uniswap_v2.use_multihops

    sources: list[QuoteSource] = []
    for chain_id, rpc_url in config.rpc_urls.items():
        view_caller = Web3ViewCaller(rpc_url, timeout_seconds=config.rpc_timeout_seconds)
        for source in CHAIN_SOURCES.get(chain_id, ()):
            if not config.is_source_enabled(source):
                continue
            if source == "curve":
                sources.append(StableswapAdapter(view_caller, chain_ids=(chain_id,)))
            elif source in ("uniswap-v2", "sushiswap"):
                sources.append(
                    ConstantProductAdapter(
                        view_caller, source, chain_ids=(chain_id,), use_multihops=use_multihops
                    )
                )
            elif source == "uniswap-v3":
                sources.append(
                    ConcentratedLiquidityAdapter(
                        view_caller,
                        source,
                        deployments={chain_id: UNISWAP_V3_DEPLOYMENTS[chain_id]},
                    )
                )
            elif source == "swapr-v3":
                sources.append(
                    ConcentratedLiquidityAdapter(
                        view_caller,
                        source,
                        deployments={chain_id: SWAPR_V3_DEPLOYMENTS[chain_id]},
                    )
                )
        logger.info("chain_sources_configured", chain_id=chain_id, rpc_url=rpc_url[:50] + "...")
    return sources


def create_router(
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    options: EcoRouterSourceOptions | None = None,
) -> EcoRouter:
    """Assemble a router over the bundled pool tables."""
    fetcher: Fetcher = default_fetcher()
    if config.curve_api_url:
        fetcher = CurveApiFetcher(fetcher, base_url=config.curve_api_url)

    sources = build_sources(config, options)
    if not sources:
        logger.warning("no_sources_configured", reason="no RPC endpoint set")
    return EcoRouter(sources, PoolRegistry(fetcher), timeout_seconds=config.timeout_seconds)


@lru_cache(maxsize=1)
def get_default_router() -> EcoRouter:
    """Router built from the environment, created on first use."""
    return create_router(RouterConfig.from_env())


__all__ = [
    "RouterConfig",
    "DEFAULT_ROUTER_CONFIG",
    "CHAIN_SOURCES",
    "build_sources",
    "create_router",
    "get_default_router",
]
