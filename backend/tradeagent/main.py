"""
TradeAgent Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tradeagent.core.config import Settings, settings as default_settings
from tradeagent.api.v1 import router as api_v1_router
from tradeagent.services.base import ServiceError
from tradeagent.services.cache import MarketCache, connect_redis
from tradeagent.services.data_ingestion import CoinGeckoClient, YahooChartClient
from tradeagent.services.llm import ContextAssembler, StreamingRelay
from tradeagent.services.market_data import MarketDataService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def init_services(app: FastAPI, settings: Settings) -> None:
    """Build the cache, upstream clients and services and attach them to app.state."""
    redis_client = await connect_redis(settings.redis_url)
    cache = MarketCache(ttl_seconds=settings.cache_ttl_seconds, redis_client=redis_client)

    crypto = CoinGeckoClient(settings.coingecko_base_url, settings.http_timeout_seconds)
    equities = YahooChartClient(settings.yahoo_chart_base_url, settings.http_timeout_seconds)
    market_data = MarketDataService(
        cache, crypto, equities, fanout_timeout=settings.fanout_timeout_seconds
    )

    app.state.cache = cache
    app.state.market_data = market_data
    app.state.context_assembler = ContextAssembler(market_data)
    app.state.relay = StreamingRelay(
        settings.llm_gateway_url,
        settings.llm_api_key,
        settings.llm_model,
        connect_timeout=settings.http_timeout_seconds,
    )


async def close_services(app: FastAPI) -> None:
    await app.state.market_data.crypto.close()
    await app.state.market_data.equities.close()
    await app.state.relay.close()
    await app.state.cache.close()


def create_app(settings: Optional[Settings] = None, init_on_startup: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Tests pass init_on_startup=False and populate app.state themselves.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Environment: {settings.environment}")
        if init_on_startup:
            await init_services(app, settings)
            logger.info(f"Cache ready (ttl={settings.cache_ttl_seconds}s)")

        yield

        # Shutdown
        logger.info("Shutting down...")
        if init_on_startup:
            await close_services(app)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        TradeAgent Market Data & Chat API

        ## Architecture
        - **Data Ingestion**: CoinGecko (crypto) and Yahoo Finance (stocks, indices, commodities)
        - **Cache**: 120s TTL response cache absorbing upstream rate limits
        - **Indicator Engine**: RSI, SMA, EMA, MACD, levels, volatility (pure Python/NumPy)
        - **Chat Relay**: Streams LLM completions grounded in documents and live indicators
        """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.warning(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # Include API routes
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        }

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "TradeAgent Backend API",
            "docs": "/docs",
            "health": "/health",
        }

    return app


configure_logging(default_settings.log_level)
app = create_app()
