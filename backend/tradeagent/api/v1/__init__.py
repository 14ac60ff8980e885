"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from tradeagent.api.v1.endpoints import market, chat

router = APIRouter()

# Include all endpoint routers
router.include_router(market.router, prefix="/market-data", tags=["Market Data"])
router.include_router(chat.router, prefix="/chat", tags=["Chat"])
