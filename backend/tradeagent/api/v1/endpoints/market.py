"""
Market Data API Endpoint

Single action-dispatched endpoint serving prices, charts, stock lists,
indicators, trending coins and global crypto stats.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from tradeagent.api.deps import get_market_data_service
from tradeagent.schemas.market import MarketDataRequest
from tradeagent.services.base import ServiceError
from tradeagent.services.market_data import MarketDataService

logger = logging.getLogger(__name__)

router = APIRouter()


async def parse_body(request: Request, model):
    """Decode a JSON body into model; malformed bodies surface as a 500 with the parser message."""
    try:
        return model.model_validate(await request.json())
    except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError) as e:
        raise ServiceError("API", f"Malformed request body: {e}")


@router.post("")
async def market_data(
    request: Request,
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Dispatch a market data action.

    Body: {action, ids?, vs_currency?, days?, symbol?, range?, interval?}
    """
    body = await parse_body(request, MarketDataRequest)
    return await service.dispatch(body)
