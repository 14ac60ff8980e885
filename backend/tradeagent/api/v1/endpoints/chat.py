"""
Chat Relay Endpoint

Streams a model completion grounded in uploaded documents and live
indicator summaries.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from tradeagent.api.deps import get_context_assembler, get_streaming_relay
from tradeagent.api.v1.endpoints.market import parse_body
from tradeagent.schemas.chat import ChatRequest
from tradeagent.services.llm import ContextAssembler, StreamingRelay

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def chat(
    request: Request,
    assembler: ContextAssembler = Depends(get_context_assembler),
    relay: StreamingRelay = Depends(get_streaming_relay),
):
    """
    Stream a chat completion via SSE.

    Body: {messages: [{role, content}], documents?: [{name, content}], asset?}

    Errors are JSON {error} with 429 (rate limit), 402 (credits) or 500.
    """
    body = await parse_body(request, ChatRequest)
    context = await assembler.build(body.messages, body.documents, body.asset)

    messages = [{"role": "system", "content": context.system_prompt}]
    messages.extend(m.model_dump() for m in body.messages)

    stream = await relay.open_stream(messages)

    return StreamingResponse(
        stream,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
