import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from gadgetsinc.api.deps import get_orchestrator
from gadgetsinc.schemas.chat import ChatRequest, SimpleChatRequest, SimpleChatResponse
from gadgetsinc.services.chat_orchestrator import ChatOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


@router.post("/chat/simple", response_model=SimpleChatResponse, status_code=status.HTTP_200_OK)
async def simple_chat(
    request: SimpleChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator)
):
    """
    Send one message and get the whole reply.

    - **message**: The user's message
    """
    try:
        response = await orchestrator.simple_chat(request.message)
        return SimpleChatResponse(response=response)
    except Exception as e:
        logger.error(f"Simple chat failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error processing chat request: {str(e)}"
        )


@router.post("/chat")
async def stream_chat(
    body: ChatRequest,
    request: Request,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator)
):
    """
    Stream a reply to a conversation.

    - **messages**: Conversation so far; only user and assistant turns are replayed

    The body is a sequence of ``data: {"content": ...}`` frames ending with
    ``data: [DONE]``, or with a single ``data: {"error": ...}`` frame.
    """

    async def event_generator():
        frames = orchestrator.stream_chat(body.messages)
        try:
            async for frame in frames:
                if await request.is_disconnected():
                    logger.info("Chat client disconnected, stopping stream")
                    break
                yield frame
        finally:
            await frames.aclose()

    return StreamingResponse(
        event_generator(),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
    )
