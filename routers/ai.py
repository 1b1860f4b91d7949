"""
AI router: chat proxy with server-side text reconstruction.

POST /api/ai/chat forwards chat messages to the upstream AI service and
cleans the textual payload of the response before returning it.
GET /api/ai/status reports whether the upstream API key is configured.
"""

import logging
from fastapi import APIRouter, HTTPException, Request
from openai import APIStatusError

from models.chat_request import ChatRequest
from services.ai_chat_service import AIChatService
from services.text_pipeline import TextPipelineService
from utils.context_utils import get_request_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/chat")
async def chat(body: ChatRequest, request: Request):
    """
    Forward chat messages upstream and clean the response text.

    Args:
        body: ChatRequest with a messages array
        request: FastAPI Request object for context headers

    Returns:
        The upstream chat-completion JSON with each choice's content cleaned

    Raises:
        HTTPException: 500 if the API key is missing or processing fails,
            400 if messages is missing or not an array, upstream status
            for upstream non-2xx responses
    """
    context = get_request_context(request)

    if not AIChatService.is_configured():
        logger.error(f"AI_API_KEY environment variable is not configured: request_id={context.request_id}")
        raise HTTPException(status_code=500, detail="API key not configured on the server")

    if not isinstance(body.messages, list):
        logger.warning(f"Chat request without messages array rejected: request_id={context.request_id}")
        raise HTTPException(
            status_code=400,
            detail="Invalid request format. 'messages' array is required."
        )

    try:
        chat_service = AIChatService()
        data = await chat_service.complete(body.messages)
    except APIStatusError as e:
        error_text = e.response.text or e.message
        logger.error(
            f"AI API error: request_id={context.request_id}, "
            f"status={e.status_code}, body={error_text}"
        )
        raise HTTPException(
            status_code=e.status_code,
            detail=f"API returned {e.status_code}: {error_text}"
        )
    except Exception as e:
        logger.error(
            f"Error in AI chat route: request_id={context.request_id}, "
            f"error={type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Internal server error")

    modified = TextPipelineService().clean_completion(data)
    if modified:
        logger.info(
            f"Server-side text preprocessing applied to AI response: "
            f"request_id={context.request_id}, choices_modified={modified}"
        )

    return data


@router.get("/status")
async def status():
    """Report whether the upstream AI API key is configured."""
    if AIChatService.is_configured():
        return {"status": "configured", "message": "AI_API_KEY is configured"}

    logger.warning("AI_API_KEY is not configured in environment variables")
    return {"status": "not_configured", "message": "AI_API_KEY is not configured"}
