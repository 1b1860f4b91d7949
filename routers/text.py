"""
Text router for cleaning and rendering raw AI text.

This router provides POST /api/text/clean, which runs the reconstruction
pipeline over submitted text, and POST /api/text/render, which cleans the
text and then renders it as sanitized markup or a typewriter reveal plan.
"""

import logging
from fastapi import APIRouter, Request

from models.reveal import RevealOptions
from models.text_request import (
    TextCleanRequest,
    TextCleanResponse,
    TextRenderRequest,
    TextRenderResponse,
)
from services.renderer_service import RendererService
from services.text_pipeline import TextPipelineService
from utils.context_utils import get_request_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/text", tags=["text"])


@router.post("/clean", response_model=TextCleanResponse)
async def clean_text(body: TextCleanRequest, request: Request):
    """
    Clean raw text with the reconstruction pipeline.

    Args:
        body: TextCleanRequest with text and optional pipeline options
        request: FastAPI Request object for context headers

    Returns:
        TextCleanResponse with raw_text, cleaned_text, changed and request_id
    """
    context = get_request_context(request)

    logger.info(
        f"Text cleaning started: request_id={context.request_id}, "
        f"trace_id={context.trace_id}, text_length={len(body.text)}"
    )

    pipeline = TextPipelineService(body.options)
    cleaned_text = pipeline.reconstruct(body.text)

    logger.info(
        f"Text cleaning complete: request_id={context.request_id}, "
        f"cleaned_length={len(cleaned_text)}, changed={cleaned_text != body.text}"
    )

    return TextCleanResponse(
        raw_text=body.text,
        cleaned_text=cleaned_text,
        changed=cleaned_text != body.text,
        request_id=context.request_id
    )


@router.post("/render", response_model=TextRenderResponse)
async def render_text(body: TextRenderRequest, request: Request):
    """
    Clean raw text and render it for display.

    Args:
        body: TextRenderRequest with text, animate flag, timing and options
        request: FastAPI Request object for context headers

    Returns:
        TextRenderResponse with either html (animate=false) or a reveal plan
    """
    context = get_request_context(request)

    logger.info(
        f"Text rendering started: request_id={context.request_id}, "
        f"text_length={len(body.text)}, animate={body.animate}"
    )

    cleaned_text = TextPipelineService(body.options).reconstruct(body.text)
    renderer = RendererService(body.options)

    if body.animate:
        reveal = renderer.plan_reveal(
            cleaned_text,
            RevealOptions(speed=body.speed, delay=body.delay)
        )
        logger.info(
            f"Reveal planned: request_id={context.request_id}, chunks={len(reveal.chunks)}"
        )
        return TextRenderResponse(
            cleaned_text=cleaned_text,
            reveal=reveal,
            request_id=context.request_id
        )

    html = renderer.render_markup(cleaned_text)
    logger.info(
        f"Markup rendered: request_id={context.request_id}, html_length={len(html)}"
    )
    return TextRenderResponse(
        cleaned_text=cleaned_text,
        html=html,
        request_id=context.request_id
    )
