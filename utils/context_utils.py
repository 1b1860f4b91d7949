"""
Context Extraction Utilities

This module builds the per-request context used to correlate log lines.

The extraction follows a priority chain for the trace identifier:
1. Request header (X-Trace-Id), when it is a valid UUID v4
2. Generated UUID v4
"""

import uuid
import logging
from fastapi import Request
from models.request_context import RequestContext

logger = logging.getLogger(__name__)

TRACE_ID_HEADER = "X-Trace-Id"


def get_request_context(request: Request) -> RequestContext:
    """
    Extract context from request headers with generated fallbacks.

    Args:
        request: FastAPI Request object containing headers

    Returns:
        RequestContext with all identity fields populated

    Raises:
        None - always returns valid context with fallbacks
    """
    # Generate request_id for this request
    request_id = str(uuid.uuid4())

    trace_id = _extract_trace_id(request, request_id)

    logger.info(f"Context extracted: request_id={request_id}, trace_id={trace_id}")

    return RequestContext(
        request_id=request_id,
        trace_id=trace_id
    )


def _extract_trace_id(request: Request, request_id: str) -> str:
    """
    Extract trace_id from request headers with validation.

    Args:
        request: FastAPI Request object
        request_id: Current request ID for logging

    Returns:
        Valid UUID v4 string for trace_id
    """
    trace_id = request.headers.get(TRACE_ID_HEADER)

    if trace_id:
        if _is_valid_uuid_v4(trace_id):
            logger.debug(f"Trace ID from header: {trace_id}")
            return trace_id
        logger.warning(
            f"Invalid trace_id format in header: {trace_id}. "
            f"request_id={request_id}. Generating new UUID."
        )

    return str(uuid.uuid4())


def _is_valid_uuid_v4(value: str) -> bool:
    """
    Validate that a string is a valid UUID v4.

    Args:
        value: String to validate

    Returns:
        True if valid UUID v4, False otherwise
    """
    try:
        parsed_uuid = uuid.UUID(value, version=4)
        # uuid.UUID(version=4) rewrites the version bits, so compare text
        return parsed_uuid.version == 4 and str(parsed_uuid) == value.lower()
    except (ValueError, AttributeError):
        return False
