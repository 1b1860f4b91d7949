"""
Request Context Data Model

This module defines the RequestContext dataclass that carries the
per-request identifiers used to correlate log lines.
"""

from dataclasses import dataclass


@dataclass
class RequestContext:
    """
    Context information extracted from request headers.

    Attributes:
        request_id: UUID v4 uniquely identifying this specific request
        trace_id: UUID v4 for distributed tracing (from X-Trace-Id header or generated)
    """
    request_id: str
    trace_id: str
