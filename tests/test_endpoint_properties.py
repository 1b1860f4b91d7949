"""
Property-Based Tests for Endpoint Models

This module contains property tests for the request and response models of
the text and chat endpoints:

- Response Schema Completeness
- Empty and whitespace text acceptance
- Loose chat message validation
"""

import uuid
import pytest
from hypothesis import given, strategies as st, settings
from pydantic import ValidationError

from models.chat_request import ChatRequest
from models.text_request import (
    TextCleanRequest,
    TextCleanResponse,
    TextRenderRequest,
    TextRenderResponse,
)
from models.reveal import RevealPlan


# =============================================================================
# Strategy Definitions
# =============================================================================

@st.composite
def whitespace_only_string(draw):
    """Generate strings containing only whitespace characters."""
    return draw(st.one_of(
        st.just(""),
        st.just(" "),
        st.just("\t\n"),
        st.just("\r\n"),
        st.text(
            alphabet=st.sampled_from([' ', '\t', '\n', '\r']),
            min_size=1,
            max_size=20
        ),
    ))


# =============================================================================
# Property: Whitespace Text Acceptance
# Any string, including empty and whitespace-only, is valid raw text; the
# pipeline returns empty input unchanged.
# =============================================================================

@given(whitespace_only_string())
@settings(max_examples=100)
def test_whitespace_text_accepted_by_model(whitespace_text):
    """Whitespace-only and empty text is accepted without validation errors."""
    request = TextCleanRequest(text=whitespace_text)

    assert request.text == whitespace_text, "Text should be preserved"
    assert request.options is None, "Options default to None"


@given(st.text(max_size=200))
@settings(max_examples=100)
def test_any_text_accepted_by_render_model(text):
    """TextRenderRequest accepts any text and applies timing defaults."""
    request = TextRenderRequest(text=text)

    assert request.text == text
    assert request.animate is True
    assert request.speed == 30
    assert request.delay == 0


def test_text_is_required():
    """TextCleanRequest SHALL require the text field."""
    with pytest.raises(ValidationError):
        TextCleanRequest()


def test_negative_timing_rejected():
    """Reveal timing must not be negative."""
    with pytest.raises(ValidationError):
        TextRenderRequest(text="x", speed=-1)
    with pytest.raises(ValidationError):
        TextRenderRequest(text="x", delay=-5)


# =============================================================================
# Property: Response Schema Completeness
# For any successful cleaning request, the response JSON SHALL contain all
# required fields.
# =============================================================================

@given(
    raw_text=st.text(max_size=100),
    cleaned_text=st.text(max_size=100),
    request_id=st.uuids()
)
@settings(max_examples=100)
def test_text_response_schema_completeness(raw_text, cleaned_text, request_id):
    """
    Property: Response Schema Completeness

    For any valid TextCleanResponse, it SHALL contain raw_text, cleaned_text,
    changed and request_id.
    """
    response = TextCleanResponse(
        raw_text=raw_text,
        cleaned_text=cleaned_text,
        changed=raw_text != cleaned_text,
        request_id=str(request_id)
    )

    response_dict = response.model_dump()
    assert response_dict["raw_text"] == raw_text, "raw_text should be in JSON"
    assert response_dict["cleaned_text"] == cleaned_text, "cleaned_text should be in JSON"
    assert response_dict["changed"] == (raw_text != cleaned_text), "changed should be in JSON"
    assert response_dict["request_id"] == str(request_id), "request_id should be in JSON"


def test_text_response_requires_all_fields():
    """TextCleanResponse SHALL require all fields."""
    with pytest.raises(ValidationError):
        TextCleanResponse(cleaned_text="cleaned", changed=False, request_id="123")

    with pytest.raises(ValidationError):
        TextCleanResponse(raw_text="raw", changed=False, request_id="123")

    with pytest.raises(ValidationError):
        TextCleanResponse(raw_text="raw", cleaned_text="cleaned", request_id="123")

    with pytest.raises(ValidationError):
        TextCleanResponse(raw_text="raw", cleaned_text="cleaned", changed=False)


def test_render_response_carries_reveal_plan():
    """TextRenderResponse serializes a nested RevealPlan."""
    response = TextRenderResponse(
        cleaned_text="Hi",
        reveal=RevealPlan(chunks=["H", "i"], speed=30, delay=200, duration_ms=260),
        request_id=str(uuid.uuid4())
    )

    data = response.model_dump()
    assert data["html"] is None
    assert data["reveal"]["chunks"] == ["H", "i"]


# =============================================================================
# Property: Loose Chat Message Validation
# The chat model never rejects a body; the router decides on HTTP 400.
# =============================================================================

@given(st.one_of(
    st.none(),
    st.text(max_size=20),
    st.integers(),
    st.lists(st.dictionaries(st.sampled_from(["role", "content"]), st.text(max_size=20)), max_size=5)
))
@settings(max_examples=100)
def test_chat_request_accepts_any_messages(messages):
    """ChatRequest accepts any messages value and ignores extra fields."""
    request = ChatRequest.model_validate({"messages": messages, "stream": False})

    assert request.messages == messages
    assert not hasattr(request, "stream")
