"""Shared fixtures: a fake Gemini client and canned responses."""
import base64
from types import SimpleNamespace

import pytest

SOURCE_BYTES = b"fake-jpeg-bytes"
SOURCE_DATA_URL = "data:image/jpeg;base64," + base64.b64encode(SOURCE_BYTES).decode("ascii")

INTERNAL_ERROR = '{"error": {"code": 500, "message": "Internal error encountered.", "status": "INTERNAL"}}'
RATE_LIMIT_ERROR = '{"error": {"code": 429, "message": "Quota exceeded.", "status": "RESOURCE_EXHAUSTED"}}'
BAD_REQUEST_ERROR = '{"error": {"code": 400, "message": "Request is malformed.", "status": "INVALID_ARGUMENT"}}'


def image_response(mime_type: str = "image/png", data="BASE64"):
    part = SimpleNamespace(text=None, inline_data=SimpleNamespace(mime_type=mime_type, data=data))
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))],
        text=None,
    )


def text_response(text):
    part = SimpleNamespace(text=text, inline_data=None)
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))],
        text=text,
    )


@pytest.fixture
def fake_genai(mocker):
    """Stand-in for google.genai.Client exposing ``aio.models.generate_content``."""
    generate_content = mocker.AsyncMock(return_value=image_response())
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))


@pytest.fixture
def fake_sleep(mocker):
    return mocker.AsyncMock(return_value=None)
