"""Tests for the Gemini generation client."""
import base64

import pytest
from google.genai import types

from celebration.data_url import EncodedImage, parse_data_url
from celebration.errors import ConfigurationError, GenerationError, InvalidInputError
from celebration.prompts import build_prompt
from celebration.responses import ImagePart, TextOnly, parse_response
from celebration.retry import FailureClass, RetryPolicy
from celebration.services import GenerationClient
from conftest import (
    BAD_REQUEST_ERROR,
    INTERNAL_ERROR,
    RATE_LIMIT_ERROR,
    SOURCE_BYTES,
    SOURCE_DATA_URL,
    image_response,
    text_response,
)


def make_client(fake_genai, fake_sleep, **kwargs) -> GenerationClient:
    return GenerationClient(
        api_key="test-key",
        model="gemini-test-image",
        retry_policy=kwargs.pop("retry_policy", RetryPolicy(max_attempts=3, initial_delay=1.0)),
        genai_client=fake_genai,
        sleep=fake_sleep,
        **kwargs,
    )


def test_parse_data_url() -> None:
    image = parse_data_url(SOURCE_DATA_URL)

    assert image == EncodedImage(mime_type="image/jpeg", data=base64.b64encode(SOURCE_BYTES).decode())
    assert image.decoded() == SOURCE_BYTES
    assert image.to_data_url() == SOURCE_DATA_URL


def test_missing_api_key_fails_fast(fake_genai) -> None:
    with pytest.raises(ConfigurationError):
        GenerationClient(api_key="", genai_client=fake_genai)


@pytest.mark.asyncio
@pytest.mark.parametrize("image_data_url", [
    "not-a-data-url",
    "data:text/plain;base64,abc",
    "data:image/png;base64,***not base64***",
    "data:image/png;base64,AAAA\n",
    "data:image/pngé;base64,AAAA",
    "",
])
async def test_invalid_input_makes_no_network_call(fake_genai, fake_sleep, image_data_url: str) -> None:
    client = make_client(fake_genai, fake_sleep)

    with pytest.raises(InvalidInputError):
        await client.generate(image_data_url, "a uniform")

    fake_genai.aio.models.generate_content.assert_not_awaited()


@pytest.mark.asyncio
async def test_returns_inline_image_as_data_url(fake_genai, fake_sleep) -> None:
    fake_genai.aio.models.generate_content.return_value = image_response("image/png", "BASE64")
    client = make_client(fake_genai, fake_sleep)

    result = await client.generate(SOURCE_DATA_URL, "a uniform")

    assert result == "data:image/png;base64,BASE64"
    fake_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_request_carries_image_and_prompt(fake_genai, fake_sleep) -> None:
    client = make_client(fake_genai, fake_sleep)

    await client.generate(SOURCE_DATA_URL, "a navy blue police uniform")

    kwargs = fake_genai.aio.models.generate_content.await_args.kwargs
    image_part, text_part = kwargs["contents"]
    assert kwargs["model"] == "gemini-test-image"
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert image_part.inline_data.data == SOURCE_BYTES
    assert text_part.text == build_prompt("a navy blue police uniform")


@pytest.mark.asyncio
async def test_retries_internal_errors_with_backoff(fake_genai, fake_sleep) -> None:
    fake_genai.aio.models.generate_content.side_effect = [
        RuntimeError(INTERNAL_ERROR),
        RuntimeError(INTERNAL_ERROR),
        image_response("image/png", "BASE64"),
    ]
    client = make_client(fake_genai, fake_sleep)

    result = await client.generate(SOURCE_DATA_URL, "")

    assert result == "data:image/png;base64,BASE64"
    assert fake_genai.aio.models.generate_content.await_count == 3
    assert [c.args[0] for c in fake_sleep.await_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_request_is_identical(fake_genai, fake_sleep) -> None:
    fake_genai.aio.models.generate_content.side_effect = [
        RuntimeError(RATE_LIMIT_ERROR),
        image_response(),
    ]
    client = make_client(fake_genai, fake_sleep)

    await client.generate(SOURCE_DATA_URL, "a uniform")

    first, second = fake_genai.aio.models.generate_content.await_args_list
    assert first.kwargs == second.kwargs


@pytest.mark.asyncio
async def test_non_retryable_error_fails_after_one_call(fake_genai, fake_sleep) -> None:
    fake_genai.aio.models.generate_content.side_effect = RuntimeError(BAD_REQUEST_ERROR)
    client = make_client(fake_genai, fake_sleep)

    with pytest.raises(GenerationError) as exc_info:
        await client.generate(SOURCE_DATA_URL, "a uniform")

    assert fake_genai.aio.models.generate_content.await_count == 1
    fake_sleep.assert_not_awaited()
    assert "The AI model failed to generate an image" in str(exc_info.value)
    assert "INVALID_ARGUMENT" in str(exc_info.value)


@pytest.mark.asyncio
async def test_exhausted_rate_limit_surfaces_last_error(fake_genai, fake_sleep) -> None:
    fake_genai.aio.models.generate_content.side_effect = RuntimeError(RATE_LIMIT_ERROR)
    client = make_client(fake_genai, fake_sleep)

    with pytest.raises(GenerationError) as exc_info:
        await client.generate(SOURCE_DATA_URL, "a uniform")

    assert fake_genai.aio.models.generate_content.await_count == 3
    assert fake_sleep.await_count == 2
    assert "RESOURCE_EXHAUSTED" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.failure_class is FailureClass.RATE_LIMITED


@pytest.mark.asyncio
async def test_text_only_response_raises_with_model_text(fake_genai, fake_sleep) -> None:
    fake_genai.aio.models.generate_content.return_value = text_response("I cannot create this image")
    client = make_client(fake_genai, fake_sleep)

    with pytest.raises(GenerationError, match="I cannot create this image") as exc_info:
        await client.generate(SOURCE_DATA_URL, "a uniform")

    assert fake_genai.aio.models.generate_content.await_count == 1
    assert exc_info.value.failure_class is None


@pytest.mark.asyncio
async def test_empty_response_mentions_missing_text(fake_genai, fake_sleep) -> None:
    fake_genai.aio.models.generate_content.return_value = text_response(None)
    client = make_client(fake_genai, fake_sleep)

    with pytest.raises(GenerationError, match="No text response received."):
        await client.generate(SOURCE_DATA_URL, "")


def test_parse_sdk_response_with_image_bytes() -> None:
    response = types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[
            types.Part(text="Here is your portrait."),
            types.Part(inline_data=types.Blob(mime_type="image/png", data=b"\x89PNG")),
        ])),
    ])

    parsed = parse_response(response)

    assert parsed == ImagePart(mime_type="image/png", data=b"\x89PNG")
    assert parsed.to_data_url() == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()


def test_parse_sdk_response_text_only() -> None:
    response = types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[
            types.Part(text="I cannot create this image"),
        ])),
    ])

    assert parse_response(response) == TextOnly(text="I cannot create this image")


def test_parse_response_without_candidates() -> None:
    assert parse_response(types.GenerateContentResponse(candidates=[])) == TextOnly(text=None)


@pytest.mark.asyncio
async def test_generate_celebration_image_uses_default_client(mocker, fake_genai, fake_sleep) -> None:
    from celebration.services import generate_celebration_image

    mocker.patch("celebration.services.get_generation_client", return_value=make_client(fake_genai, fake_sleep))

    assert await generate_celebration_image(SOURCE_DATA_URL) == "data:image/png;base64,BASE64"
