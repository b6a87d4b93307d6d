"""Celebration portrait generation module."""
from celebration.data_url import EncodedImage, parse_data_url, to_data_url
from celebration.errors import ConfigurationError, GenerationError, InvalidInputError
from celebration.prompts import DEFAULT_OUTFIT_DESCRIPTION, build_prompt
from celebration.responses import ImagePart, TextOnly, parse_response
from celebration.retry import FailureClass, RetryPolicy, call_with_retry, classify_error
from celebration.services import GenerationClient, generate_celebration_image, get_generation_client

__all__ = [
    "EncodedImage",
    "parse_data_url",
    "to_data_url",
    "ConfigurationError",
    "GenerationError",
    "InvalidInputError",
    "DEFAULT_OUTFIT_DESCRIPTION",
    "build_prompt",
    "ImagePart",
    "TextOnly",
    "parse_response",
    "FailureClass",
    "RetryPolicy",
    "call_with_retry",
    "classify_error",
    "GenerationClient",
    "generate_celebration_image",
    "get_generation_client",
]
