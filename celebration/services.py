"""Celebration image generation services - Gemini integration."""
from functools import lru_cache
from typing import Any, Optional

from google import genai
from google.genai import types

from config import Config
from celebration.data_url import EncodedImage, parse_data_url
from celebration.errors import ConfigurationError, GenerationError
from celebration.prompts import build_prompt
from celebration.responses import ImagePart, parse_response
from celebration.retry import RetryPolicy, Sleep, call_with_retry, classify_error
from utils.logger import get_logger

logger = get_logger("celebration.services")


class GenerationClient:
    """
    Turns a user photo and outfit description into a celebration portrait.

    One instance is safe to reuse across requests: it holds only the Gemini
    client handle, the model id and the retry policy.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
        genai_client: Optional[Any] = None,
        sleep: Optional[Sleep] = None,
    ):
        api_key = Config.GEMINI_API_KEY if api_key is None else api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable is not set")

        self.model = model or Config.GEMINI_MODEL
        self.retry_policy = retry_policy or RetryPolicy.from_config()
        self._sleep = sleep
        try:
            self._client = genai_client or genai.Client(api_key=api_key)
        except Exception as e:
            logger.error(f"Failed to initialize Gemini client: {e}")
            raise ConfigurationError(f"Failed to initialize Gemini client: {e}") from e

    def _build_contents(self, image: EncodedImage, prompt: str) -> list:
        return [
            types.Part.from_bytes(data=image.decoded(), mime_type=image.mime_type),
            types.Part.from_text(text=prompt),
        ]

    async def _call_gemini(self, contents: list) -> Any:
        return await self._client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
        )

    async def generate(self, image_data_url: str, outfit_description: str = "") -> str:
        """
        Generate a celebration portrait.

        Args:
            image_data_url: Source photo as ``data:image/<type>;base64,<payload>``
            outfit_description: Free-text outfit; blank means the default outfit

        Returns:
            The generated image as a data URL

        Raises:
            InvalidInputError: image_data_url is not a valid image data URL
                (raised before any network call)
            GenerationError: Gemini failed or answered without an image
        """
        image = parse_data_url(image_data_url)

        try:
            prompt = build_prompt(outfit_description or "")
            contents = self._build_contents(image, prompt)

            logger.info(
                f"Requesting celebration image from {self.model} "
                f"({image.mime_type}, custom outfit: {bool((outfit_description or '').strip())})"
            )
            response = await call_with_retry(
                lambda: self._call_gemini(contents),
                self.retry_policy,
                sleep=self._sleep,
            )

            parsed = parse_response(response)
            if isinstance(parsed, ImagePart):
                logger.info(f"Gemini returned an image ({parsed.mime_type})")
                return parsed.to_data_url()

            logger.error(f"API did not return an image. Response: {parsed.text}")
            raise GenerationError(
                "The AI model responded with text instead of an image: "
                f"\"{parsed.text or 'No text response received.'}\""
            )
        except Exception as e:
            logger.error(f"An unrecoverable error occurred during image generation: {e}")
            failure_class = None if isinstance(e, GenerationError) else classify_error(e)
            raise GenerationError(
                f"The AI model failed to generate an image. Details: {e}",
                failure_class=failure_class,
            ) from e


@lru_cache(maxsize=1)
def get_generation_client() -> GenerationClient:
    """Process-wide client built from Config on first use."""
    return GenerationClient()


async def generate_celebration_image(image_data_url: str, outfit_description: str = "") -> str:
    """Generate a celebration portrait with the default client."""
    return await get_generation_client().generate(image_data_url, outfit_description)
