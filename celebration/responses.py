"""Interpretation of Gemini generate_content responses."""
from dataclasses import dataclass
from typing import Any, Optional, Union

from celebration.data_url import to_data_url


@dataclass(frozen=True)
class ImagePart:
    """The model returned inline image data."""
    mime_type: str
    data: Union[str, bytes]

    def to_data_url(self) -> str:
        return to_data_url(self.mime_type, self.data)


@dataclass(frozen=True)
class TextOnly:
    """The model answered without an image; ``text`` is its explanation, if any."""
    text: Optional[str] = None


ParsedResponse = Union[ImagePart, TextOnly]


def _first_candidate_parts(response: Any) -> list:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def _response_text(response: Any) -> Optional[str]:
    text = getattr(response, "text", None)
    if text:
        return text
    # Fall back to joining text parts when the SDK property is unavailable.
    texts = [
        part.text for part in _first_candidate_parts(response)
        if getattr(part, "text", None)
    ]
    return "\n".join(texts) if texts else None


def parse_response(response: Any) -> ParsedResponse:
    """
    Pick the first inline image part of the first candidate.

    Returns ImagePart when one exists, otherwise TextOnly with whatever text
    the model sent back.
    """
    for part in _first_candidate_parts(response):
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            return ImagePart(mime_type=inline.mime_type, data=inline.data)
    return TextOnly(text=_response_text(response))
