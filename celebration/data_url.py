"""Parsing and rendering of base64 image data URLs."""
import base64
import binascii
import re
from dataclasses import dataclass
from typing import Union

from celebration.errors import InvalidInputError

DATA_URL_PATTERN = re.compile(r"data:(image/\w+);base64,(.*)", re.ASCII)


@dataclass(frozen=True)
class EncodedImage:
    """An image as a MIME type plus base64 payload."""
    mime_type: str
    data: str

    def decoded(self) -> bytes:
        return base64.b64decode(self.data)

    def to_data_url(self) -> str:
        return to_data_url(self.mime_type, self.data)


def parse_data_url(image_data_url: str) -> EncodedImage:
    """
    Parse a ``data:image/<type>;base64,<payload>`` string.

    Raises:
        InvalidInputError: if the string is not an image data URL or the
            payload is not valid base64.
    """
    match = DATA_URL_PATTERN.fullmatch(image_data_url or "")
    if not match:
        raise InvalidInputError(
            "Invalid image data URL format. Expected 'data:image/...;base64,...'"
        )
    mime_type, payload = match.groups()
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Image payload is not valid base64: {e}") from e
    return EncodedImage(mime_type=mime_type, data=payload)


def to_data_url(mime_type: str, data: Union[str, bytes]) -> str:
    """Build a data URL; raw bytes are base64-encoded, strings are used verbatim."""
    if isinstance(data, (bytes, bytearray)):
        data = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{data}"
