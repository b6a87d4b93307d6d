"""Celebration image generation routes."""
from fastapi import APIRouter, Depends, HTTPException

from celebration.errors import ConfigurationError, GenerationError, InvalidInputError
from celebration.models import CelebrationRequest, CelebrationResponse, DefaultOutfitResponse
from celebration.prompts import DEFAULT_OUTFIT_DESCRIPTION
from celebration.retry import FailureClass
from celebration.services import GenerationClient, get_generation_client
from common.error_messages import ErrorCode, format_error_detail, get_error_response, get_status_code
from utils.logger import get_logger

logger = get_logger("celebration")
router = APIRouter(prefix="/api/celebration", tags=["celebration"])


def _client_dependency() -> GenerationClient:
    try:
        return get_generation_client()
    except ConfigurationError as e:
        logger.error(f"Generation client unavailable: {e}")
        message, status_code = get_error_response(ErrorCode.MISSING_API_KEY)
        raise HTTPException(status_code=status_code, detail=message)


@router.post("/generate", response_model=CelebrationResponse)
async def generate(
    req: CelebrationRequest,
    client: GenerationClient = Depends(_client_dependency),
):
    """
    Generate a commemorative photo from an uploaded picture.

    Accepts:
      { image: "data:image/...;base64,...", outfit_description?: "..." }

    The generation error message is returned as ``detail`` unchanged so the
    frontend can show the model's explanation to the user.
    """
    try:
        image_url = await client.generate(req.image, req.outfit_description)
    except InvalidInputError as e:
        logger.warning(f"Rejected invalid image input: {e}")
        status_code = get_status_code(ErrorCode.INVALID_IMAGE_DATA)
        raise HTTPException(
            status_code=status_code,
            detail=format_error_detail(ErrorCode.INVALID_IMAGE_DATA, str(e)),
        )
    except GenerationError as e:
        logger.error(f"Celebration image generation failed: {e}")
        error_code = ErrorCode.IMAGE_GENERATION_FAILED
        if e.failure_class is FailureClass.RATE_LIMITED:
            error_code = ErrorCode.GEMINI_RATE_LIMIT
        raise HTTPException(status_code=get_status_code(error_code), detail=str(e))

    return CelebrationResponse(
        image_url=image_url,
        mime_type=image_url[len("data:"):].split(";", 1)[0],
    )


@router.get("/default-outfit", response_model=DefaultOutfitResponse)
def default_outfit():
    """Outfit used when the description is left blank."""
    return DefaultOutfitResponse(outfit_description=DEFAULT_OUTFIT_DESCRIPTION)
