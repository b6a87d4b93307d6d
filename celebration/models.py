"""Celebration image Pydantic models."""
from pydantic import BaseModel, Field


class CelebrationRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Source photo as a base64 image data URL")
    outfit_description: str = Field("", description="Desired outfit; blank uses the default outfit")


class CelebrationResponse(BaseModel):
    image_url: str = Field(..., description="Generated image as a base64 data URL")
    mime_type: str = Field(..., description="MIME type of the generated image")


class DefaultOutfitResponse(BaseModel):
    outfit_description: str
