"""Media identification data models."""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class MediaType(str, Enum):
    """Kind of media being identified."""

    MOVIE = "movie"
    SERIES = "series"

    @classmethod
    def parse(cls, value: object) -> "MediaType":
        """Parse a media type; anything other than a movie is a series."""
        if isinstance(value, MediaType):
            return value
        if isinstance(value, str) and value.strip().lower() == "movie":
            return cls.MOVIE
        return cls.SERIES


class IdentificationRequest(BaseModel):
    """A title to identify."""

    title: str = Field(..., min_length=1, description="Title as found in the source")
    year: Optional[int] = Field(None, description="Year hint")
    media_type: MediaType = Field(
        default=MediaType.SERIES,
        validation_alias=AliasChoices("media_type", "mediaType"),
        description="Movie or series",
    )
    source_language: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("source_language", "sourceLanguage"),
        description="Two-letter language code hint",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("media_type", mode="before")
    @classmethod
    def validate_media_type(cls, v: object) -> MediaType:
        """Treat anything other than a movie as a series."""
        return MediaType.parse(v)


class IdentificationResult(BaseModel):
    """Accepted identification of a title."""

    original_title: str = Field(..., description="Title that was submitted")
    english_title: str = Field(..., description="Original English title reported by the model")
    tmdb_id: Optional[int] = Field(None, description="TMDb numeric id")
    tmdb_type: Optional[str] = Field(None, description="TMDb type ('movie' or 'tv')")
    year: Optional[int] = Field(None, description="Release year")
    media_type: Optional[MediaType] = Field(None, description="Media type of the request")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Model-reported confidence")
