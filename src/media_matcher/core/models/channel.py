"""Channel matching data models."""

from pydantic import BaseModel, Field


class ChannelMatch(BaseModel):
    """EPG channel id matched to a source channel name."""

    epg_id: str = Field(..., description="EPG channel identifier")
    source_name: str = Field(..., description="Source channel name")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Model-reported confidence")
