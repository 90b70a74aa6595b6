"""Provider diagnostics models."""

from typing import Optional

from pydantic import BaseModel, Field


class ConnectionTestResult(BaseModel):
    """Outcome of a provider connection test."""

    success: bool = Field(..., description="Whether the provider answered as expected")
    provider: str = Field(..., description="Provider name")
    model: Optional[str] = Field(None, description="Model used for the test")
    response: Optional[str] = Field(None, description="Head of the provider reply")
    error: Optional[str] = Field(None, description="Error message if the test failed")
