"""Core data models."""

from .batch import Batch, ChunkOutcome
from .channel import ChannelMatch
from .diagnostics import ConnectionTestResult
from .identification import IdentificationRequest, IdentificationResult, MediaType
from .provider import ProviderConfig, ProviderType, QueryOptions

__all__ = [
    "Batch",
    "ChunkOutcome",
    "ChannelMatch",
    "ConnectionTestResult",
    "IdentificationRequest",
    "IdentificationResult",
    "MediaType",
    "ProviderConfig",
    "ProviderType",
    "QueryOptions",
]
