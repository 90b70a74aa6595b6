"""Core service implementations."""

from .batch_orchestrator import BatchOrchestrator, split_batches
from .confidence_gate import (
    CHANNEL_MATCH_GATE,
    IDENTIFICATION_GATE,
    Comparator,
    ConfidenceGate,
    accept,
)
from .llm_providers import BaseLLMProvider, OllamaProvider, OpenAIProvider, create_provider
from .llm_service import LLMService
from .prompt_builder import PromptBuilder
from .response_parser import JsonShape, ParseFailure, ResponseParser

__all__ = [
    "BatchOrchestrator",
    "split_batches",
    "ConfidenceGate",
    "Comparator",
    "accept",
    "IDENTIFICATION_GATE",
    "CHANNEL_MATCH_GATE",
    "BaseLLMProvider",
    "OpenAIProvider",
    "OllamaProvider",
    "create_provider",
    "LLMService",
    "PromptBuilder",
    "ResponseParser",
    "JsonShape",
    "ParseFailure",
]
