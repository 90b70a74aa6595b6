"""Extraction of structured data from LLM replies."""

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from ...infrastructure.logging import LoggerMixin
from ...utils import ParseError, clean_title_response, parse_tmdb_reference, snippet_context


class JsonShape(str, Enum):
    """Expected top-level JSON shape."""

    OBJECT = "object"
    ARRAY = "array"


_SHAPE_PATTERNS = {
    JsonShape.OBJECT: re.compile(r"\{.*\}", re.DOTALL),
    JsonShape.ARRAY: re.compile(r"\[.*\]", re.DOTALL),
}

_SHAPE_TYPES = {
    JsonShape.OBJECT: dict,
    JsonShape.ARRAY: list,
}


@dataclass(frozen=True)
class ParseFailure:
    """Why a reply could not be parsed.

    Attributes:
        reason: ``no_json``, ``invalid_json`` or ``wrong_shape``.
        context: Short description of the offending reply.
        detail: Decoder message, if any.
    """

    reason: str
    context: str
    detail: Optional[str] = None

    def to_error(self) -> ParseError:
        """Convert to an exception for callers that abort on failure."""
        message = f"{self.reason}: {self.context}"
        if self.detail:
            message = f"{message} ({self.detail})"
        return ParseError(message)


class ResponseParser(LoggerMixin):
    """Pulls JSON payloads and titles out of free-text model replies."""

    def extract(self, text: str, shape: JsonShape) -> Union[Any, ParseFailure]:
        """Extract a JSON value of the given shape from a reply.

        The first greedy brace (object) or bracket (array) match is parsed,
        so prose before and after the payload is ignored.

        Args:
            text: Raw reply text.
            shape: Expected top-level shape.

        Returns:
            Parsed value, or a ParseFailure.
        """
        text = text or ""
        match = _SHAPE_PATTERNS[shape].search(text)
        if not match:
            return self._fail("no_json", text, f"no JSON {shape.value} found")

        try:
            value = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            return self._fail("invalid_json", text, str(e))

        if not isinstance(value, _SHAPE_TYPES[shape]):
            return self._fail("wrong_shape", text, f"expected JSON {shape.value}")

        return value

    def extract_object(self, text: str) -> Union[dict, ParseFailure]:
        """Extract a single JSON object."""
        return self.extract(text, JsonShape.OBJECT)

    def extract_array(self, text: str) -> Union[list, ParseFailure]:
        """Extract a JSON array."""
        return self.extract(text, JsonShape.ARRAY)

    def clean_title(self, text: str) -> str:
        """Clean a plain-text title reply."""
        return clean_title_response(text)

    def parse_tmdb_reference(self, value: object) -> Tuple[Optional[str], Optional[int]]:
        """Parse a ``tv/<id>`` or ``movie/<id>`` reference."""
        return parse_tmdb_reference(value)

    def _fail(self, reason: str, text: str, detail: Optional[str]) -> ParseFailure:
        failure = ParseFailure(reason=reason, context=snippet_context(text), detail=detail)
        self.logger.warning(f"Could not parse LLM reply ({reason}): {failure.context}")
        return failure
