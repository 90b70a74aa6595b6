"""Batch processing models."""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Batch(Generic[T]):
    """Contiguous slice of a larger input sequence.

    Attributes:
        ordinal: 1-based position of the batch in its run.
        offset: Index of the first item in the full input.
        items: Items in this batch.
    """

    ordinal: int
    offset: int
    items: Sequence[T]

    def __len__(self) -> int:
        return len(self.items)

    def item_at(self, index: object) -> Optional[T]:
        """Look up an item by the 1-based index a model reported.

        Integral floats (``2.0``) and digit strings (``"2"``) are accepted.
        """
        index = _coerce_index(index)
        if index is None:
            return None
        if not 1 <= index <= len(self.items):
            return None
        return self.items[index - 1]


@dataclass
class ChunkOutcome(Generic[R]):
    """Result of running the pipeline on one batch."""

    ordinal: int
    size: int
    results: List[R] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Check whether the chunk failed rather than producing no results."""
        return self.error is not None


def _coerce_index(value: object) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
