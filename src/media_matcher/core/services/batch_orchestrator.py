"""Sequential batch orchestration with per-chunk failure isolation."""

from typing import Awaitable, Callable, Iterator, List, Sequence, TypeVar

from ...infrastructure.logging import LoggerMixin
from ...utils import ParseError
from ..models import Batch, ChunkOutcome

T = TypeVar("T")
R = TypeVar("R")

Pipeline = Callable[[Batch[T]], Awaitable[List[R]]]


def split_batches(items: Sequence[T], chunk_size: int) -> Iterator[Batch[T]]:
    """Split items into contiguous batches of at most ``chunk_size``.

    Args:
        items: Ordered input items.
        chunk_size: Maximum batch size.

    Yields:
        Batches in input order.

    Raises:
        ValueError: If chunk_size is not positive.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    for ordinal, offset in enumerate(range(0, len(items), chunk_size), start=1):
        yield Batch(ordinal=ordinal, offset=offset, items=items[offset : offset + chunk_size])


class BatchOrchestrator(LoggerMixin):
    """Runs a pipeline over an input sequence one chunk at a time.

    Chunks run strictly sequentially. A chunk whose pipeline raises
    contributes no results and the run continues with the next chunk.
    """

    async def run(
        self,
        items: Sequence[T],
        chunk_size: int,
        pipeline: Pipeline,
        label: str = "batch",
    ) -> List[R]:
        """Run the pipeline over all chunks and concatenate results.

        Args:
            items: Ordered input items.
            chunk_size: Maximum chunk size.
            pipeline: Async callable producing accepted results for one batch.
            label: Operation name for log messages.

        Returns:
            Results of every successful chunk, in chunk order.
        """
        outcomes = await self.run_detailed(items, chunk_size, pipeline, label)

        results: List[R] = []
        for outcome in outcomes:
            results.extend(outcome.results)
        return results

    async def run_detailed(
        self,
        items: Sequence[T],
        chunk_size: int,
        pipeline: Pipeline,
        label: str = "batch",
    ) -> List[ChunkOutcome[R]]:
        """Run the pipeline and report each chunk's outcome.

        Args:
            items: Ordered input items.
            chunk_size: Maximum chunk size.
            pipeline: Async callable producing accepted results for one batch.
            label: Operation name for log messages.

        Returns:
            One outcome per chunk, in chunk order.
        """
        outcomes: List[ChunkOutcome[R]] = []

        for batch in split_batches(items, chunk_size):
            outcome: ChunkOutcome[R] = ChunkOutcome(ordinal=batch.ordinal, size=len(batch))
            try:
                outcome.results = list(await pipeline(batch))
            except ParseError as e:
                outcome.error = str(e)
                self.logger.warning(f"{label} chunk {batch.ordinal} returned no usable data: {e}")
            except Exception as e:
                outcome.error = str(e) or e.__class__.__name__
                self.logger.error(f"{label} chunk {batch.ordinal} failed: {outcome.error}")
            outcomes.append(outcome)

        return outcomes
