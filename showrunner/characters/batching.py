"""
Batch planning for per-character generation calls.
"""

from typing import List, Sequence, TypeVar

from showrunner.core.constants import DEFAULT_BATCH_SIZE

T = TypeVar("T")


def partition(identities: Sequence[T], batch_size: int = DEFAULT_BATCH_SIZE) -> List[List[T]]:
    """
    Split an ordered registry into contiguous batches of at most batch_size.

    Raises:
        ValueError: If batch_size is less than 1
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    items = list(identities)
    return [items[i:i + batch_size] for i in range(0, len(items), batch_size)]
