"""
Timing helpers.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass
class Timer:
    """Elapsed time captured by the timer() context manager"""

    start: float = 0.0
    end: Optional[float] = None

    @property
    def elapsed_ms(self) -> int:
        """Elapsed milliseconds (running value while inside the block)"""
        end = self.end if self.end is not None else time.perf_counter()
        return int((end - self.start) * 1000)


@contextmanager
def timer(label: Optional[str] = None) -> Iterator[Timer]:
    """
    Measure the wall time of a block.

    Args:
        label: Optional name; when given the duration is logged at DEBUG

    Example:
        >>> with timer("smart-fit") as t:
        ...     result = get_smart_fit(image, (200, 200))
        >>> t.elapsed_ms
    """
    t = Timer(start=time.perf_counter())
    try:
        yield t
    finally:
        t.end = time.perf_counter()
        if label:
            logger.debug(f"{label} took {t.elapsed_ms} ms")
