"""Bounded traversal of parent locale, alias and TZDB link chains.

Each of these chains is finite on well-formed CLDR and tzdata sources. A
guard counts the steps taken and raises DepthLimitExceededError once a
chain runs past its bound, so a malformed source cannot hang a run or
surface as a RecursionError.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from ldmlconverter.constants import MAX_DEPTH
from ldmlconverter.core.errors import DepthLimitExceededError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Step counter for one chain walk.

    Recursive walks (parent locale resolution) enter the guard once per
    level; iterative walks (alias and link chains) call ``increment``
    once per hop:

        guard = DepthGuard(label="alias chain")
        while key in aliases:
            guard.increment()
            key = aliases[key]

    Attributes:
        max_depth: Steps allowed before the walk fails (clamped to the
            interpreter recursion limit)
        label: Chain name used in the error message
        current_depth: Steps taken so far
    """

    max_depth: int = MAX_DEPTH
    label: str = "recursion"
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # __exit__ is skipped when __enter__ raises, so check before counting.
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Steps taken so far."""
        return self.current_depth

    def check(self) -> None:
        """Raise DepthLimitExceededError if no step is left."""
        if self.current_depth >= self.max_depth:
            msg = f"Maximum {self.label} depth ({self.max_depth}) exceeded"
            raise DepthLimitExceededError(msg)

    def increment(self) -> None:
        """Take one step of an iterative chain walk.

        Raises:
            DepthLimitExceededError: If the chain is longer than max_depth
        """
        self.check()
        self.current_depth += 1


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Bound a depth by the interpreter recursion limit.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Frames kept free for the callers of the walk

    Returns:
        ``requested_depth``, or the largest depth the stack can hold
    """
    limit = sys.getrecursionlimit()
    safe_depth = limit - reserve_frames
    if requested_depth <= safe_depth:
        return requested_depth
    logger.warning(
        "Requested depth %d exceeds the recursion limit (%d). Clamping to %d.",
        requested_depth,
        limit,
        safe_depth,
    )
    return safe_depth
