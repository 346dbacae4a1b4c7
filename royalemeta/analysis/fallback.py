"""
Ordered fallback chain.

Runs strategies in priority order and returns the first acceptable result.
A strategy that raises one of the recoverable exception types, or whose
result is rejected, counts as a non-match; the next strategy is tried.
Strategies after the first success are never started.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from royalemeta.models.failure import TransportFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Strategy(Generic[T]):
    """A labelled way of producing a value."""

    label: str
    run: Callable[[], Awaitable[T | None]]


@dataclass
class FallbackResult(Generic[T]):
    """Outcome of a fallback chain."""

    value: T | None = None
    source: str | None = None
    attempted: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.source is not None


def _non_empty(value: object) -> bool:
    return bool(value)


async def first_success(
    strategies: Sequence[Strategy[T]],
    accept: Callable[[T], bool] = _non_empty,
    recoverable: tuple[type[Exception], ...] = (TransportFailure,),
) -> FallbackResult[T]:
    """
    Try each strategy in order until one yields an accepted value.

    Args:
        strategies: Strategies in priority order
        accept: Predicate a value must satisfy to count as success
            (default: truthy, so None and empty lists are rejected)
        recoverable: Exception types treated as a non-match

    Returns:
        FallbackResult; `ok` is False when every strategy failed
    """
    result: FallbackResult[T] = FallbackResult()

    for strategy in strategies:
        result.attempted.append(strategy.label)
        try:
            value = await strategy.run()
        except recoverable as e:
            logger.debug("Strategy %s failed: %s", strategy.label, e)
            continue

        if value is not None and accept(value):
            result.value = value
            result.source = strategy.label
            return result

        logger.debug("Strategy %s produced no usable result", strategy.label)

    return result
