"""Fallback strategies for API failures

Provides orchestration for trying multiple strategies in sequence until one succeeds.
Used to implement graceful degradation when the chat relay fails.
"""

import logging
from typing import Any, Callable, List, Tuple, Type, TypeVar
from dataclasses import dataclass

from wellness.monitoring.metrics import record_fallback

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class FallbackStrategy:
    """
    Defines a fallback strategy with priority ordering.

    Attributes:
        name: Human-readable name for logging
        handler: Async callable that implements the strategy
        priority: Priority level (lower = higher priority, 1 = primary)
    """
    name: str
    handler: Callable[..., T]
    priority: int


async def execute_with_fallbacks(
    strategies: List[FallbackStrategy],
    *args: Any,
    fallback_on: Tuple[Type[BaseException], ...] = (Exception,),
    **kwargs: Any
) -> T:
    """
    Execute strategies in priority order until one succeeds.

    Tries each strategy in turn. If one succeeds, returns immediately.
    Only exceptions listed in ``fallback_on`` move on to the next strategy;
    anything else propagates. If all fail, raises the last exception.

    Args:
        strategies: List of FallbackStrategy to try
        *args, **kwargs: Arguments to pass to each strategy handler
        fallback_on: Exception types that trigger the next strategy

    Returns:
        Result from first successful strategy

    Example:
        strategies = [
            FallbackStrategy("chat_webhook", relay.reply, priority=1),
            FallbackStrategy("fallback_reply", canned_reply, priority=2),
        ]
        reply = await execute_with_fallbacks(
            strategies, message, history, fallback_on=(UpstreamUnavailableError,)
        )
    """
    if not strategies:
        raise ValueError("At least one fallback strategy is required")

    # Sort strategies by priority (lower priority number = try first)
    sorted_strategies = sorted(strategies, key=lambda s: s.priority)

    last_exception = None
    primary_api = sorted_strategies[0].name

    for strategy in sorted_strategies:
        is_primary = strategy is sorted_strategies[0]
        try:
            logger.debug(f"[FALLBACK] Trying strategy: {strategy.name}")

            result = await strategy.handler(*args, **kwargs)

            if not is_primary:
                logger.info(f"[FALLBACK] Strategy '{strategy.name}' succeeded")
                record_fallback(primary_api, strategy.name, success=True)

            return result

        except fallback_on as e:
            logger.warning(
                f"[FALLBACK] Strategy '{strategy.name}' failed: "
                f"{type(e).__name__}: {e}"
            )
            last_exception = e

            if not is_primary:
                record_fallback(primary_api, strategy.name, success=False)

    # All strategies failed
    logger.error(
        f"[FALLBACK] All {len(sorted_strategies)} fallback strategies exhausted"
    )
    raise last_exception
