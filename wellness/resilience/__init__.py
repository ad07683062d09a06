"""Resilience patterns for external API calls

Provides fallback orchestration so that a failing upstream degrades to a
canned response instead of a hard failure.
"""

from wellness.resilience.fallback import execute_with_fallbacks, FallbackStrategy

__all__ = [
    "execute_with_fallbacks",
    "FallbackStrategy",
]
