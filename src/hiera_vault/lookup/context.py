"""The host side of a lookup.

A host framework hands a ``LookupContext`` to every lookup. It owns caching,
interpolation and the explain channel; the lookup only calls into it.
"""

import logging
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class LookupContext(Protocol):
    """Capabilities a host must provide to ``lookup_key``."""

    def cache_has_key(self, key: str) -> bool: ...

    def cached_value(self, key: str) -> Any: ...

    def cache(self, key: str, value: Any) -> Any:
        """Store value for key and return it unchanged."""
        ...

    def not_found(self) -> None:
        """Signal that this lookup found nothing."""
        ...

    def explain(self, producer: Callable[[], str]) -> None:
        """Record a trace message; producer is only called when tracing is on."""
        ...

    def interpolate(self, value: Any) -> Any: ...


def explain(context: LookupContext, message: str, level: int = logging.DEBUG) -> None:
    """Send a message to the host's explain channel and the log."""
    logger.log(level, message)
    context.explain(lambda: message)


class SimpleLookupContext:
    """In-memory LookupContext for standalone use (CLI, scripts, tests).

    Values are cached per instance, interpolation is the identity, and
    explain messages are collected when ``explain_enabled`` is set.

    Example:
        >>> ctx = SimpleLookupContext(explain_enabled=True, echo=print)
        >>> lookup_key("db_password", options, ctx)
        >>> ctx.explanations
        ['[hiera-vault] Looking in path puppet/db_password', ...]
    """

    def __init__(self, explain_enabled: bool = False, echo: Callable[[str], None] | None = None):
        self.explain_enabled = explain_enabled
        self.echo = echo
        self.explanations: list[str] = []
        self.not_found_count = 0
        self._cache: dict[str, Any] = {}

    def cache_has_key(self, key: str) -> bool:
        return key in self._cache

    def cached_value(self, key: str) -> Any:
        return self._cache[key]

    def cache(self, key: str, value: Any) -> Any:
        self._cache[key] = value
        return value

    def not_found(self) -> None:
        self.not_found_count += 1

    def explain(self, producer: Callable[[], str]) -> None:
        if not self.explain_enabled:
            return
        message = producer()
        self.explanations.append(message)
        if self.echo:
            self.echo(message)

    def interpolate(self, value: Any) -> Any:
        return value
