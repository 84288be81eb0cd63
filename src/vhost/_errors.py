"""Error types for vhost.

Every failure surfaces synchronously at construction or config load time.
A Host header that matches nothing is not an error: matchers return None.
"""

from __future__ import annotations


class VhostError(Exception):
    """Base class for all vhost errors."""


class InvalidArgumentError(VhostError, ValueError):
    """A constructor argument is missing, of the wrong type, or invalid."""


class TooManyRulesError(InvalidArgumentError):
    """A vhost table has too many rules (width-based limit)."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many vhost rules: {count} exceeds maximum {max_}")


class PatternTooLongError(InvalidArgumentError):
    """A host pattern exceeds the length limit."""

    def __init__(self, pattern: str, max_: int) -> None:
        self.pattern = pattern
        self.length = len(pattern)
        self.max = max_
        super().__init__(f"pattern length {self.length} exceeds maximum {max_}")


class UnknownHandlerError(VhostError):
    """A handler name was not found in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown handler: {name!r} (registered: {registered})"
        else:
            msg = f"unknown handler: {name!r} (no handlers are registered)"
        super().__init__(msg)


class ConfigParseError(VhostError):
    """Error parsing a config dict into config types."""
