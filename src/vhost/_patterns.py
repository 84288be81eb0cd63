"""Host pattern types and argument normalization.

A pattern set is a non-empty tuple of HostPattern values. Callers may pass
plain strings, compiled regular expressions, HostPattern instances, or a
list mixing all of them; host_patterns() folds every accepted shape into
the same tuple form at the API boundary.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import re2

from vhost._errors import InvalidArgumentError

# Compiled pattern types whose ``.pattern`` source is accepted as a RegexHost.
# Flags set on the compiled object are not carried over.
_COMPILED_TYPES: tuple[type, ...] = (re.Pattern, type(re2.compile("")))


@dataclass(frozen=True, slots=True)
class WildcardHost:
    """A literal hostname where each ``*`` stands for one label fragment.

    ``*.example.com`` matches ``api.example.com`` but not
    ``a.b.example.com`` or ``example.com``.
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            msg = f"wildcard host must be a string, got {type(self.text).__name__}"
            raise InvalidArgumentError(msg)
        if not self.text:
            msg = "wildcard host must not be empty"
            raise InvalidArgumentError(msg)


@dataclass(frozen=True, slots=True)
class RegexHost:
    """A regular expression source matched against the whole hostname."""

    pattern: str

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str):
            msg = f"regex host must be a string, got {type(self.pattern).__name__}"
            raise InvalidArgumentError(msg)


type HostPattern = WildcardHost | RegexHost

# Everything host_patterns() accepts for a single element.
type HostLike = str | re.Pattern[str] | HostPattern


def host_pattern(value: Any) -> HostPattern:
    """Convert one accepted pattern value to a HostPattern."""
    match value:
        case WildcardHost() | RegexHost():
            return value
        case str():
            return WildcardHost(value)
        case _ if isinstance(value, _COMPILED_TYPES):
            return RegexHost(value.pattern)
        case _:
            msg = (
                "host pattern must be a string or a compiled regular expression, "
                f"got {type(value).__name__}"
            )
            raise InvalidArgumentError(msg)


def host_patterns(value: Any) -> tuple[HostPattern, ...]:
    """Normalize a pattern-set argument to a non-empty tuple.

    Accepts a single pattern value or a list/tuple of them.

    Raises:
        InvalidArgumentError: If the argument is missing, empty, or holds
            an unsupported element.
    """
    if value is None or (isinstance(value, str) and not value):
        msg = "argument hosts is required"
        raise InvalidArgumentError(msg)

    if isinstance(value, Sequence) and not isinstance(value, str):
        if not value:
            msg = "argument hosts must contain at least one pattern"
            raise InvalidArgumentError(msg)
        return tuple(host_pattern(v) for v in value)

    return (host_pattern(value),)
