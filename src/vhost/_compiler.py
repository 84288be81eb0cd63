"""Compile a host pattern set into one anchored, case-insensitive regex.

Each pattern becomes one non-capturing alternative:

    WildcardHost("*.example.com")  ->  (?:([^.]+)\\.example\\.com)
    RegexHost("^api-(\\d+)")       ->  (?:api-(\\d+))

and the whole set is joined as ``(?i)^(?:alt1|alt2|...)$``. Capture groups
are numbered left-to-right across all alternatives; when one alternative
matches, the groups of every other alternative are None.

The combined pattern is compiled with ``google-re2``, which guarantees
linear-time matching on untrusted Host headers. RE2 rejects backreferences
and lookaround, so regex hosts using them fail at compile time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

from vhost._errors import InvalidArgumentError
from vhost._patterns import RegexHost, WildcardHost

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vhost._patterns import HostPattern

_ESCAPED_CHARS = frozenset(".+?^=!:${}()|[]/\\")
_WILDCARD_GROUP = "([^.]+)"


def escape_wildcard(text: str) -> str:
    """Escape regex metacharacters, then turn each ``*`` into a label group."""
    escaped = "".join("\\" + c if c in _ESCAPED_CHARS else c for c in text)
    return escaped.replace("*", _WILDCARD_GROUP)


def strip_anchors(source: str) -> str:
    """Remove one outermost ``^`` and one unescaped trailing ``$``.

    Only the first and last characters are inspected. Anchors nested in
    groups or alternations are left alone.
    """
    if source.startswith("^"):
        source = source[1:]
    if source.endswith("$"):
        backslashes = len(source) - 1 - len(source[:-1].rstrip("\\"))
        if backslashes % 2 == 0:
            source = source[:-1]
    return source


def alternative_source(pattern: HostPattern) -> str:
    """Regex source for one pattern, wrapped in a non-capturing group."""
    match pattern:
        case WildcardHost(text=text):
            source = escape_wildcard(text)
        case RegexHost(pattern=regex):
            source = strip_anchors(regex)
        case _:
            msg = f"unsupported host pattern: {pattern!r}"
            raise InvalidArgumentError(msg)
    return f"(?:{source})"


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """One compiled regex standing for a whole host pattern set.

    Raises:
        InvalidArgumentError: If the set is empty or the combined source
            is not valid RE2 syntax.
    """

    patterns: tuple[HostPattern, ...]
    source: str = field(init=False)
    _compiled: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.patterns:
            msg = "argument hosts must contain at least one pattern"
            raise InvalidArgumentError(msg)
        alternatives = "|".join(alternative_source(p) for p in self.patterns)
        source = f"(?i)^(?:{alternatives})$"
        try:
            compiled = re2.compile(source)
        except re2.error as e:
            msg = f"invalid host pattern {list(self.patterns)!r}: {e}"
            raise InvalidArgumentError(msg) from e
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "_compiled", compiled)

    @property
    def group_count(self) -> int:
        """Number of capture groups across all alternatives."""
        return self._compiled.groups

    def match(self, hostname: str) -> re2._Match | None:
        """Match the whole hostname, returning the RE2 match or None."""
        return self._compiled.search(hostname)


def compile_host_patterns(patterns: Sequence[HostPattern]) -> CompiledMatcher:
    """Compile a pattern set. The set must already be normalized."""
    return CompiledMatcher(tuple(patterns))
