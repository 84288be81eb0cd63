"""VhostMatcher — Host header to MatchResult.

Extracts the bare hostname from a raw Host header and runs it through a
compiled pattern set. Absent or malformed headers never raise: they simply
produce no match (None).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from vhost._compiler import CompiledMatcher, compile_host_patterns
from vhost._errors import InvalidArgumentError
from vhost._patterns import host_patterns

if TYPE_CHECKING:
    from collections.abc import Iterator

    from vhost._patterns import HostPattern


def hostname_of(host: str | None) -> str | None:
    """Strip the port from a Host header value.

    A leading ``[`` marks an IPv6 literal: colons up to the closing ``]``
    belong to the address and the brackets are kept.

    >>> hostname_of("tobi.com:8080")
    'tobi.com'
    >>> hostname_of("[::1]:8080")
    '[::1]'
    """
    if not isinstance(host, str) or not host:
        return None

    offset = host.find("]") + 1 if host[0] == "[" else 0
    index = host.find(":", offset)
    hostname = host[:index] if index != -1 else host
    return hostname or None


@dataclass(frozen=True, slots=True)
class MatchResult:
    """The outcome of a successful vhost match.

    Behaves as a read-only sequence of captures, so ``len(result)`` is the
    capture count and ``result[0]`` the first captured label.
    """

    host: str
    hostname: str
    captures: tuple[str | None, ...] = ()
    named: Mapping[str, str | None] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not self.hostname:
            msg = "match result requires a non-empty hostname"
            raise InvalidArgumentError(msg)
        if not isinstance(self.named, MappingProxyType):
            object.__setattr__(self, "named", MappingProxyType(dict(self.named)))

    @property
    def capture_count(self) -> int:
        return len(self.captures)

    def __len__(self) -> int:
        return len(self.captures)

    def __getitem__(self, index: int) -> str | None:
        return self.captures[index]

    def __iter__(self) -> Iterator[str | None]:
        return iter(self.captures)


@dataclass(frozen=True, slots=True)
class VhostMatcher:
    """Matches Host headers against a pattern set compiled at construction.

    ``hosts`` accepts a string, a compiled regular expression, a
    HostPattern, or a list of those; it is normalized to a tuple.

    Raises:
        InvalidArgumentError: If hosts is missing, empty, or does not compile.
    """

    hosts: tuple[HostPattern, ...]
    compiled: CompiledMatcher = field(init=False, repr=False)

    def __post_init__(self) -> None:
        patterns = host_patterns(self.hosts)
        object.__setattr__(self, "hosts", patterns)
        object.__setattr__(self, "compiled", compile_host_patterns(patterns))

    def match(self, host: Any) -> MatchResult | None:
        """Match a raw Host header value. Returns None when nothing matches."""
        hostname = hostname_of(host)
        if hostname is None:
            return None

        m = self.compiled.match(hostname)
        if m is None:
            return None

        return MatchResult(
            host=host,
            hostname=hostname,
            captures=tuple(m.groups()),
            named=m.groupdict(),
        )

    def matches(self, host: Any) -> bool:
        return self.match(host) is not None
