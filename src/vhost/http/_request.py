"""HttpRequest — Simple HTTP request context for vhost routing.

Holds method, path, headers (case-insensitive), and the MatchResult of
the vhost rule that accepted the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vhost._matcher import MatchResult
    from vhost._rule import Handler, VhostTable


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """HTTP request context for routing.

    Headers are stored with lowercased keys for case-insensitive lookup.
    ``vhost`` is None until a rule matches; see route_request().
    """

    method: str = "GET"
    path: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    vhost: MatchResult | None = None

    _lower_headers: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_lower_headers",
            {k.lower(): v for k, v in self.headers.items()},
        )

    @property
    def host(self) -> str | None:
        """The raw Host header, port included."""
        return self._lower_headers.get("host")

    def header(self, name: str) -> str | None:
        """Get a header value by name (case-insensitive)."""
        return self._lower_headers.get(name.lower())

    def with_vhost(self, result: MatchResult) -> HttpRequest:
        """Return a copy of this request carrying a match result."""
        return replace(self, vhost=result)


def route_request[H: Handler](
    table: VhostTable[H], request: HttpRequest
) -> tuple[H, HttpRequest] | None:
    """Resolve a request through a vhost table.

    Returns the handler to invoke and the request to pass it (with
    ``vhost`` populated when a rule matched), or None when nothing
    matched and the table has no fallback.
    """
    dispatch = table.resolve(request.host)
    if dispatch is None:
        return None
    if dispatch.result is None:
        return dispatch.handler, request
    return dispatch.handler, request.with_vhost(dispatch.result)
