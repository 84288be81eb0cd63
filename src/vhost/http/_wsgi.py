"""WSGI adapter — dispatch requests to per-host WSGI applications.

The matched MatchResult is stored under ``environ["vhost"]`` before the
handler runs. Requests that no rule accepts go to the table's
on_no_match handler, then to ``fallback``, then to a plain 404.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from vhost._rule import VhostRule, VhostTable

logger = structlog.get_logger()

ENVIRON_KEY = "vhost"

type StartResponse = Callable[..., Any]
type WSGIApp = Callable[[dict[str, Any], StartResponse], Iterable[bytes]]


def not_found(environ: dict[str, Any], start_response: StartResponse) -> list[bytes]:
    body = b"Not Found"
    start_response(
        "404 Not Found",
        [("Content-Type", "text/plain"), ("Content-Length", str(len(body)))],
    )
    return [body]


@dataclass(frozen=True, slots=True)
class VhostDispatcher:
    """WSGI application routing on the Host header.

    Example::

        app = VhostDispatcher.from_rules(
            vhost("api.example.com", api_app),
            vhost("*.example.com", site_app),
        )
    """

    table: VhostTable[WSGIApp]
    fallback: WSGIApp = not_found

    @classmethod
    def from_rules(
        cls, *rules: VhostRule[WSGIApp], fallback: WSGIApp = not_found
    ) -> VhostDispatcher:
        return cls(VhostTable(rules), fallback)

    def __call__(
        self, environ: dict[str, Any], start_response: StartResponse
    ) -> Iterable[bytes]:
        host = environ.get("HTTP_HOST")
        dispatch = self.table.resolve(host)

        if dispatch is None:
            logger.debug("vhost not matched", host=host)
            return self.fallback(environ, start_response)

        if dispatch.result is not None:
            environ[ENVIRON_KEY] = dispatch.result
            logger.debug(
                "vhost matched",
                hostname=dispatch.result.hostname,
                captures=len(dispatch.result),
            )
        else:
            logger.debug("vhost fallback", host=host)
        return dispatch.handler(environ, start_response)
