"""Test utilities for vhost.

Provides a minimal WSGI environ builder and a recording WSGI app for use
in tests and examples, without running a server.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


def make_environ(host: str | None = None, path: str = "/", method: str = "GET") -> dict[str, Any]:
    """Build a minimal WSGI environ. Omit host to send no Host header."""
    environ: dict[str, Any] = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "SERVER_NAME": "localhost",
        "SERVER_PORT": "80",
        "wsgi.url_scheme": "http",
    }
    if host is not None:
        environ["HTTP_HOST"] = host
    return environ


@dataclass
class RecordingApp:
    """WSGI app that answers 200 with a fixed body and records each environ.

    >>> app = RecordingApp("tobi")
    >>> b"".join(app({}, lambda status, headers: None))
    b'tobi'
    """

    body: str
    calls: list[dict[str, Any]] = field(default_factory=list)

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        self.calls.append(environ)
        data = self.body.encode()
        start_response(
            "200 OK",
            [("Content-Type", "text/plain"), ("Content-Length", str(len(data)))],
        )
        return [data]


@dataclass
class Response:
    """Status, headers and body collected from one WSGI call."""

    status: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    @property
    def status_code(self) -> int:
        return int(self.status.split(" ", 1)[0])


def call_wsgi(app: Callable[..., Iterable[bytes]], environ: dict[str, Any]) -> Response:
    """Invoke a WSGI app and collect its response."""
    response = Response()

    def start_response(status: str, headers: list[tuple[str, str]], exc_info: Any = None) -> None:
        response.status = status
        response.headers = headers

    response.body = b"".join(app(environ, start_response))
    return response
