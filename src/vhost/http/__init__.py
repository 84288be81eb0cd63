"""vhost.http — HTTP adapters.

Provides the HttpRequest context with request routing, and a WSGI
application that dispatches to per-host WSGI apps.
"""

from vhost.http._request import HttpRequest, route_request
from vhost.http._wsgi import ENVIRON_KEY, VhostDispatcher, not_found

__all__ = [
    # Context
    "HttpRequest",
    "route_request",
    # WSGI
    "VhostDispatcher",
    "ENVIRON_KEY",
    "not_found",
]
