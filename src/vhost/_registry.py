"""Handler registry for config-driven vhost tables.

Config files name handlers; the registry maps those names to callables and
turns a VhostConfig into a compiled VhostTable.

Example::

    registry = (
        HandlerRegistryBuilder()
        .handler("api", api_app)
        .handler("www", www_app)
        .build()
    )
    table = registry.load_table(load_vhost_config("vhosts.yaml"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

from vhost._errors import (
    InvalidArgumentError,
    PatternTooLongError,
    TooManyRulesError,
    UnknownHandlerError,
)
from vhost._rule import MAX_RULES, Handler, VhostRule, VhostTable

if TYPE_CHECKING:
    from vhost._config import HostConfig, RuleConfig, VhostConfig

logger = structlog.get_logger()

MAX_PATTERN_LENGTH = 8192
MAX_REGEX_PATTERN_LENGTH = 4096


class HandlerRegistryBuilder:
    """Builder for constructing a HandlerRegistry.

    Register handlers by name, then call build() to produce an immutable
    HandlerRegistry.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def handler(self, name: str, handler: Handler) -> HandlerRegistryBuilder:
        """Register a handler under a name. Re-registering replaces it."""
        if not isinstance(name, str) or not name:
            msg = "handler name must be a non-empty string"
            raise InvalidArgumentError(msg)
        if not callable(handler):
            msg = f"handler {name!r} must be callable, got {type(handler).__name__}"
            raise InvalidArgumentError(msg)
        self._handlers[name] = handler
        return self

    def build(self) -> HandlerRegistry:
        """Freeze the registry. No further registration is possible."""
        return HandlerRegistry(_handlers=MappingProxyType(dict(self._handlers)))


@dataclass(frozen=True, slots=True)
class HandlerRegistry:
    """Immutable name → handler mapping.

    Constructed via HandlerRegistryBuilder. Use load_table() to compile
    config into a runtime VhostTable.
    """

    _handlers: MappingProxyType[str, Handler] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_table(self, config: VhostConfig) -> VhostTable[Handler]:
        """Load a VhostTable from configuration.

        Raises:
            UnknownHandlerError: a handler name is not registered
            TooManyRulesError: too many rules
            PatternTooLongError: a pattern exceeds its length limit
            InvalidArgumentError: a pattern does not compile
        """
        if len(config.rules) > MAX_RULES:
            raise TooManyRulesError(len(config.rules), MAX_RULES)

        rules = tuple(self._load_rule(rc) for rc in config.rules)

        on_no_match = None
        if config.on_no_match is not None:
            on_no_match = self.get(config.on_no_match)

        table = VhostTable(rules=rules, on_no_match=on_no_match)
        logger.info(
            "vhost table loaded",
            rules=len(rules),
            on_no_match=config.on_no_match,
        )
        return table

    def get(self, name: str) -> Handler:
        """Look up a handler by name."""
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownHandlerError(name, list(self._handlers.keys()))
        return handler

    @property
    def handler_count(self) -> int:
        """Number of registered handlers."""
        return len(self._handlers)

    def contains(self, name: str) -> bool:
        return name in self._handlers

    def names(self) -> list[str]:
        """Return all registered handler names (sorted)."""
        return sorted(self._handlers.keys())

    def _load_rule(self, config: RuleConfig) -> VhostRule[Handler]:
        for host in config.hosts:
            _check_pattern_length(host)
        handler = self.get(config.handler)
        return VhostRule(tuple(h.to_pattern() for h in config.hosts), handler)


def _check_pattern_length(host: HostConfig) -> None:
    """Enforce pattern length limits on host entries."""
    max_ = MAX_REGEX_PATTERN_LENGTH if host.kind == "regex" else MAX_PATTERN_LENGTH
    if len(host.value) > max_:
        raise PatternTooLongError(host.value, max_)
