"""Vhost rules and tables — pairing host patterns with handlers.

A VhostRule owns one VhostMatcher and the handler to invoke when it
matches. A VhostTable evaluates rules in order with first-match-wins
semantics and an optional on_no_match fallback handler.

The handler is opaque here: rules validate that it is callable but never
call it. Invoking it (and deciding what a miss means) belongs to the
adapter that owns the request, e.g. vhost.http.VhostDispatcher.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from vhost._errors import InvalidArgumentError, TooManyRulesError
from vhost._matcher import MatchResult, VhostMatcher

MAX_RULES = 256

type Handler = Callable[..., Any]


def _check_handler(handler: Any) -> None:
    if handler is None:
        msg = "argument handler is required"
        raise InvalidArgumentError(msg)
    if not callable(handler):
        msg = f"argument handler must be callable, got {type(handler).__name__}"
        raise InvalidArgumentError(msg)


@dataclass(frozen=True, slots=True)
class VhostRule[H: Handler]:
    """A compiled host pattern set bound to a handler.

    Raises:
        InvalidArgumentError: If hosts is missing or empty, a pattern does
            not compile, or handler is missing or not callable.
    """

    hosts: Any
    handler: H
    matcher: VhostMatcher = field(init=False, repr=False)

    def __post_init__(self) -> None:
        matcher = VhostMatcher(self.hosts)
        _check_handler(self.handler)
        object.__setattr__(self, "hosts", matcher.hosts)
        object.__setattr__(self, "matcher", matcher)

    def match(self, host: str | None) -> MatchResult | None:
        return self.matcher.match(host)


def vhost[H: Handler](hosts: Any, handler: H) -> VhostRule[H]:
    """Create a vhost rule.

    >>> rule = vhost("*.example.com", lambda *args: None)
    >>> rule.match("api.example.com:443").captures
    ('api',)
    """
    return VhostRule(hosts, handler)


@dataclass(frozen=True, slots=True)
class Dispatch[H: Handler]:
    """Where a request goes: the handler to call and the match that chose it.

    For the on_no_match fallback, rule and result are None.
    """

    handler: H
    rule: VhostRule[H] | None = None
    result: MatchResult | None = None


@dataclass(frozen=True, slots=True)
class VhostTable[H: Handler]:
    """Ordered vhost rules with first-match-wins semantics.

    INV: later rules are never consulted once an earlier rule matches.
    """

    rules: tuple[VhostRule[H], ...]
    on_no_match: H | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        if len(self.rules) > MAX_RULES:
            raise TooManyRulesError(len(self.rules), MAX_RULES)
        if self.on_no_match is not None:
            _check_handler(self.on_no_match)

    def resolve(self, host: str | None) -> Dispatch[H] | None:
        """Pick the handler for a Host header.

        Returns None if no rule matches and there is no fallback.
        """
        for rule in self.rules:
            result = rule.match(host)
            if result is not None:
                return Dispatch(handler=rule.handler, rule=rule, result=result)
        if self.on_no_match is not None:
            return Dispatch(handler=self.on_no_match)
        return None

    def __len__(self) -> int:
        return len(self.rules)
