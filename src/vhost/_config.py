"""Config types for declarative vhost tables.

Config-driven construction path:
  dict / YAML → parse_vhost_config() → VhostConfig → HandlerRegistry.load_table() → VhostTable

Accepted shape::

    rules:
      - hosts: ["*.example.com", {regex: "api-(\\d+)\\.example\\.com"}]
        handler: api
      - hosts: example.com
        handler: www
    on_no_match: not_found

Handlers are referenced by name; the registry resolves names to callables.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import yaml

from vhost._errors import ConfigParseError
from vhost._patterns import RegexHost, WildcardHost

if TYPE_CHECKING:
    from vhost._patterns import HostPattern

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class HostConfig:
    """One host pattern entry: a wildcard string or a regex source."""

    kind: Literal["wildcard", "regex"]
    value: str

    def to_pattern(self) -> HostPattern:
        if self.kind == "regex":
            return RegexHost(self.value)
        return WildcardHost(self.value)


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Config for a VhostRule: host patterns plus a handler name."""

    hosts: tuple[HostConfig, ...]
    handler: str


@dataclass(frozen=True, slots=True)
class VhostConfig:
    """Configuration for a VhostTable.

    Load into a runtime table via HandlerRegistry.load_table().
    """

    rules: tuple[RuleConfig, ...]
    on_no_match: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_HOST_KINDS = ("wildcard", "regex")


def parse_vhost_config(data: dict[str, Any]) -> VhostConfig:
    """Parse a dict into a VhostConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_rules = data.get("rules")
    if raw_rules is None:
        msg = "missing required field 'rules'"
        raise ConfigParseError(msg)
    if not isinstance(raw_rules, list):
        msg = f"'rules' must be a list, got {type(raw_rules).__name__}"
        raise ConfigParseError(msg)

    rules = tuple(_parse_rule(r) for r in raw_rules)

    on_no_match = data.get("on_no_match")
    if on_no_match is not None and not isinstance(on_no_match, str):
        msg = f"'on_no_match' must be a handler name, got {type(on_no_match).__name__}"
        raise ConfigParseError(msg)

    return VhostConfig(rules=rules, on_no_match=on_no_match)


def load_vhost_config(path: str | Path) -> VhostConfig:
    """Read a YAML file and parse it into a VhostConfig.

    Raises:
        ConfigParseError: If the file is not valid YAML or is malformed.
    """
    with Path(path).open() as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"invalid YAML in {path}: {e}"
            raise ConfigParseError(msg) from e
    return parse_vhost_config(data)


def _parse_rule(data: dict[str, Any]) -> RuleConfig:
    """Parse a single rule dict."""
    if not isinstance(data, dict):
        msg = f"rule must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "hosts" not in data:
        msg = "rule missing required field 'hosts'"
        raise ConfigParseError(msg)
    if "handler" not in data:
        msg = "rule missing required field 'handler'"
        raise ConfigParseError(msg)

    handler = data["handler"]
    if not isinstance(handler, str) or not handler:
        msg = f"rule 'handler' must be a non-empty string, got {handler!r}"
        raise ConfigParseError(msg)

    raw_hosts = data["hosts"]
    if not isinstance(raw_hosts, list):
        raw_hosts = [raw_hosts]
    if not raw_hosts:
        msg = "rule 'hosts' must contain at least one pattern"
        raise ConfigParseError(msg)

    hosts = tuple(_parse_host(h) for h in raw_hosts)
    return RuleConfig(hosts=hosts, handler=handler)


def _parse_host(data: str | dict[str, Any]) -> HostConfig:
    """Parse a host entry: a bare string or a single-key kind dict."""
    if isinstance(data, str):
        if not data:
            msg = "host pattern must not be empty"
            raise ConfigParseError(msg)
        return HostConfig(kind="wildcard", value=data)

    if not isinstance(data, dict):
        msg = f"host must be a string or dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    kinds = [k for k in _HOST_KINDS if k in data]
    if len(kinds) != 1 or len(data) != 1:
        keys = sorted(str(k) for k in data)
        msg = f"host must contain exactly one of {list(_HOST_KINDS)}, got keys: {keys}"
        raise ConfigParseError(msg)

    kind = kinds[0]
    value = data[kind]
    if not isinstance(value, str):
        msg = f"host {kind} value must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return HostConfig(kind=kind, value=value)
