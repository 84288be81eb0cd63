"""Tests for HandlerRegistryBuilder, HandlerRegistry and config loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from structlog.testing import capture_logs

from vhost import (
    MAX_PATTERN_LENGTH,
    MAX_REGEX_PATTERN_LENGTH,
    MAX_RULES,
    HandlerRegistry,
    HandlerRegistryBuilder,
    InvalidArgumentError,
    PatternTooLongError,
    TooManyRulesError,
    UnknownHandlerError,
    parse_vhost_config,
)

if TYPE_CHECKING:
    from vhost.testing import RecordingApp


class TestBuilder:
    def test_build_empty(self) -> None:
        registry = HandlerRegistryBuilder().build()
        assert registry.handler_count == 0
        assert registry.names() == []

    def test_chained_registration(self, registry: HandlerRegistry) -> None:
        assert registry.handler_count == 3
        assert registry.names() == ["loki", "not_found", "tobi"]
        assert registry.contains("tobi")
        assert not registry.contains("ferrets")

    def test_non_callable_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="must be callable"):
            HandlerRegistryBuilder().handler("x", "not callable")  # type: ignore[arg-type]

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="non-empty"):
            HandlerRegistryBuilder().handler("", print)

    def test_registry_is_frozen(self) -> None:
        builder = HandlerRegistryBuilder().handler("a", print)
        registry = builder.build()
        builder.handler("b", print)
        assert registry.names() == ["a"]

    def test_get_unknown(self, registry: HandlerRegistry) -> None:
        with pytest.raises(UnknownHandlerError) as exc_info:
            registry.get("ferrets")
        assert exc_info.value.name == "ferrets"
        assert exc_info.value.available == ["loki", "not_found", "tobi"]
        assert "registered: loki, not_found, tobi" in str(exc_info.value)

    def test_get_unknown_on_empty_registry(self) -> None:
        with pytest.raises(UnknownHandlerError, match="no handlers are registered"):
            HandlerRegistryBuilder().build().get("x")


class TestLoadTable:
    def test_routes_loaded_rules(
        self, registry: HandlerRegistry, tobi: RecordingApp, loki: RecordingApp
    ) -> None:
        config = parse_vhost_config(
            {
                "rules": [
                    {"hosts": ["tobi.com"], "handler": "tobi"},
                    {"hosts": ["*.loki.com", {"regex": r"loki\.(com|org)"}], "handler": "loki"},
                ]
            }
        )
        table = registry.load_table(config)
        assert len(table) == 2

        dispatch = table.resolve("tobi.com:3000")
        assert dispatch is not None
        assert dispatch.handler is tobi

        dispatch = table.resolve("loki.org")
        assert dispatch is not None
        assert dispatch.handler is loki
        assert dispatch.result is not None
        assert dispatch.result.captures == (None, "org")

        assert table.resolve("ferrets.com") is None

    def test_on_no_match_resolved(self, registry: HandlerRegistry) -> None:
        config = parse_vhost_config(
            {"rules": [{"hosts": "tobi.com", "handler": "tobi"}], "on_no_match": "not_found"}
        )
        table = registry.load_table(config)
        assert table.on_no_match is registry.get("not_found")

    def test_unknown_handler(self, registry: HandlerRegistry) -> None:
        config = parse_vhost_config({"rules": [{"hosts": "a.com", "handler": "ferrets"}]})
        with pytest.raises(UnknownHandlerError):
            registry.load_table(config)

    def test_unknown_on_no_match(self, registry: HandlerRegistry) -> None:
        config = parse_vhost_config({"rules": [], "on_no_match": "ferrets"})
        with pytest.raises(UnknownHandlerError):
            registry.load_table(config)

    def test_invalid_regex(self, registry: HandlerRegistry) -> None:
        config = parse_vhost_config({"rules": [{"hosts": [{"regex": "(a"}], "handler": "tobi"}]})
        with pytest.raises(InvalidArgumentError):
            registry.load_table(config)

    def test_too_many_rules(self, registry: HandlerRegistry) -> None:
        rules = [{"hosts": "a.com", "handler": "tobi"}] * (MAX_RULES + 1)
        with pytest.raises(TooManyRulesError):
            registry.load_table(parse_vhost_config({"rules": rules}))

    def test_wildcard_too_long(self, registry: HandlerRegistry) -> None:
        host = "a" * (MAX_PATTERN_LENGTH + 1)
        config = parse_vhost_config({"rules": [{"hosts": host, "handler": "tobi"}]})
        with pytest.raises(PatternTooLongError) as exc_info:
            registry.load_table(config)
        assert exc_info.value.max == MAX_PATTERN_LENGTH

    def test_regex_limit_is_lower(self, registry: HandlerRegistry) -> None:
        regex = "a" * (MAX_REGEX_PATTERN_LENGTH + 1)
        config = parse_vhost_config({"rules": [{"hosts": [{"regex": regex}], "handler": "tobi"}]})
        with pytest.raises(PatternTooLongError) as exc_info:
            registry.load_table(config)
        assert exc_info.value.max == MAX_REGEX_PATTERN_LENGTH

    def test_logs_loaded_table(self, registry: HandlerRegistry) -> None:
        config = parse_vhost_config(
            {"rules": [{"hosts": "tobi.com", "handler": "tobi"}], "on_no_match": "not_found"}
        )
        with capture_logs() as logs:
            registry.load_table(config)
        assert logs == [
            {
                "event": "vhost table loaded",
                "log_level": "info",
                "rules": 1,
                "on_no_match": "not_found",
            }
        ]
