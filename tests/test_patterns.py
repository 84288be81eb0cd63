"""Tests for host pattern types and argument normalization."""

import re

import pytest
import re2

from vhost import InvalidArgumentError, RegexHost, WildcardHost, host_pattern, host_patterns


class TestHostPattern:
    def test_string_is_wildcard(self) -> None:
        assert host_pattern("tobi.com") == WildcardHost("tobi.com")

    def test_re_pattern_is_regex(self) -> None:
        assert host_pattern(re.compile(r"loki\.com")) == RegexHost(r"loki\.com")

    def test_re2_pattern_is_regex(self) -> None:
        assert host_pattern(re2.compile(r"loki\.com")) == RegexHost(r"loki\.com")

    def test_host_pattern_passes_through(self) -> None:
        p = RegexHost("a")
        assert host_pattern(p) is p

    def test_unsupported_type_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="host pattern must be"):
            host_pattern(42)

    def test_empty_wildcard_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            WildcardHost("")

    def test_non_string_regex_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            RegexHost(b"bytes")  # type: ignore[arg-type]


class TestHostPatterns:
    def test_single_value_wrapped(self) -> None:
        assert host_patterns("tobi.com") == (WildcardHost("tobi.com"),)

    def test_list_preserves_order(self) -> None:
        patterns = host_patterns(["tobi.com", re.compile("loki"), "*.ferrets.com"])
        assert patterns == (
            WildcardHost("tobi.com"),
            RegexHost("loki"),
            WildcardHost("*.ferrets.com"),
        )

    def test_tuple_accepted(self) -> None:
        assert len(host_patterns(("a.com", "b.com"))) == 2

    def test_none_is_required_error(self) -> None:
        with pytest.raises(InvalidArgumentError, match="hosts is required"):
            host_patterns(None)

    def test_empty_string_is_required_error(self) -> None:
        with pytest.raises(InvalidArgumentError, match="hosts is required"):
            host_patterns("")

    def test_empty_list_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="at least one"):
            host_patterns([])

    def test_bad_element_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            host_patterns(["tobi.com", None])
