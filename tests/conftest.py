"""Conformance fixture loader for vhost.

Loads YAML fixtures from tests/fixtures/ and converts them to vhost types
for parametrized testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from vhost import HandlerRegistryBuilder, HostPattern, RegexHost, VhostMatcher, WildcardHost
from vhost.testing import RecordingApp

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class HostFixtureCase:
    """A single test case from a host conformance fixture."""

    fixture_name: str
    case_name: str
    matcher: VhostMatcher
    host: str | None
    expect: dict[str, Any] | None


# ─── YAML → vhost type conversion ───────────────────────────────────────────


def parse_host(spec: str | dict[str, str]) -> HostPattern:
    """Parse a host spec into a HostPattern."""
    if isinstance(spec, str):
        return WildcardHost(spec)
    if "regex" in spec:
        return RegexHost(spec["regex"])
    if "wildcard" in spec:
        return WildcardHost(spec["wildcard"])
    msg = f"Unknown host spec: {spec}"
    raise ValueError(msg)


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_host_fixtures() -> list[HostFixtureCase]:
    """Load all host conformance fixtures."""
    cases: list[HostFixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("hosts*.yaml")):
        cases.extend(_load_host_file(yaml_file))
    return cases


def _load_host_file(path: Path) -> list[HostFixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[HostFixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            fixture_name = doc["name"]
            matcher = VhostMatcher(tuple(parse_host(h) for h in doc["hosts"]))
            for case in doc["cases"]:
                cases.append(
                    HostFixtureCase(
                        fixture_name=fixture_name,
                        case_name=case["name"],
                        matcher=matcher,
                        host=case["host"],
                        expect=case["expect"],
                    )
                )
    return cases


# ─── Shared fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def tobi() -> RecordingApp:
    return RecordingApp("tobi")


@pytest.fixture
def loki() -> RecordingApp:
    return RecordingApp("loki")


@pytest.fixture
def registry(tobi: RecordingApp, loki: RecordingApp):  # noqa: ANN201
    """Registry with tobi, loki and a not_found handler."""
    return (
        HandlerRegistryBuilder()
        .handler("tobi", tobi)
        .handler("loki", loki)
        .handler("not_found", RecordingApp("oops"))
        .build()
    )
