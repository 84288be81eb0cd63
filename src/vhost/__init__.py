"""vhost — Virtual-host routing on the HTTP Host header.

All public types are exported from this module for flat imports:

    from vhost import vhost, VhostTable, VhostMatcher, MatchResult
"""

__version__ = "0.1.0"

# Compiler
from vhost._compiler import (
    CompiledMatcher,
    compile_host_patterns,
    escape_wildcard,
    strip_anchors,
)

# Config types — see vhost._config for details
from vhost._config import (
    HostConfig,
    RuleConfig,
    VhostConfig,
    load_vhost_config,
    parse_vhost_config,
)

# Errors
from vhost._errors import (
    ConfigParseError,
    InvalidArgumentError,
    PatternTooLongError,
    TooManyRulesError,
    UnknownHandlerError,
    VhostError,
)

# Matching
from vhost._matcher import MatchResult, VhostMatcher, hostname_of

# Patterns
from vhost._patterns import (
    HostLike,
    HostPattern,
    RegexHost,
    WildcardHost,
    host_pattern,
    host_patterns,
)

# Registry — see vhost._registry for details
from vhost._registry import (
    MAX_PATTERN_LENGTH,
    MAX_REGEX_PATTERN_LENGTH,
    HandlerRegistry,
    HandlerRegistryBuilder,
)

# Rules
from vhost._rule import MAX_RULES, Dispatch, Handler, VhostRule, VhostTable, vhost

__all__ = [
    # Patterns
    "HostPattern",
    "HostLike",
    "WildcardHost",
    "RegexHost",
    "host_pattern",
    "host_patterns",
    # Compiler
    "CompiledMatcher",
    "compile_host_patterns",
    "escape_wildcard",
    "strip_anchors",
    # Matching
    "MatchResult",
    "VhostMatcher",
    "hostname_of",
    # Rules
    "Handler",
    "VhostRule",
    "VhostTable",
    "Dispatch",
    "vhost",
    "MAX_RULES",
    # Config types
    "HostConfig",
    "RuleConfig",
    "VhostConfig",
    "parse_vhost_config",
    "load_vhost_config",
    # Registry
    "HandlerRegistryBuilder",
    "HandlerRegistry",
    "MAX_PATTERN_LENGTH",
    "MAX_REGEX_PATTERN_LENGTH",
    # Errors
    "VhostError",
    "InvalidArgumentError",
    "TooManyRulesError",
    "PatternTooLongError",
    "UnknownHandlerError",
    "ConfigParseError",
]
