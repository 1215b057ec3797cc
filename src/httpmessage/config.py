"""
=============================================================================
MESSAGE CONFIGURATION
=============================================================================

Centralized configuration for the message model.

The validating components (Uri, Message, Request) never reach for hidden
module globals. They are handed a MessageConfig, or fall back to the
shared DEFAULT_CONFIG instance defined at the bottom of this module.

=============================================================================
WHAT LIVES HERE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION GROUPS                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   ALLOW-LISTS (static tables)                                       │
    │      └── allowed_methods, allowed_schemes, standard_ports           │
    │                                                                      │
    │   DEFAULTS                                                          │
    │      └── default_protocol_version, default_body_mode                │
    │                                                                      │
    │   BEHAVIOUR SWITCHES                                                │
    │      └── elide_standard_ports, preserve_header_case                 │
    │                                                                      │
    │   LOGGING                                                           │
    │      └── log_level, access_log_level                                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    Priority (highest to lowest):

    1. Explicit MessageConfig(...) in code
    2. MessageConfig.from_env()  (only when the caller asks for it)
    3. Default values in this dataclass

The library itself never reads the environment.

=============================================================================
"""

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from .methods import HTTPMethod


def _read_only(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class MessageConfig:
    """
    Configuration for URIs, messages and requests.

    =========================================================================
    DEVELOPMENT VS STRICT RFC BEHAVIOUR
    =========================================================================

    Default (lenient about casing and ports):
        MessageConfig()
        # http://example.com:80/  keeps ":80" in its authority
        # withHeader("Content-Type", ...) stores "content-type"

    RFC-leaning:
        MessageConfig(
            elide_standard_ports=True,   # drop :80 / :443
            preserve_header_case=True,   # keep "Content-Type"
        )

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # ALLOW-LISTS
    # ─────────────────────────────────────────────────────────────────────

    allowed_methods: FrozenSet[str] = field(
        default_factory=lambda: frozenset(m.value for m in HTTPMethod)
    )
    """Request methods accepted by Request and Request.with_method()."""

    allowed_schemes: FrozenSet[str] = frozenset({"", "http", "https"})
    """
    Schemes accepted when parsing a URI string.
    Uri.with_scheme() is stricter: it never accepts "".
    """

    standard_ports: Mapping[str, int] = field(
        default_factory=lambda: _read_only({"http": 80, "https": 443})
    )
    """Scheme → default port table used when elide_standard_ports is on."""

    # ─────────────────────────────────────────────────────────────────────
    # DEFAULTS
    # ─────────────────────────────────────────────────────────────────────

    default_protocol_version: str = "1.1"
    """Protocol version of a Message built without one."""

    default_body_mode: str = "r"
    """Mode used to open a body given as a filesystem path."""

    # ─────────────────────────────────────────────────────────────────────
    # BEHAVIOUR SWITCHES
    # ─────────────────────────────────────────────────────────────────────

    elide_standard_ports: bool = False
    """
    False - a port is "standard" only when none is set, so any explicit
            port appears in Uri.authority.
    True  - ports equal to standard_ports[scheme] are left out.
    """

    preserve_header_case: bool = False
    """
    False - with_header() re-keys the header to its lower-cased name.
    True  - with_header() keeps the casing the caller supplied.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Level applied to the "httpmessage" logger by setup_logging()."""

    access_log_level: str = "DEBUG"
    """Level at which Client emits one line per request sent."""

    def __post_init__(self):
        # Normalize mutable inputs so the frozen instance is truly read-only
        object.__setattr__(self, "allowed_methods", frozenset(self.allowed_methods))
        object.__setattr__(self, "allowed_schemes", frozenset(self.allowed_schemes))
        object.__setattr__(self, "standard_ports", _read_only(self.standard_ports))
        self.validate()

    @classmethod
    def from_env(cls) -> "MessageConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPMESSAGE_PROTOCOL_VERSION       Default protocol version (1.1)
        HTTPMESSAGE_BODY_MODE              Mode for path bodies (r)
        HTTPMESSAGE_ELIDE_STANDARD_PORTS   1/true/yes/on to elide :80/:443
        HTTPMESSAGE_PRESERVE_HEADER_CASE   1/true/yes/on to keep casing
        HTTPMESSAGE_LOG_LEVEL              Logging level (INFO)

        =====================================================================
        """
        return cls(
            default_protocol_version=os.getenv("HTTPMESSAGE_PROTOCOL_VERSION", "1.1"),
            default_body_mode=os.getenv("HTTPMESSAGE_BODY_MODE", "r"),
            elide_standard_ports=_env_flag("HTTPMESSAGE_ELIDE_STANDARD_PORTS", False),
            preserve_header_case=_env_flag("HTTPMESSAGE_PRESERVE_HEADER_CASE", False),
            log_level=os.getenv("HTTPMESSAGE_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Runs from __post_init__, so an invalid config never exists.

        Raises:
            ValueError: On the first invalid value found.
        """
        for name in ("log_level", "access_log_level"):
            level = getattr(self, name)
            if not isinstance(logging.getLevelName(level.upper()), int):
                raise ValueError(f"{name} must be a logging level name, got {level!r}")

        if not self.allowed_methods:
            raise ValueError("allowed_methods must not be empty")

        for method in self.allowed_methods:
            if method != method.upper():
                raise ValueError(f"allowed_methods must be upper-case, got {method!r}")

        for scheme, port in self.standard_ports.items():
            if not 0 < port < 65536:
                raise ValueError(f"Invalid standard port for {scheme}: {port}. Must be 1-65535.")

        if not self.default_protocol_version:
            raise ValueError("default_protocol_version must not be empty")

    def is_standard_port(self, scheme: str, port) -> bool:
        """
        Check whether `port` may be left out of an authority for `scheme`.

        No port at all is always standard. An explicit port is standard
        only when elide_standard_ports is on and it matches the table.
        """
        if port is None:
            return True
        if not self.elide_standard_ports:
            return False
        return self.standard_ports.get(scheme) == port


def setup_logging(config: Optional[MessageConfig] = None) -> None:
    """Configure logging based on config."""
    config = config or DEFAULT_CONFIG
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httpmessage").setLevel(level)


DEFAULT_CONFIG = MessageConfig()
