"""
=============================================================================
HTTP MESSAGE
=============================================================================

The shared base of HTTP messages: protocol version, headers and a body
stream. Request builds on it.

=============================================================================
MESSAGE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          Message                                    │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   protocol_version   "1.1"                                          │
    │                                                                      │
    │   headers            Headers({                                      │
    │                          "Host": ("example.com",),                  │
    │                          "Accept": ("text/html", "*/*"),            │
    │                      })                                             │
    │                                                                      │
    │   body               StreamHandle(<payload.json>)                   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
COPY-ON-WRITE
=============================================================================

Messages never change after construction. Every with_*() method:

    1. Validates its arguments       (raises InvalidArgumentError)
    2. Clones the message            (copy.copy - fields are immutable)
    3. Replaces one field on the clone
    4. Returns the clone

    m1 = Message(headers={"Accept": "text/html"})
    m2 = m1.with_header("Accept", "application/json")

    m1.get_header("accept")   # "text/html"          (unchanged)
    m2.get_header("accept")   # "application/json"

The body stream is the one exception: clones share the same StreamHandle,
which is a stateful resource. Replacing it with with_body() does not
close the previous stream; that stays the caller's job.

=============================================================================
"""

import copy
import io
from typing import Any, List, Mapping, Optional

from ..config import DEFAULT_CONFIG, MessageConfig
from ..core.stream import StreamHandle
from ..errors import InvalidArgumentError
from .headers import HeaderValue, Headers


def coerce_body(body: Any, config: MessageConfig) -> StreamHandle:
    """
    Turn a body argument into a StreamHandle.

        None             → new in-memory stream (io.BytesIO)
        StreamHandle     → used as-is
        path / handle    → wrapped in a new StreamHandle(config.default_body_mode)

    Raises:
        InvalidArgumentError: For anything else, or an unopenable path.
    """
    if body is None:
        return StreamHandle(io.BytesIO())

    if isinstance(body, StreamHandle):
        return body

    try:
        return StreamHandle(body, config.default_body_mode)
    except InvalidArgumentError as e:
        raise InvalidArgumentError(f"Invalid body provided: {e}", argument="body") from e


def _validate_protocol_version(version) -> str:
    if not isinstance(version, str) or not version:
        raise InvalidArgumentError(
            f"Invalid protocol version: {version!r}", argument="protocol_version"
        )
    return version


class Message:
    """
    Immutable HTTP message: protocol version, headers and body.

    Attributes (read-only):
        protocol_version: Version number only, e.g. "1.1" or "1.0".
        headers: Immutable Headers mapping.
        body: The body StreamHandle.
        config: Tables and switches used for validation.
    """

    def __init__(
        self,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        body: Any = None,
        protocol_version: Optional[str] = None,
        config: Optional[MessageConfig] = None,
    ):
        """
        Initialize the message.

        Args:
            headers: Mapping of name → value or list of values.
            body: StreamHandle, path, open handle, or None for an empty
                  in-memory body.
            protocol_version: Defaults to config.default_protocol_version.
            config: Defaults to DEFAULT_CONFIG.

        Raises:
            InvalidArgumentError: For invalid headers, body or version.
        """
        self._config = config or DEFAULT_CONFIG
        self._protocol_version = _validate_protocol_version(
            protocol_version or self._config.default_protocol_version
        )
        # Headers before body so a bad header never leaves an opened file behind
        self._headers = Headers(headers)
        self._body = coerce_body(body, self._config)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def protocol_version(self) -> str:
        return self._protocol_version

    @property
    def headers(self) -> Headers:
        """All headers; iterate for names in their stored casing."""
        return self._headers

    @property
    def body(self) -> StreamHandle:
        return self._body

    @property
    def config(self) -> MessageConfig:
        return self._config

    # =========================================================================
    # HEADER ACCESSORS - names are case-insensitive
    # =========================================================================

    def has_header(self, name: str) -> bool:
        """
        Check if a header exists.

        Example:
            message.has_header("content-type")  # True for "Content-Type"
        """
        return name in self._headers

    def get_header_lines(self, name: str) -> List[str]:
        """
        Get every value of a header.

        Returns:
            List of values in the order they were added, [] if absent.
        """
        return self._headers.get_lines(name)

    def get_header(self, name: str) -> str:
        """
        Get a header as one string, values joined with ", ".

        Not every header survives comma-joining (Set-Cookie, for one);
        use get_header_lines() for those.
        """
        return self._headers.get_line(name)

    # =========================================================================
    # DERIVATION - each returns a NEW message
    # =========================================================================

    def with_protocol_version(self, version: str) -> "Message":
        return self._clone(protocol_version=_validate_protocol_version(version))

    def with_header(self, name: str, value: HeaderValue) -> "Message":
        """
        Return a copy with `name` set to `value`, replacing prior values.

        The header is re-keyed to name.lower() unless
        config.preserve_header_case is on.

        Raises:
            InvalidArgumentError: If name is not a string or value is not a
                                  string / list of strings.
        """
        headers = self._headers.set(
            name, value, preserve_case=self._config.preserve_header_case
        )
        return self._clone(headers=headers)

    def with_added_header(self, name: str, value: HeaderValue) -> "Message":
        """
        Return a copy with value(s) appended to `name`.

        Creates the header if absent; an existing header keeps its
        stored casing.
        """
        return self._clone(headers=self._headers.add(name, value))

    def with_headers(self, headers: Mapping[str, HeaderValue]) -> "Message":
        """
        Return a copy with every entry of `headers` appended.

        Raises:
            InvalidArgumentError: If headers is not a mapping, or any entry
                                  is invalid. Nothing is applied in that case.
        """
        if not isinstance(headers, Mapping):
            raise InvalidArgumentError(
                f"Invalid headers: expected a mapping, got {type(headers).__name__}",
                argument="headers",
            )

        merged = self._headers
        for name, value in headers.items():
            merged = merged.add(name, value)
        return self._clone(headers=merged)

    def without_header(self, name: str) -> "Message":
        """
        Return a copy without `name`.

        Returns the message itself when the header is absent, so calling
        this twice is the same as calling it once.
        """
        if not self.has_header(name):
            return self
        return self._clone(headers=self._headers.remove(name))

    def with_body(self, body: StreamHandle) -> "Message":
        """
        Return a copy using `body` as its stream.

        The current body is NOT closed.

        Raises:
            InvalidArgumentError: If body is not a StreamHandle.
        """
        if not isinstance(body, StreamHandle):
            raise InvalidArgumentError(
                f"Invalid body: expected a StreamHandle, got {type(body).__name__}",
                argument="body",
            )
        return self._clone(body=body)

    def _clone(self, **changes) -> "Message":
        new = copy.copy(self)
        for name, value in changes.items():
            setattr(new, "_" + name, value)
        return new

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(protocol_version={self._protocol_version!r}, "
            f"headers={self._headers.to_dict()!r})"
        )
