"""
=============================================================================
HTTP REQUEST
=============================================================================

A Message plus the three things that make it a request: the method,
the target URI and the request-target written on the request line.

=============================================================================
REQUEST LINE
=============================================================================

    GET /api/users?page=2 HTTP/1.1
    ─┬─ ────────┬──────── ───┬────
     │          │            │
  method  request_target  protocol_version

The request-target is derived from the URI unless overridden:

    ┌─────────────────────────────────┬─────────────────────────────────┐
    │  State                          │  request_target                 │
    ├─────────────────────────────────┼─────────────────────────────────┤
    │  with_request_target("*")       │  "*"            (override wins) │
    │  uri = http://h/api/users?p=2   │  "/api/users?p=2"               │
    │  uri = http://h/api/users       │  "/api/users"                   │
    │  no uri                         │  "/"                            │
    └─────────────────────────────────┴─────────────────────────────────┘

=============================================================================
METHOD VALIDATION
=============================================================================

Methods are matched case-insensitively against config.allowed_methods
and stored upper-cased:

    Request(method="get").method      # "GET"
    Request(method=HTTPMethod.PUT)    # "PUT"
    Request(method="TRACEX")          # InvalidArgumentError

A request built without a method has method "".

=============================================================================
"""

import logging
import re
from typing import Any, Mapping, Optional, Union

from ..config import DEFAULT_CONFIG, MessageConfig
from ..errors import InvalidArgumentError
from ..methods import HTTPMethod
from .headers import HeaderValue
from .message import Message
from .uri import Uri


logger = logging.getLogger(__name__)


WHITESPACE_PATTERN = re.compile(r"\s")


class Request(Message):
    """
    Immutable HTTP request.

    Attributes (read-only, on top of Message's):
        method: Upper-cased method name, "" when not set.
        uri: The target Uri, or None.
        request_target: Origin-form target or the explicit override.

    Example:
        request = Request(
            "https://api.example.com/users?page=2",
            method="get",
            headers={"Accept": "application/json"},
        )

        request.method           # "GET"
        request.request_target   # "/users?page=2"
        request.uri.host         # "api.example.com"
    """

    def __init__(
        self,
        uri: Union[Uri, str, None] = None,
        method: Union[HTTPMethod, str, None] = None,
        body: Any = None,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        protocol_version: Optional[str] = None,
        config: Optional[MessageConfig] = None,
    ):
        """
        Initialize the request.

        Args:
            uri: A Uri, a URI string to parse, or None.
            method: Method name in any case, an HTTPMethod, or None.
            body: See Message.
            headers: See Message.
            protocol_version: See Message.
            config: See Message. Also used to parse a string uri.

        Raises:
            InvalidArgumentError: For an invalid uri, method, body or header.
                                  URIParseError for an unparseable uri string.
        """
        # Validate our own arguments before Message opens a body file
        config = config or DEFAULT_CONFIG
        self._uri = _coerce_uri(uri, config)
        self._method = "" if method is None else _validate_method(method, config)
        self._request_target: Optional[str] = None

        super().__init__(
            headers=headers,
            body=body,
            protocol_version=protocol_version,
            config=config,
        )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def method(self) -> str:
        return self._method

    @property
    def uri(self) -> Optional[Uri]:
        return self._uri

    @property
    def request_target(self) -> str:
        """
        The request-target for the request line.

        Never contains whitespace: overrides are checked on the way in,
        and Uri rejects whitespace in its path and query.
        """
        if self._request_target is not None:
            return self._request_target

        if self._uri is None:
            return "/"

        target = self._uri.path
        if self._uri.query:
            target += "?" + self._uri.query
        return target

    # =========================================================================
    # DERIVATION - each returns a NEW request
    # =========================================================================

    def with_request_target(self, request_target: str) -> "Request":
        """
        Return a copy with an explicit request-target.

        Use for the non-origin forms, e.g. "*" for server-wide OPTIONS or
        "example.com:443" for CONNECT.

        Raises:
            InvalidArgumentError: If the target is not a string or contains
                                  whitespace.
        """
        if not isinstance(request_target, str) or WHITESPACE_PATTERN.search(request_target):
            raise InvalidArgumentError(
                f"Invalid request target provided; must be a string and cannot "
                f"contain whitespace: {request_target!r}",
                argument="request_target",
            )
        return self._clone(request_target=request_target)

    def with_method(self, method: Union[HTTPMethod, str]) -> "Request":
        """
        Return a copy with a new method.

        Raises:
            InvalidArgumentError: If the method is not allowed.
        """
        return self._clone(method=_validate_method(method, self.config))

    def with_uri(self, uri: Uri) -> "Request":
        """
        Return a copy targeting `uri`.

        Headers are left as they are; a Host header is not rewritten.

        Raises:
            InvalidArgumentError: If uri is not a Uri.
        """
        if not isinstance(uri, Uri):
            raise InvalidArgumentError(
                f"Invalid URI: expected a Uri, got {type(uri).__name__}", argument="uri"
            )
        return self._clone(uri=uri)

    def __repr__(self) -> str:
        return (
            f"Request(method={self._method!r}, target={self.request_target!r}, "
            f"protocol_version={self.protocol_version!r})"
        )


# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def _coerce_uri(uri, config: MessageConfig) -> Optional[Uri]:
    if uri is None or isinstance(uri, Uri):
        return uri
    if isinstance(uri, str):
        return Uri.parse(uri, config)
    raise InvalidArgumentError(
        f"Invalid URI: expected a Uri or string, got {type(uri).__name__}", argument="uri"
    )


def _validate_method(method, config: MessageConfig) -> str:
    try:
        return HTTPMethod.normalize(method, config.allowed_methods)
    except InvalidArgumentError:
        logger.debug(f"Rejected method {method!r}")
        raise
