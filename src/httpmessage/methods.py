"""
=============================================================================
HTTP REQUEST METHODS (RFC 7231 / RFC 5789)
=============================================================================

The fixed set of request methods a Request may carry.

=============================================================================
METHOD TRAITS
=============================================================================

    ┌──────────┬────────┬────────────┬──────────────────────────────────┐
    │  Method  │  Safe  │ Idempotent │ Description                      │
    ├──────────┼────────┼────────────┼──────────────────────────────────┤
    │  CONNECT │   No   │     No     │ Establish tunnel (HTTPS proxy)   │
    │  DELETE  │   No   │    Yes     │ Delete resource                  │
    │  GET     │  Yes   │    Yes     │ Retrieve resource                │
    │  HEAD    │  Yes   │    Yes     │ GET without body (metadata only) │
    │  OPTIONS │  Yes   │    Yes     │ Get allowed methods (CORS)       │
    │  PATCH   │   No   │     No     │ Partial update                   │
    │  POST    │   No   │     No     │ Create resource / submit data    │
    │  PUT     │   No   │    Yes     │ Replace entire resource          │
    │  TRACE   │  Yes   │    Yes     │ Echo request (debugging)         │
    └──────────┴────────┴────────────┴──────────────────────────────────┘

    SAFE:       The request does not change server state
    IDEMPOTENT: Sending it N times has the same effect as sending it once

=============================================================================
"""

from enum import Enum
from typing import AbstractSet, Optional

from .errors import InvalidArgumentError


class HTTPMethod(str, Enum):
    """
    HTTP request methods.

    This enum extends str, so members compare equal to their names:

        >>> HTTPMethod.GET == "GET"
        True
        >>> HTTPMethod.normalize("post")
        'POST'
    """

    CONNECT = "CONNECT"    # Establish tunnel (HTTPS proxy)
    DELETE = "DELETE"      # Delete resource
    GET = "GET"            # Retrieve resource
    HEAD = "HEAD"          # GET without body
    OPTIONS = "OPTIONS"    # Get allowed methods (CORS preflight)
    PATCH = "PATCH"        # Partial update
    POST = "POST"          # Create resource / submit data
    PUT = "PUT"            # Replace resource
    TRACE = "TRACE"        # Echo request (debugging)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def is_safe(self) -> bool:
        """Check if this method is read-only on the server (RFC 7231 §4.2.1)."""
        return self in _SAFE_METHODS

    @property
    def is_idempotent(self) -> bool:
        """
        Check if repeating this method has the same effect as sending it once.

        Idempotent requests can be retried by a transport after a failure
        without risking a duplicate side effect.
        """
        return self in _IDEMPOTENT_METHODS

    @classmethod
    def normalize(cls, value, allowed: Optional[AbstractSet[str]] = None) -> str:
        """
        Upper-case `value` and check it names an accepted method.

        Args:
            value: A method name in any case, or an HTTPMethod member.
            allowed: Upper-case names to accept. Defaults to the enum
                     members; a MessageConfig passes its allowed_methods,
                     which may hold extension methods such as PURGE.

        Returns:
            The upper-cased method name.

        Raises:
            InvalidArgumentError: If value is not a string or not accepted.
        """
        if isinstance(value, cls):
            name = value.value
        elif isinstance(value, str):
            name = value.upper()
        else:
            raise InvalidArgumentError(
                f"Invalid method: expected a string, got {type(value).__name__}",
                argument="method",
            )

        if name not in (cls.__members__ if allowed is None else allowed):
            raise InvalidArgumentError(f"Invalid method: {value}", argument="method")
        return name


_SAFE_METHODS = frozenset({
    HTTPMethod.GET,
    HTTPMethod.HEAD,
    HTTPMethod.OPTIONS,
    HTTPMethod.TRACE,
})

_IDEMPOTENT_METHODS = _SAFE_METHODS | {
    HTTPMethod.PUT,
    HTTPMethod.DELETE,
}
