"""
=============================================================================
ERRORS
=============================================================================

Exceptions raised by the message model.

There are two failure styles in this package:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        FAILURE STYLES                               │
    ├──────────────┬──────────────────────────────────────────────────────┤
    │  HARD        │ InvalidArgumentError is raised by constructors and   │
    │              │ every with_*() method when an input breaks a rule.   │
    │              │ The receiver is never modified.                      │
    ├──────────────┼──────────────────────────────────────────────────────┤
    │  SOFT        │ StreamHandle I/O returns False / None when the       │
    │              │ handle cannot do what was asked (not readable,       │
    │              │ detached, ...). Nothing is raised.                   │
    └──────────────┴──────────────────────────────────────────────────────┘

Only the hard style lives here.

=============================================================================
"""

from typing import Optional


class InvalidArgumentError(ValueError):
    """
    Raised when an argument violates a constraint of the message model.

    Subclasses ValueError so callers that only know the standard library
    hierarchy can still catch it.

    Attributes:
        argument: Name of the offending argument, when known.
    """

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument


class URIParseError(InvalidArgumentError):
    """Raised when a URI string cannot be decomposed into components."""

    def __init__(self, message: str, uri: str = ""):
        super().__init__(message, argument="uri")
        self.uri = uri
