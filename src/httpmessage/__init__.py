"""
=============================================================================
HTTPMESSAGE - Immutable HTTP Message Value Objects
=============================================================================

This package models HTTP requests as immutable values: a URI you can parse
and rebuild, a header-and-body message, a request on top of it, and a byte
stream wrapper for the body. Nothing here opens a socket; a request is
finished and then handed to whatever transport the application uses.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      HTTPMESSAGE COMPONENTS                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Uri ──────────┐                                                   │
    │                 │                                                   │
    │   StreamHandle ─┼──▶ Message ──▶ Request ──▶ Client ──▶ transport   │
    │                 │    (headers,   (method,    (logs the              │
    │   Headers ──────┘     body)       target)     exchange)             │
    │                                                                      │
    │   MessageConfig: allow-lists and switches passed to each component  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpmessage/
    ├── __init__.py          # This file - package exports
    ├── config.py            # MessageConfig dataclass, setup_logging
    ├── errors.py            # InvalidArgumentError, URIParseError
    ├── methods.py           # HTTPMethod enum
    ├── client.py            # Client transport boundary, RequestLog
    ├── core/
    │   └── stream.py        # StreamHandle over a file or handle
    └── http/
        ├── uri.py           # Uri parsing and building
        ├── headers.py       # Case-insensitive Headers mapping
        ├── message.py       # Message base
        └── request.py       # Request

=============================================================================
QUICK START
=============================================================================

    from httpmessage import Request, StreamHandle, Uri

    uri = Uri.parse("https://api.example.com/users")

    request = Request(
        uri.with_query("page=2"),
        method="post",
        body=StreamHandle("payload.json"),
        headers={"Content-Type": "application/json"},
    )

    request.method              # "POST"
    request.request_target      # "/users?page=2"

    retry = request.with_header("X-Retry", "1")   # request is unchanged

=============================================================================
"""

__version__ = "1.0.0"

from .config import DEFAULT_CONFIG, MessageConfig, setup_logging
from .errors import InvalidArgumentError, URIParseError
from .methods import HTTPMethod
from .core import StreamHandle, StreamState
from .http import Headers, Message, Request, Uri, parse_uri
from .client import Client, RequestLog

__all__ = [
    "Client",
    "DEFAULT_CONFIG",
    "Headers",
    "HTTPMethod",
    "InvalidArgumentError",
    "Message",
    "MessageConfig",
    "Request",
    "RequestLog",
    "StreamHandle",
    "StreamState",
    "URIParseError",
    "Uri",
    "parse_uri",
    "setup_logging",
    "__version__",
]
