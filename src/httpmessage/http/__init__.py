"""
=============================================================================
HTTP MESSAGE MODEL
=============================================================================

Immutable value objects for building and inspecting HTTP requests without
sending them anywhere.

=============================================================================
MODULE COMPONENTS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ URI (uri.py)                                                        │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Parses and builds URIs                                              │
    │                                                                      │
    │ Input:   "https://user@example.com:8443/a?x=1#top"                  │
    │ Output:  Uri(scheme="https", host="example.com", port=8443, ...)   │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ HEADERS (headers.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Case-insensitive, ordered, multi-valued header mapping              │
    │                                                                      │
    │ Example:  headers["ACCEPT"] → ("text/html", "*/*")                 │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ MESSAGE (message.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Protocol version + Headers + body StreamHandle                      │
    │ with_header / with_added_header / without_header / with_body       │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST (request.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Message + method + Uri + request-target                             │
    │                                                                      │
    │ Example:  Request("http://h/users?p=2", "get").request_target       │
    │           → "/users?p=2"                                            │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .uri import Uri, parse_uri
from .headers import Headers, HeaderValue
from .message import Message
from .request import Request

__all__ = [
    # URIs
    "Uri",
    "parse_uri",

    # Headers
    "Headers",
    "HeaderValue",

    # Messages
    "Message",
    "Request",
]
