"""
=============================================================================
CLIENT - TRANSPORT BOUNDARY
=============================================================================

Hands a finished Request to a transport and logs the exchange. How the
request actually travels (sockets, TLS, retries) is the transport's
business; any callable taking a Request will do.

=============================================================================
EXCHANGE FLOW
=============================================================================

    ┌──────────┐   send(request)   ┌──────────┐  transport(request)  ┌───────────┐
    │  caller  │ ────────────────▶ │  Client  │ ───────────────────▶ │ transport │
    └──────────┘                   └──────────┘                      └───────────┘
         ▲                              │                                  │
         │                              │  RequestLog → "httpmessage.access"│
         │                              ▼                                  │
         └───────────────────────── response ◀─────────────────────────────┘

The response is returned exactly as the transport produced it. When the
transport raises, the failure is logged at ERROR and the exception
propagates unchanged.

=============================================================================
LOG FORMATS
=============================================================================

    TEXT (default):
        [a1b2c3d4] GET /users?page=2 HTTP/1.1 host=api.example.com 5.23ms

    JSON:
        {"request_id": "a1b2c3d4", "method": "GET", "target": "/users?page=2",
         "host": "api.example.com", "protocol_version": "1.1",
         "duration_ms": 5.23, "timestamp": "19/Oct/2026:10:55:36 +0000"}

=============================================================================
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config import DEFAULT_CONFIG, MessageConfig
from .errors import InvalidArgumentError
from .http.request import Request


# Namespaced so access logs can be routed separately:
#   logging.getLogger("httpmessage.access").addHandler(file_handler)
logger = logging.getLogger("httpmessage.access")


# A transport takes a request and returns whatever represents the response
Transport = Callable[[Request], Any]


@dataclass
class RequestLog:
    """
    Structured log entry for one request/response exchange.

    request_id:       Short random ID to correlate log lines
    method:           HTTP method ("" when the request has none)
    target:           Request-target as sent on the request line
    host:             URI host, "-" without a URI or host
    protocol_version: e.g. "1.1"
    duration_ms:      Time spent inside the transport
    timestamp:        When the exchange finished
    """

    request_id: str
    method: str
    target: str
    host: str
    protocol_version: str
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        """Convert to a dictionary for JSON serialization."""
        return {
            "request_id": self.request_id,
            "method": self.method,
            "target": self.target,
            "host": self.host,
            "protocol_version": self.protocol_version,
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }

    def to_text(self) -> str:
        """Format as a single human-readable line."""
        return (
            f"[{self.request_id}] {self.method or '-'} {self.target} "
            f"HTTP/{self.protocol_version} host={self.host} "
            f"{self.duration_ms:.2f}ms"
        )


class Client:
    """
    Sends requests through a transport callable.

    Usage:
        def transport(request):
            ...  # talk to the network
            return response

        client = Client(transport)
        response = client.send(Request("https://example.com/", "GET"))

        # Or bind the request up front
        response = Client(transport, request=request).send()
    """

    def __init__(
        self,
        transport: Transport,
        config: Optional[MessageConfig] = None,
        request: Optional[Request] = None,
        log_format: str = "text",
    ):
        """
        Initialize the client.

        Args:
            transport: Callable that takes a Request and returns a response.
            config: Supplies access_log_level. Defaults to DEFAULT_CONFIG.
            request: Request used by send() when none is passed.
            log_format: "text" or "json".

        Raises:
            InvalidArgumentError: If transport is not callable, request is not
                                  a Request, or log_format is unknown.
        """
        if not callable(transport):
            raise InvalidArgumentError(
                f"Invalid transport: {type(transport).__name__} is not callable",
                argument="transport",
            )
        if request is not None and not isinstance(request, Request):
            raise InvalidArgumentError(
                f"Invalid request: expected a Request, got {type(request).__name__}",
                argument="request",
            )
        if log_format not in ("text", "json"):
            raise InvalidArgumentError(
                f"Invalid log format: {log_format!r}", argument="log_format"
            )

        self.transport = transport
        self.config = config or DEFAULT_CONFIG
        self.request = request
        self.log_format = log_format

    def send(self, request: Optional[Request] = None) -> Any:
        """
        Pass a request to the transport and return its response.

        Args:
            request: Request to send. Defaults to the one bound at
                     construction.

        Returns:
            Whatever the transport returned.

        Raises:
            InvalidArgumentError: If there is no Request to send.
            Exception: Anything the transport raises, after logging it.
        """
        request = request if request is not None else self.request
        if not isinstance(request, Request):
            raise InvalidArgumentError(
                f"No request to send: expected a Request, got {type(request).__name__}",
                argument="request",
            )

        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        try:
            response = self.transport(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] Request failed: {request.method} {request.request_target} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000

        log_entry = RequestLog(
            request_id=request_id,
            method=request.method,
            target=request.request_target,
            host=(request.uri.host if request.uri is not None else "") or "-",
            protocol_version=request.protocol_version,
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        level = logging.getLevelName(self.config.access_log_level.upper())
        if self.log_format == "json":
            logger.log(level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(level, log_entry.to_text())

        return response
