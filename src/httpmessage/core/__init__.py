"""
=============================================================================
CORE COMPONENTS
=============================================================================

Low-level resource handling underneath the message model.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          STREAM HANDLE                               │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Opens a path or adopts an already-open handle                    │
    │  • Sole owner of the resource until detach() or close()            │
    │  • read / write / seek report "not available" instead of raising   │
    │  • Lifecycle: OPEN → DETACHED | CLOSED                             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .stream import StreamHandle, StreamState

__all__ = [
    "StreamHandle",  # Owned byte stream over a file or handle
    "StreamState",   # Enum for stream lifecycle states
]
