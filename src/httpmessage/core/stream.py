"""
=============================================================================
STREAM HANDLE
=============================================================================

Wraps one underlying I/O resource (a file opened from a path, or a handle
the caller already opened) and exposes a uniform, fallible byte API.

=============================================================================
OWNERSHIP
=============================================================================

A StreamHandle is the EXCLUSIVE owner of its resource:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    StreamHandle Lifecycle                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │              StreamHandle("body.json")                               │
    │                         │                                            │
    │                         ▼                                            │
    │                   ┌───────────┐                                      │
    │                   │   OPEN    │  read / write / seek / metadata      │
    │                   └─────┬─────┘                                      │
    │              detach()   │   close()                                  │
    │           ┌─────────────┴─────────────┐                              │
    │           ▼                           ▼                              │
    │    ┌────────────┐              ┌────────────┐                        │
    │    │  DETACHED  │              │   CLOSED   │                        │
    │    │ caller now │              │ resource   │                        │
    │    │ owns handle│              │ released   │                        │
    │    └────────────┘              └────────────┘                        │
    │                                                                      │
    │   Both end states are terminal. There is no way back to OPEN.       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
SOFT FAILURE
=============================================================================

I/O methods never raise because a precondition is not met. They report
"not available" instead:

    read()    → False   when not readable
    write()   → False   when not writable
    seek()    → False   when not seekable
    rewind()  → False   when not seekable
    tell()    → None    once detached / closed
    eof()     → True    once detached / closed
    get_size()→ None    once detached / closed

Errors raised by the underlying handle itself (disk full, bad file
descriptor) still propagate.

=============================================================================
"""

import io
import logging
import os
import stat
from enum import Enum
from typing import Any, Dict, Literal, Optional, Union

from ..errors import InvalidArgumentError


logger = logging.getLogger(__name__)


_READ_FLAGS = ("r", "+")
_WRITE_FLAGS = ("w", "a", "x", "+")


class StreamState(Enum):
    """Stream lifecycle states."""
    OPEN = "open"            # Owns a live resource
    DETACHED = "detached"    # Resource handed back to the caller
    CLOSED = "closed"        # Resource released


class StreamHandle:
    """
    A byte stream over one exclusively owned I/O resource.

    Attributes:
        source: What the stream was created from (a path or a handle).
                Kept for logging only.
        state: Current lifecycle state.

    Example:
        with StreamHandle("payload.bin", "rb") as body:
            head = body.read(16)
        # resource closed here
    """

    def __init__(self, source: Any, mode: str = "r"):
        """
        Open or adopt the underlying resource.

        Args:
            source: A filesystem path (str or os.PathLike) to open, or an
                    already-open handle to adopt.
            mode: Mode used when `source` is a path. Paths are always opened
                  in binary; a "b" is added when missing.

        Raises:
            InvalidArgumentError: If source is neither a path nor a handle,
                                  or the path cannot be opened.
        """
        self.source = source
        self._eof = False

        if isinstance(source, (str, os.PathLike)):
            self._resource = self._open(source, mode)
            logger.debug(f"Opened stream {os.fspath(source)!r} with mode {mode!r}")
        elif _is_handle(source):
            self._resource = source
            logger.debug(f"Adopted stream handle {type(source).__name__}")
        else:
            raise InvalidArgumentError(
                f"Invalid stream source: {type(source).__name__}",
                argument="source",
            )

        self.state = StreamState.OPEN

    @staticmethod
    def _open(path, mode: str):
        if not isinstance(mode, str) or not mode:
            raise InvalidArgumentError(f"Invalid stream mode: {mode!r}", argument="mode")
        if "b" not in mode:
            mode += "b"
        try:
            return open(path, mode)
        except (OSError, ValueError) as e:
            raise InvalidArgumentError(
                f"Unable to open stream {os.fspath(path)!r}: {e}",
                argument="source",
            ) from e

    # =========================================================================
    # OWNERSHIP
    # =========================================================================

    @property
    def closed(self) -> bool:
        """True once the stream no longer holds a resource."""
        return self._resource is None

    def detach(self):
        """
        Separate the underlying resource from the stream.

        Ownership moves to the caller, who becomes responsible for closing
        it. The stream is unusable for I/O afterwards.

        Returns:
            The raw resource, or None if nothing is held.
        """
        resource = self._resource
        self._resource = None
        if resource is not None:
            self.state = StreamState.DETACHED
            logger.debug(f"Detached stream {self._label()}")
        return resource

    def close(self) -> None:
        """
        Close the stream and release the underlying resource.

        Safe to call more than once.
        """
        if self._resource is None:
            return  # Already closed or detached

        resource = self.detach()
        self.state = StreamState.CLOSED

        try:
            resource.close()
        except OSError as e:
            logger.warning(f"Closing stream {self._label()} failed: {e}")
            raise

        logger.debug(f"Closed stream {self._label()}")

    def __enter__(self) -> "StreamHandle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure the resource is released."""
        self.close()
        return False  # Don't suppress exceptions

    def __repr__(self) -> str:
        return f"StreamHandle({self._label()}, state={self.state.value})"

    def __bytes__(self) -> bytes:
        """The remaining contents; bytes(stream) == stream.get_contents()."""
        return self.get_contents()

    # =========================================================================
    # CAPABILITIES
    # =========================================================================

    def is_readable(self) -> bool:
        """Whether the handle's mode allows reading."""
        if self._resource is None:
            return False
        mode = self.get_metadata("mode") or ""
        return any(flag in mode for flag in _READ_FLAGS)

    def is_writable(self) -> bool:
        """
        Whether the handle's mode allows writing.

        Derived from the handle's own mode metadata, so a file opened
        with "r" is never writable even if the filesystem would allow it.
        """
        if self._resource is None:
            return False
        mode = self.get_metadata("mode") or ""
        return any(flag in mode for flag in _WRITE_FLAGS)

    def is_seekable(self) -> bool:
        if self._resource is None:
            return False
        return bool(self.get_metadata("seekable"))

    # =========================================================================
    # POSITION
    # =========================================================================

    def tell(self) -> Optional[int]:
        """Current position of the read/write pointer, or None once detached."""
        if self._resource is None:
            return None
        return self._resource.tell()

    def eof(self) -> bool:
        """
        Whether the stream is at its end.

        Seekable streams compare the position with the size. Other streams
        report end-of-stream once a read has come back empty.
        """
        if self._resource is None:
            return True

        if self.is_seekable():
            size = self.get_size()
            if size is not None:
                return self._resource.tell() >= size

        return self._eof

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> bool:
        """
        Move the pointer.

        Args:
            offset: Stream offset.
            whence: io.SEEK_SET, io.SEEK_CUR or io.SEEK_END.

        Returns:
            True on success, False if the stream is not seekable or the
            underlying handle refuses the position.
        """
        if not self.is_seekable():
            return False

        try:
            self._resource.seek(int(offset), int(whence))
        except (OSError, ValueError):
            return False

        self._eof = False
        return True

    def rewind(self) -> bool:
        """Seek to the beginning of the stream."""
        return self.seek(0)

    def get_size(self) -> Optional[int]:
        """
        Size of the stream in bytes, if known.

        ┌─────────────────────────────────────────────────────────────────┐
        │  1. Real file?        → os.fstat(fileno).st_size                │
        │  2. Seekable?         → seek to end, note position, seek back   │
        │  3. Anything else     → None                                    │
        └─────────────────────────────────────────────────────────────────┘
        """
        if self._resource is None:
            return None

        try:
            fileno = self._resource.fileno()
        except (OSError, AttributeError, io.UnsupportedOperation):
            fileno = None

        if fileno is not None:
            try:
                # Flush pending writes so fstat sees them
                if hasattr(self._resource, "flush"):
                    self._resource.flush()
                info = os.fstat(fileno)
            except (OSError, ValueError):
                info = None
            if info is not None and stat.S_ISREG(info.st_mode):
                return info.st_size

        if self.is_seekable():
            position = self._resource.tell()
            try:
                return self._resource.seek(0, io.SEEK_END)
            finally:
                self._resource.seek(position)

        return None

    # =========================================================================
    # READING
    # =========================================================================

    def read(self, length: int) -> Union[bytes, Literal[False]]:
        """
        Read up to `length` bytes.

        Fewer bytes may be returned if the underlying handle returns fewer.

        Returns:
            The bytes read, b"" at end of stream, or False if the stream
            is not readable.
        """
        if not self.is_readable():
            return False

        if self.eof():
            return b""

        data = self._resource.read(int(length))
        if not data:
            self._eof = True
            return b""
        return _as_bytes(data)

    def get_contents(self) -> bytes:
        """
        Read the remaining contents of the stream.

        Reads from the CURRENT position to the end. The stream is not
        rewound first; call rewind() beforehand to get everything.

        Returns:
            The remaining bytes, or b"" if the stream is not readable.
        """
        if not self.is_readable():
            return b""

        data = self._resource.read()
        self._eof = True
        return _as_bytes(data or b"")

    # =========================================================================
    # WRITING
    # =========================================================================

    def write(self, data: Union[bytes, str]) -> Union[int, Literal[False]]:
        """
        Write data to the stream.

        Args:
            data: Bytes-like data to write. Strings are encoded as UTF-8.

        Returns:
            Number of bytes written, or False if the stream is not writable.

        Raises:
            InvalidArgumentError: If data is neither bytes-like nor a string.
        """
        if isinstance(data, str):
            payload = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            payload = bytes(data)
        else:
            raise InvalidArgumentError(
                f"Invalid data: expected bytes or str, got {type(data).__name__}",
                argument="data",
            )

        if not self.is_writable():
            return False

        if isinstance(self._resource, io.TextIOBase):
            self._resource.write(payload.decode("utf-8"))
            return len(payload)

        written = self._resource.write(payload)
        return len(payload) if written is None else written

    # =========================================================================
    # METADATA
    # =========================================================================

    def get_metadata(self, key: Optional[str] = None):
        """
        Get stream metadata, or a single metadata value.

        Keys:
            mode          File mode string ("rb", "wb", "rb+", ...)
            seekable      Whether the handle supports seek()
            uri           Path or name of the resource, if any
            closed        Whether the underlying handle reports closed
            wrapper_type  Class name of the underlying handle

        Returns:
            The full dict when key is None, the value for key (None for
            unknown keys), or None once the stream is detached.
        """
        if self._resource is None:
            return None

        meta = self._describe()
        if key is not None:
            return meta.get(key)
        return meta

    def _describe(self) -> Dict[str, Any]:
        resource = self._resource
        closed = bool(getattr(resource, "closed", False))

        mode = getattr(resource, "mode", None)
        if not isinstance(mode, str):
            mode = _derive_mode(resource, closed)

        seekable = False
        if not closed:
            try:
                seekable = bool(resource.seekable())
            except (AttributeError, OSError, ValueError):
                seekable = False

        uri = getattr(resource, "name", None)
        if isinstance(uri, int):
            uri = None  # Raw file descriptor, not a path
        elif isinstance(uri, os.PathLike):
            uri = os.fspath(uri)

        return {
            "mode": mode,
            "seekable": seekable,
            "uri": uri,
            "closed": closed,
            "wrapper_type": type(resource).__name__,
        }

    def _label(self) -> str:
        if isinstance(self.source, (str, os.PathLike)):
            return repr(os.fspath(self.source))
        return type(self.source).__name__


# =============================================================================
# HELPERS
# =============================================================================

def _is_handle(candidate: Any) -> bool:
    """Accept io objects and anything with a callable read() or write()."""
    if isinstance(candidate, io.IOBase):
        return True
    return callable(getattr(candidate, "read", None)) or callable(
        getattr(candidate, "write", None)
    )


def _derive_mode(resource: Any, closed: bool) -> str:
    """Build a mode string for handles without one (BytesIO, sockets, ...)."""
    if closed:
        return ""

    def _can(probe_name: str, method_name: str) -> bool:
        probe = getattr(resource, probe_name, None)
        if callable(probe):
            try:
                return bool(probe())
            except (OSError, ValueError):
                return False
        # Duck-typed handle: infer from the presence of read()/write()
        return callable(getattr(resource, method_name, None))

    readable = _can("readable", "read")
    writable = _can("writable", "write")

    if readable and writable:
        return "rb+"
    if readable:
        return "rb"
    if writable:
        return "wb"
    return ""


def _as_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)
