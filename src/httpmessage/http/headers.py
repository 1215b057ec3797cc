"""
=============================================================================
HEADER COLLECTION
=============================================================================

An immutable, ordered, case-insensitive mapping of header names to their
values.

=============================================================================
STORAGE MODEL
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        Headers._entries                              │
    ├──────────────────┬──────────────────┬───────────────────────────────┤
    │  lookup key      │  display name    │  values (never empty)         │
    ├──────────────────┼──────────────────┼───────────────────────────────┤
    │  "content-type"  │  "Content-Type"  │  ("text/html",)               │
    │  "accept"        │  "Accept"        │  ("text/html", "*/*")         │
    │  "x-request-id"  │  "X-Request-ID"  │  ("a1b2c3d4",)                │
    └──────────────────┴──────────────────┴───────────────────────────────┘

    • Lookups lower-case the name: "CONTENT-TYPE" finds "Content-Type"
    • Iteration yields display names in insertion order
    • Repeated names are merged, never duplicated:
          "Accept: text/html" + "Accept: */*"  →  ("text/html", "*/*")

=============================================================================
HEADER VALUES
=============================================================================

A header value is supplied either as ONE string or as a SEQUENCE of
strings. Both are normalized to a tuple:

    "text/html"                 →  ("text/html",)
    ["gzip", "deflate"]         →  ("gzip", "deflate")
    []                          →  InvalidArgumentError (values are never empty)
    42, b"bytes", [1, 2]        →  InvalidArgumentError

=============================================================================
"""

from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import InvalidArgumentError


HeaderValue = Union[str, Sequence[str]]


def validate_header_name(name) -> str:
    """
    Check a header name.

    Raises:
        InvalidArgumentError: If name is not a non-empty string.
    """
    if not isinstance(name, str):
        raise InvalidArgumentError(
            f"Invalid header name: expected a string, got {type(name).__name__}",
            argument="name",
        )
    if not name:
        raise InvalidArgumentError("Invalid header name: must not be empty", argument="name")
    return name


def normalize_header_value(value) -> Tuple[str, ...]:
    """
    Normalize a single value or a sequence of values to a tuple.

    Raises:
        InvalidArgumentError: If value is neither a string nor a non-empty
                              list/tuple of strings.
    """
    if isinstance(value, str):
        return (value,)

    if not isinstance(value, (list, tuple)):
        raise InvalidArgumentError(
            f"Invalid header value: expected a string or list of strings, "
            f"got {type(value).__name__}",
            argument="value",
        )

    if not value:
        raise InvalidArgumentError("Invalid header value: empty list", argument="value")

    for item in value:
        if not isinstance(item, str):
            raise InvalidArgumentError(
                f"Invalid header value: expected strings, got {type(item).__name__}",
                argument="value",
            )

    return tuple(value)


class Headers(Mapping[str, Tuple[str, ...]]):
    """
    Immutable case-insensitive header mapping.

    Mutators (set, add, remove) return a new Headers and leave the
    receiver untouched.

    Example:
        headers = Headers({"Accept": "text/html"})
        headers = headers.add("accept", "*/*")

        headers["ACCEPT"]         # ("text/html", "*/*")
        headers.get_line("Accept")  # "text/html, */*"
        list(headers)             # ["Accept"]
    """

    __slots__ = ("_entries",)

    def __init__(self, headers: Optional[Mapping[str, HeaderValue]] = None):
        """
        Build from a mapping of name → value(s).

        Names that differ only by case are merged; the first spelling wins
        as display name.

        Raises:
            InvalidArgumentError: If headers is not a mapping, or any name
                                  or value is invalid.
        """
        self._entries: Dict[str, Tuple[str, Tuple[str, ...]]] = {}

        if headers is None:
            return

        if not isinstance(headers, Mapping):
            raise InvalidArgumentError(
                f"Invalid headers: expected a mapping, got {type(headers).__name__}",
                argument="headers",
            )

        for name, value in headers.items():
            self._append(validate_header_name(name), normalize_header_value(value))

    # =========================================================================
    # MAPPING PROTOCOL
    # =========================================================================

    def __getitem__(self, name: str) -> Tuple[str, ...]:
        if not isinstance(name, str):
            raise KeyError(name)
        return self._entries[name.lower()][1]

    def __iter__(self) -> Iterator[str]:
        for display, _values in self._entries.values():
            yield display

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __repr__(self) -> str:
        return f"Headers({self.to_dict()!r})"

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def get_lines(self, name: str) -> List[str]:
        """All values of a header, [] if absent."""
        if name not in self:
            return []
        return list(self[name])

    def get_line(self, name: str) -> str:
        """All values of a header joined with ", ", "" if absent."""
        return ", ".join(self.get_lines(name))

    def to_dict(self) -> Dict[str, List[str]]:
        """Plain {display name: [values]} copy, in insertion order."""
        return {display: list(values) for display, values in self._entries.values()}

    # =========================================================================
    # DERIVATION - each returns a NEW Headers
    # =========================================================================

    def set(self, name: str, value: HeaderValue, preserve_case: bool = False) -> "Headers":
        """
        Replace every value of `name`.

        The entry keeps its position, but its display name becomes
        name.lower() unless preserve_case is set.
        """
        name = validate_header_name(name)
        values = normalize_header_value(value)

        new = self._copy()
        new._entries[name.lower()] = (name if preserve_case else name.lower(), values)
        return new

    def add(self, name: str, value: HeaderValue) -> "Headers":
        """Append value(s) to `name`, creating the header if absent."""
        name = validate_header_name(name)
        values = normalize_header_value(value)

        new = self._copy()
        new._append(name, values)
        return new

    def remove(self, name: str) -> "Headers":
        """Drop `name`. Returns self when the header is absent."""
        if name not in self:
            return self

        new = self._copy()
        del new._entries[name.lower()]
        return new

    def _copy(self) -> "Headers":
        new = Headers()
        new._entries = dict(self._entries)  # Values are tuples; shallow is enough
        return new

    def _append(self, name: str, values: Tuple[str, ...]) -> None:
        key = name.lower()
        if key in self._entries:
            display, existing = self._entries[key]
            self._entries[key] = (display, existing + values)
        else:
            self._entries[key] = (name, values)
