"""Messages exchanged between the virtual file system and file system servers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from typing import ClassVar

from bigos.pstring import PString

_U8 = 8
_U16 = 16
_U32 = 32
_U64 = 64


def _check_uint(name: str, value: object, bits: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} must fit in {bits} unsigned bits, got {value}")


def _as_bytes(name: str, value: object) -> bytes:
    if isinstance(value, PString):
        return value.to_bytes()
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes or text, got {type(value).__name__}")


class RequestType(enum.IntEnum):
    """Kinds of request a client sends."""

    VERSION = 0
    CONNECT = enum.auto()
    WALK = enum.auto()
    STAT = enum.auto()
    CREATE = enum.auto()
    DELETE = enum.auto()
    OPEN = enum.auto()
    READ = enum.auto()
    WRITE = enum.auto()
    WSTAT = enum.auto()
    CLOSE = enum.auto()


class ResponseType(enum.IntEnum):
    """Kinds of response a server sends."""

    VERSION = 0
    CONNECT = enum.auto()
    WALK = enum.auto()
    STAT = enum.auto()
    CREATE = enum.auto()
    DELETE = enum.auto()
    OPEN = enum.auto()
    READ = enum.auto()
    WRITE = enum.auto()
    WSTAT = enum.auto()
    CLOSE = enum.auto()
    ERROR = enum.auto()


def response_for(request_type: RequestType | int) -> ResponseType:
    """The response type that answers a successful request of the given type."""
    return ResponseType(RequestType(request_type))


@dataclass(frozen=True)
class _Checked:
    _WIDTHS: ClassVar[dict[str, int]] = {}

    def __post_init__(self) -> None:
        for f in fields(self):
            bits = self._WIDTHS.get(f.name)
            if bits is not None:
                _check_uint(f.name, getattr(self, f.name), bits)


@dataclass(frozen=True)
class TreeCursor(_Checked):
    """Abstract position in a server's file tree."""

    _WIDTHS: ClassVar[dict[str, int]] = {"ino": _U64}
    ino: int


@dataclass(frozen=True)
class CreateInfo(_Checked):
    """What to create."""

    _WIDTHS: ClassVar[dict[str, int]] = {"permissions": _U16, "file_type": _U16}
    permissions: int
    file_type: int


@dataclass(frozen=True)
class MessageMetadata(_Checked):
    """Size, tag and kind of a message; a response carries its request's tag."""

    _WIDTHS: ClassVar[dict[str, int]] = {"size": _U32, "tag": _U16}
    size: int
    tag: int
    message_type: RequestType | ResponseType

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.message_type, (RequestType, ResponseType)):
            raise TypeError("message_type must be a RequestType or a ResponseType")

    @property
    def is_response(self) -> bool:
        return isinstance(self.message_type, ResponseType)


@dataclass(frozen=True)
class RequestVersion(_Checked):
    """Negotiate protocol version and largest message size."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.VERSION
    _WIDTHS: ClassVar[dict[str, int]] = {"max_size": _U32, "version": _U32}
    max_size: int
    version: int


@dataclass(frozen=True)
class ResponseVersion(_Checked):
    """The server's protocol version and largest message size."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.VERSION
    _WIDTHS: ClassVar[dict[str, int]] = {"max_size": _U32, "version": _U32}
    max_size: int
    version: int


@dataclass(frozen=True)
class RequestConnect(_Checked):
    """Ask for the root of the server's tree."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.CONNECT
    _WIDTHS: ClassVar[dict[str, int]] = {"uid": _U32}
    uid: int


@dataclass(frozen=True)
class ResponseConnect:
    """Cursor at the root of the tree."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.CONNECT
    cursor: TreeCursor


@dataclass(frozen=True)
class RequestWalk(_Checked):
    """Move a cursor along a sequence of names."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.WALK
    _WIDTHS: ClassVar[dict[str, int]] = {"uid": _U32}
    uid: int
    cursor: TreeCursor
    walk_path: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        path = tuple(_as_bytes("walk_path", part) for part in self.walk_path)
        _check_uint("walk_count", len(path), _U16)
        object.__setattr__(self, "walk_path", path)

    @property
    def walk_count(self) -> int:
        return len(self.walk_path)


@dataclass(frozen=True)
class ResponseWalk:
    """Cursor at the new position."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.WALK
    cursor: TreeCursor


@dataclass(frozen=True)
class RequestStat(_Checked):
    """Ask for information about the file under a cursor."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.STAT
    _WIDTHS: ClassVar[dict[str, int]] = {"uid": _U32}
    uid: int
    cursor: TreeCursor


@dataclass(frozen=True)
class ResponseStat(_Checked):
    """File information."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.STAT
    _WIDTHS: ClassVar[dict[str, int]] = {"stat": _U8}
    stat: int


@dataclass(frozen=True)
class RequestCreate(_Checked):
    """Create a file named name below the cursor."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.CREATE
    _WIDTHS: ClassVar[dict[str, int]] = {"uid": _U32}
    uid: int
    cursor: TreeCursor
    create_info: CreateInfo
    name: bytes

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "name", _as_bytes("name", self.name))


@dataclass(frozen=True)
class ResponseCreate:
    """Cursor at the newly created file."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.CREATE
    cursor: TreeCursor


@dataclass(frozen=True)
class RequestDelete(_Checked):
    """Delete the file under a cursor."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.DELETE
    _WIDTHS: ClassVar[dict[str, int]] = {"uid": _U32}
    uid: int
    cursor: TreeCursor


@dataclass(frozen=True)
class ResponseDelete:
    """The file was deleted."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.DELETE


@dataclass(frozen=True)
class RequestOpen(_Checked):
    """Open the file under a cursor."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.OPEN
    _WIDTHS: ClassVar[dict[str, int]] = {"uid": _U32, "mode": _U8}
    uid: int
    cursor: TreeCursor
    mode: int


@dataclass(frozen=True)
class ResponseOpen(_Checked):
    """Handle of the opened file and the most data one message may carry."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.OPEN
    _WIDTHS: ClassVar[dict[str, int]] = {"file_handle": _U64, "max_atomic_op": _U32}
    file_handle: int
    max_atomic_op: int


@dataclass(frozen=True)
class RequestRead(_Checked):
    """Read count bytes at offset."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.READ
    _WIDTHS: ClassVar[dict[str, int]] = {"file_handle": _U64, "offset": _U64, "count": _U32}
    file_handle: int
    offset: int
    count: int


@dataclass(frozen=True)
class ResponseRead:
    """The bytes read."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.READ
    data: bytes = b""

    def __post_init__(self) -> None:
        data = _as_bytes("data", self.data)
        _check_uint("count", len(data), _U32)
        object.__setattr__(self, "data", data)

    @property
    def count(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class RequestWrite(_Checked):
    """Write data at offset."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.WRITE
    _WIDTHS: ClassVar[dict[str, int]] = {"file_handle": _U64, "offset": _U64}
    file_handle: int
    offset: int
    data: bytes = b""

    def __post_init__(self) -> None:
        super().__post_init__()
        data = _as_bytes("data", self.data)
        _check_uint("count", len(data), _U32)
        object.__setattr__(self, "data", data)

    @property
    def count(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ResponseWrite(_Checked):
    """Number of bytes written."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.WRITE
    _WIDTHS: ClassVar[dict[str, int]] = {"count": _U32}
    count: int


@dataclass(frozen=True)
class RequestWstat(_Checked):
    """Change file information."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.WSTAT
    _WIDTHS: ClassVar[dict[str, int]] = {"file_handle": _U64, "stat_data": _U8}
    file_handle: int
    stat_data: int


@dataclass(frozen=True)
class ResponseWstat:
    """File information was changed."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.WSTAT


@dataclass(frozen=True)
class RequestClose(_Checked):
    """Close an open file."""

    REQUEST_TYPE: ClassVar[RequestType] = RequestType.CLOSE
    _WIDTHS: ClassVar[dict[str, int]] = {"file_handle": _U64}
    file_handle: int


@dataclass(frozen=True)
class ResponseClose:
    """The file was closed."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.CLOSE


@dataclass(frozen=True)
class ResponseError:
    """A request failed."""

    RESPONSE_TYPE: ClassVar[ResponseType] = ResponseType.ERROR
    error_name: str