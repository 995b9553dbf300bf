"""Binary encoding of status records stored as database values."""

from __future__ import annotations

import struct

import xxhash

from .errors import DeserializationError, SerializationError
from .model import StatusRecord
from .status_codec import sorted_items

_MAGIC = b"GST1"
# magic + xxh64(body) + entry count
_HEADER = struct.Struct("<4sQI")
_STR_LEN = struct.Struct("<I")
# code length + file count
_ENTRY = struct.Struct("<IQ")


def _digest(body: bytes) -> int:
    return int(xxhash.xxh64(body).intdigest())


def _pack_text(buf: bytearray, text: str) -> None:
    raw = text.encode("utf-8")
    buf += _STR_LEN.pack(len(raw))
    buf += raw


def dump_record(record: StatusRecord) -> bytes:
    """Serialize a record; entries are written in code order so output is stable."""
    body = bytearray()
    try:
        _pack_text(body, record.path)
        _pack_text(body, record.branch)
        items = sorted_items(record.file_states)
        for code, count in items:
            raw_code = code.encode("utf-8")
            body += _ENTRY.pack(len(raw_code), count)
            body += raw_code
        header = _HEADER.pack(_MAGIC, _digest(bytes(body)), len(items))
    except (struct.error, UnicodeEncodeError, TypeError) as exc:
        raise SerializationError(
            f"cannot serialize status for {record.path!r}: {exc}"
        ) from exc
    return header + bytes(body)


def _read_text(data: bytes, offset: int) -> tuple[str, int]:
    (length,) = _STR_LEN.unpack_from(data, offset)
    offset += _STR_LEN.size
    end = offset + length
    if end > len(data):
        raise DeserializationError("truncated string field")
    return data[offset:end].decode("utf-8"), end


def load_record(data: bytes) -> StatusRecord:
    """Deserialize bytes written by :func:`dump_record`."""
    if len(data) < _HEADER.size:
        raise DeserializationError("record shorter than header")
    magic, digest, count = _HEADER.unpack_from(data, 0)
    if magic != _MAGIC:
        raise DeserializationError(f"unknown record magic {magic!r}")
    body = data[_HEADER.size :]
    if _digest(body) != digest:
        raise DeserializationError("record checksum mismatch")
    try:
        offset = 0
        path, offset = _read_text(body, offset)
        branch, offset = _read_text(body, offset)
        states: dict[str, int] = {}
        for _ in range(count):
            code_len, value = _ENTRY.unpack_from(body, offset)
            offset += _ENTRY.size
            end = offset + code_len
            if end > len(body):
                raise DeserializationError("truncated status code")
            states[body[offset:end].decode("utf-8")] = value
            offset = end
    except (struct.error, UnicodeDecodeError) as exc:
        raise DeserializationError(f"corrupt record: {exc}") from exc
    if offset != len(body):
        raise DeserializationError("trailing bytes after record")
    return StatusRecord(path=path, branch=branch, file_states=states)
