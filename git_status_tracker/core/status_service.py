"""Command handlers that connect CLI input to the status store."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .model import StatusRecord
from .status_codec import encode
from .store import StatusStore


def put_status(
    store: StatusStore, path: str, branch: str = "", raw_status: str = ""
) -> StatusRecord:
    record = StatusRecord.build(path, branch, raw_status)
    store.put(record)
    return record


def format_get(record: StatusRecord) -> str:
    """Two lines: trimmed branch, then encoded file states."""
    return f"{record.branch.strip()}\n{encode(record.file_states)}"


def get_status(store: StatusStore, path: str) -> str:
    return format_get(store.get(path))


def format_list_line(record: StatusRecord) -> str:
    return f"{record.path}: {record.branch} {record.file_states!r}"


def iter_list_lines(records: Iterable[StatusRecord]) -> Iterator[str]:
    for record in records:
        yield format_list_line(record)


def list_statuses(store: StatusStore) -> Iterator[str]:
    return iter_list_lines(store.list_all())
