from __future__ import annotations

import os
from dataclasses import dataclass, field

from .status_codec import decode

_SEPARATORS = frozenset(sep for sep in ("/", os.sep, os.altsep) if sep)


def canonicalize(path: str) -> str:
    """Trim whitespace and drop one trailing separator (``foo/bar/`` -> ``foo/bar``)."""
    trimmed = path.strip()
    if trimmed and trimmed[-1] in _SEPARATORS:
        return trimmed[:-1]
    return trimmed


@dataclass(frozen=True, slots=True)
class StatusRecord:
    path: str
    branch: str = ""
    file_states: dict[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, path: str, branch: str = "", raw_status: str = "") -> StatusRecord:
        """Create a record from command input; raises ParseError on bad status."""
        return cls(
            path=canonicalize(path),
            branch=branch.strip(),
            file_states=decode(raw_status.strip()),
        )

    @classmethod
    def empty(cls) -> StatusRecord:
        return cls(path="")
