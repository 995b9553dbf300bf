"""Codec for the raw ``<count> <code>|...`` status grammar."""

from __future__ import annotations

from collections.abc import Mapping

from .errors import ParseError

_SEGMENT_SEP = "|"
_JOIN_SEP = "| "
_U64_MAX = 0xFFFFFFFFFFFFFFFF


def _parse_count(text: str, *, segment: str, index: int) -> int:
    if not text or not (text.isascii() and text.isdigit()):
        raise ParseError(
            f"segment {index} has invalid count {text!r}: {segment!r}",
            segment=segment,
            index=index,
        )
    count = int(text)
    if count > _U64_MAX:
        raise ParseError(
            f"segment {index} count out of range: {segment!r}",
            segment=segment,
            index=index,
        )
    return count


def _parse_segment(segment: str, index: int) -> tuple[str, int]:
    count_text, sep, code = segment.partition(" ")
    if not sep:
        raise ParseError(
            f"segment {index} is missing a space between count and code: {segment!r}",
            segment=segment,
            index=index,
        )
    count = _parse_count(count_text, segment=segment, index=index)
    if not code or any(ch.isspace() for ch in code):
        raise ParseError(
            f"segment {index} has invalid status code {code!r}: {segment!r}",
            segment=segment,
            index=index,
        )
    return code, count


def decode(raw: str) -> dict[str, int]:
    """
    Decode a raw status string such as ``"3 M|1 ??"`` into ``{code: count}``.

    Segments are split on ``|`` and stripped; empty segments are skipped, so
    the padded output of :func:`encode` decodes back to the same mapping.
    A code that appears twice keeps its last count.
    """
    out: dict[str, int] = {}
    for index, chunk in enumerate(raw.split(_SEGMENT_SEP)):
        segment = chunk.strip()
        if not segment:
            continue
        code, count = _parse_segment(segment, index)
        out[code] = count
    return out


def _sort_key(item: tuple[str, int]) -> bytes:
    return item[0].encode("utf-8", errors="surrogatepass")


def sorted_items(states: Mapping[str, int]) -> list[tuple[str, int]]:
    """Return entries ordered by code, byte-wise ascending."""
    return sorted(states.items(), key=_sort_key)


def encode(states: Mapping[str, int]) -> str:
    """Render ``{code: count}`` as ``"<count> <code> | <count> <code> "``."""
    return _JOIN_SEP.join(f"{count} {code} " for code, count in sorted_items(states))
