"""Parsing of single-range ``Range: bytes=<start>-<end>`` headers.

Only one range with an explicit start is supported. Parsing runs in three
steps (syntax, positions, satisfiability) so each 416 cause is reported
separately.
"""

from dataclasses import dataclass

from errors import MalformedRange, RangeNotSatisfiable

RANGE_UNIT = "bytes"


@dataclass(frozen=True)
class ByteRange:
    start: int
    end: int  # inclusive

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, size: int) -> str:
        return f"{RANGE_UNIT} {self.start}-{self.end}/{size}"


def _parse_position(text: str) -> int | None:
    if not text or not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def parse_range(header: str | None, size: int) -> ByteRange | None:
    """Resolve a Range header against an object of ``size`` bytes.

    Returns None when no header was sent. A header that is present but
    empty is malformed, not absent.
    """
    if header is None:
        return None

    unit, sep, ranges = header.partition("=")
    if not sep or unit != RANGE_UNIT:
        raise MalformedRange(f"Unsupported range unit in {header!r}", size)
    if "," in ranges:
        raise MalformedRange("Multiple ranges are not supported", size)

    start_text, dash, end_text = ranges.partition("-")
    if not dash:
        raise MalformedRange(f"Invalid range {header!r}", size)
    if not start_text:
        raise MalformedRange("Suffix ranges are not supported", size)

    start = _parse_position(start_text)
    if start is None:
        raise MalformedRange(f"Invalid range start {start_text!r}", size)
    if end_text:
        end = _parse_position(end_text)
        if end is None:
            raise MalformedRange(f"Invalid range end {end_text!r}", size)
    else:
        end = size - 1

    if start > end or end >= size:
        raise RangeNotSatisfiable(
            f"Range {start}-{end} not satisfiable for {size} bytes", size
        )
    return ByteRange(start, end)
