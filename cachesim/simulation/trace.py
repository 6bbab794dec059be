"""Trace reader.

A trace is a text file with one access per line:

    r 0000a3f0
    w 7fff0010

The first field is the operation (`r` read, `w` write) and the second is the
address in hex. Records are produced lazily so large traces are never held
in memory. A malformed record raises TraceFormatError and ends the run.
"""
import re
from typing import Iterable, Iterator, NamedTuple

from cachesim.core.address import ADDRESS_MASK
from cachesim.core.errors import TraceFormatError
from cachesim.core.hierarchy import READ, WRITE


# plain ASCII hex digits, optionally signed with a leading +
HEX_ADDRESS = re.compile(r"\+?[0-9A-Fa-f]+")


class TraceRecord(NamedTuple):
    op: str
    address: int


def parse_line(line: str, line_no: int = 0) -> TraceRecord:
    parts = line.split()
    if len(parts) != 2:
        raise TraceFormatError(f"expected '<r|w> <hex-address>', got {line.strip()!r}", line_no, line)
    op, raw_addr = parts
    if op not in (READ, WRITE):
        raise TraceFormatError(f"unknown operation {op!r}", line_no, line)
    if not HEX_ADDRESS.fullmatch(raw_addr):
        raise TraceFormatError(f"invalid hex address {raw_addr!r}", line_no, line)
    address = int(raw_addr, 16)
    if address > ADDRESS_MASK:
        raise TraceFormatError(f"address {raw_addr!r} does not fit in 32 bits", line_no, line)
    return TraceRecord(op, address)


def parse_lines(lines: Iterable[str]) -> Iterator[TraceRecord]:
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield parse_line(line, line_no)


def read_trace(path: str) -> Iterator[TraceRecord]:
    """Yield the records of the trace file at `path`."""
    with open(path, 'r', encoding='utf-8') as fh:
        yield from parse_lines(fh)


__all__ = ["TraceRecord", "parse_line", "parse_lines", "read_trace"]
