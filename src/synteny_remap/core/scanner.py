"""
Line scanner for clustered match streams.

Input looks like::

    > query_1
      1045    12   31
      1102    70   25
    #
      8830   301   40
    > query_1 Reverse
      ...

Headers start with ``>``, clusters are separated by ``#`` lines and every
other non-blank line is a match: reference start (in concatenated
coordinates), query start and length. Extra columns after the first three
are ignored.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from .errors import InputFormatError
from .records import FORWARD, REVERSE

HEADER_CHAR = '>'
BREAK_CHAR = '#'
REVERSE_MARKER = ' Reverse'


# ================================================================
# EVENTS
# ================================================================
@dataclass(frozen=True)
class QueryHeader:
    id: str
    strand: str
    line_number: int = 0


@dataclass(frozen=True)
class ClusterBreak:
    line_number: int = 0


@dataclass(frozen=True)
class MatchLine:
    ref_start: int
    query_start: int
    length: int
    line_number: int = 0


@dataclass(frozen=True)
class EndOfInput:
    line_number: int = 0


ScanEvent = Union[QueryHeader, ClusterBreak, MatchLine, EndOfInput]


# ================================================================
# PARSERS
# ================================================================
def parse_header(line: str, line_number: int = 0) -> QueryHeader:
    """Parse a ``>`` line into a :class:`QueryHeader`."""
    body = line[1:].rstrip('\r\n')
    fields = body.split()
    if not fields:
        raise InputFormatError("query header without an identifier", line_number)

    query_id = fields[0]
    # the strand marker lives after the identifier
    rest = body[body.index(query_id) + len(query_id):]
    strand = REVERSE if REVERSE_MARKER in rest else FORWARD
    return QueryHeader(query_id, strand, line_number)


def parse_match(line: str, line_number: int = 0) -> MatchLine:
    """Parse a match line; only the first three columns are used."""
    fields = line.split()
    if len(fields) < 3:
        raise InputFormatError(f"expected three integers, got '{line.strip()}'", line_number)
    try:
        ref_start, query_start, length = (int(f) for f in fields[:3])
    except ValueError:
        raise InputFormatError(f"expected three integers, got '{line.strip()}'", line_number) from None

    if length < 1:
        raise InputFormatError(f"match length must be positive, got {length}", line_number)
    return MatchLine(ref_start, query_start, length, line_number)


def scan_records(lines: Iterable[str]) -> Iterator[ScanEvent]:
    """
    Turn the lines of a match stream into scan events.

    The generator reads lazily and ends with exactly one
    :class:`EndOfInput`.

    Raises:
        InputFormatError: the stream does not open with a header, a header
            has no identifier, or a match line is malformed.
    """
    line_number = 0
    seen_content = False

    for line_number, line in enumerate(lines, start=1):
        if not seen_content:
            if not line.startswith(HEADER_CHAR):
                raise InputFormatError(f"input must start with '{HEADER_CHAR}'", line_number)
            seen_content = True

        first = line[:1]
        if first == HEADER_CHAR:
            yield parse_header(line, line_number)
        elif first == BREAK_CHAR:
            yield ClusterBreak(line_number)
        elif not line.strip():
            continue
        else:
            yield parse_match(line, line_number)

    yield EndOfInput(line_number)
