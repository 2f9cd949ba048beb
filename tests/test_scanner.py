"""
Tests for the match stream scanner.
"""

import pytest

from synteny_remap.core.errors import InputFormatError
from synteny_remap.core.records import FORWARD, REVERSE
from synteny_remap.core.scanner import (
    ClusterBreak,
    EndOfInput,
    MatchLine,
    QueryHeader,
    parse_header,
    parse_match,
    scan_records,
)


def test_scan_full_stream():
    lines = [
        ">Q1\n",
        "      12       3     4\n",
        "#\n",
        "       5       6     7      -      -\n",
        "> Q1 Reverse\n",
        "\n",
        "1 2 3\n",
    ]
    events = list(scan_records(lines))

    assert [type(e) for e in events] == [
        QueryHeader, MatchLine, ClusterBreak, MatchLine, QueryHeader, MatchLine, EndOfInput
    ]
    assert (events[0].id, events[0].strand) == ("Q1", FORWARD)
    assert (events[1].ref_start, events[1].query_start, events[1].length) == (12, 3, 4)
    assert (events[3].ref_start, events[3].query_start, events[3].length) == (5, 6, 7)
    assert (events[4].id, events[4].strand) == ("Q1", REVERSE)
    assert events[5].line_number == 7


def test_scan_empty_stream():
    events = list(scan_records([]))

    assert len(events) == 1
    assert isinstance(events[0], EndOfInput)


def test_scan_must_start_with_header():
    with pytest.raises(InputFormatError):
        list(scan_records(["1 2 3\n"]))

    with pytest.raises(InputFormatError):
        list(scan_records(["#\n", ">Q1\n"]))


def test_scan_is_lazy():
    """Errors surface only when the bad line is reached."""
    events = scan_records(iter([">Q1\n", "not a match\n"]))

    first = next(events)
    assert isinstance(first, QueryHeader)

    with pytest.raises(InputFormatError):
        next(events)


def test_malformed_match_reports_line():
    with pytest.raises(InputFormatError) as exc_info:
        list(scan_records([">Q1\n", "1 2 3\n", "1 2\n"]))

    assert exc_info.value.line_number == 3
    assert "line 3" in str(exc_info.value)


def test_parse_match_rejects_non_integers():
    with pytest.raises(InputFormatError):
        parse_match("1 x 3")

    with pytest.raises(InputFormatError):
        parse_match("1.5 2 3")


def test_parse_match_rejects_non_positive_length():
    with pytest.raises(InputFormatError):
        parse_match("10 2 0")

    with pytest.raises(InputFormatError):
        parse_match("10 2 -4")


def test_parse_match_ignores_gap_columns():
    match = parse_match("    1045      12     31     10     12\n", 9)

    assert (match.ref_start, match.query_start, match.length) == (1045, 12, 31)
    assert match.line_number == 9


def test_parse_header_strand():
    assert parse_header(">Q1\n").strand == FORWARD
    assert parse_header(">Q1 Reverse\n").strand == REVERSE
    assert parse_header(">Q1 some description Reverse\n").strand == REVERSE

    # the marker is looked for after the identifier only
    header = parse_header(">Reverse\n")
    assert header.id == "Reverse"
    assert header.strand == FORWARD


def test_parse_header_without_id():
    with pytest.raises(InputFormatError):
        parse_header(">\n")

    with pytest.raises(InputFormatError):
        parse_header(">   \n")
