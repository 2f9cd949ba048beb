"""
Tests for match classification against the reference boundaries.
"""

import logging

import pytest

from synteny_remap.core.errors import CoordinateRangeError
from synteny_remap.core.offsets import OffsetTable
from synteny_remap.core.records import MatchTriple
from synteny_remap.core.remapper import MatchRemapper, RemapStatus
from synteny_remap.core.scanner import MatchLine

from .helpers import make_references


def make_remapper():
    return MatchRemapper(OffsetTable(make_references(("seq1", 10), ("seq2", 5))))


def test_valid_match_is_translated():
    result = make_remapper().remap(MatchLine(12, 3, 4))

    assert result.status is RemapStatus.VALID
    assert result.ref_index == 1
    assert result.match == MatchTriple(1, 3, 4)
    assert result.keep and result.in_bounds


def test_match_ending_on_last_base_is_valid():
    result = make_remapper().remap(MatchLine(7, 1, 4))

    assert result.status is RemapStatus.VALID
    assert result.match.ref_end == 10


def test_separator_start_is_boundary_violation(caplog):
    remapper = make_remapper()

    with caplog.at_level(logging.WARNING, logger='synteny_remap'):
        result = remapper.remap(MatchLine(11, 5, 3))

    assert result.status is RemapStatus.BOUNDARY
    assert (result.ref_index, result.match.ref_start) == (1, 0)
    assert not result.in_bounds
    assert remapper.boundary_violations == 1
    assert "seq2" in caplog.text


def test_overhanging_match_is_boundary_violation(caplog):
    remapper = make_remapper()

    with caplog.at_level(logging.WARNING, logger='synteny_remap'):
        result = remapper.remap(MatchLine(8, 1, 4))

    assert result.status is RemapStatus.BOUNDARY
    assert "seq1" in caplog.text


def test_non_positive_start_is_boundary_violation():
    remapper = make_remapper()

    assert remapper.remap(MatchLine(0, 1, 3)).status is RemapStatus.BOUNDARY
    assert remapper.remap(MatchLine(-2, 1, 3)).status is RemapStatus.BOUNDARY
    assert remapper.boundary_violations == 2


def test_length_one_is_short_not_violation(caplog):
    remapper = make_remapper()

    with caplog.at_level(logging.WARNING, logger='synteny_remap'):
        result = remapper.remap(MatchLine(12, 3, 1))

    assert result.status is RemapStatus.SHORT
    assert result.in_bounds
    assert not result.keep
    assert remapper.boundary_violations == 0
    assert caplog.text == ""


def test_out_of_range_is_fatal():
    with pytest.raises(CoordinateRangeError):
        make_remapper().remap(MatchLine(100, 1, 5))
