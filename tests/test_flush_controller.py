"""
Tests for query transitions and batch hand-off.
"""

import io

import pytest

from synteny_remap.core.errors import DuplicateReferenceError, QueryOrderError
from synteny_remap.core.records import FORWARD, REVERSE, MatchTriple
from synteny_remap.core.scanner import MatchLine, QueryHeader, scan_records
from synteny_remap.io.fasta_reader import QuerySource
from synteny_remap.pipeline.flush_controller import ControllerState, FlushController

from .helpers import RecordingProcessor, fasta_handle, make_references

QUERIES = [("Q1", "ACGTACGTAC"), ("Q2", "GGGCCCAAAT"), ("Q3", "TTTTAAAACC")]


def make_controller(refs=(("seq1", 10), ("seq2", 5)), queries=QUERIES):
    processor = RecordingProcessor()
    controller = FlushController(
        make_references(*refs),
        QuerySource(fasta_handle(queries)),
        processor,
    )
    return controller, processor


def run_stream(controller, text):
    return controller.run(scan_records(io.StringIO(text)))


def test_query_change_flushes_previous_batch_once():
    """Q1's batch is handed over before Q2 starts accumulating."""
    controller, processor = make_controller()

    controller.on_header(QueryHeader("Q1", FORWARD))
    controller.on_match(MatchLine(2, 1, 4))
    assert processor.flushed == []

    controller.on_header(QueryHeader("Q2", FORWARD))

    assert processor.calls == 1
    assert processor.flushed[0]['query'] == "Q1"
    assert processor.flushed[0]['groups'] == [
        ("seq1", [(FORWARD, [MatchTriple(2, 1, 4)])])
    ]
    assert controller.query.id == "Q2"
    assert len(controller.assembler.batch) == 0


def test_final_flush_at_end_of_input():
    controller, processor = make_controller()

    stats = run_stream(controller, ">Q1\n2 1 4\n>Q2\n13 1 3\n")

    assert [f['query'] for f in processor.flushed] == ["Q1", "Q2"]
    assert processor.flushed[1]['groups'] == [
        ("seq2", [(FORWARD, [MatchTriple(2, 1, 3)])])
    ]
    assert stats.flushes == 2
    assert stats.queries_loaded == 2
    assert controller.state is ControllerState.DONE


def test_empty_batch_never_flushed():
    controller, processor = make_controller()

    stats = run_stream(controller, ">Q1\n>Q2\n11 1 3\n")

    assert processor.calls == 0
    assert stats.flushes == 0
    assert stats.queries_loaded == 2
    assert stats.boundary_violations == 1


def test_empty_input_does_nothing():
    controller, processor = make_controller()

    stats = run_stream(controller, "")

    assert processor.calls == 0
    assert stats.queries_loaded == 0
    assert controller.state is ControllerState.DONE


def test_same_query_reverse_section_keeps_batch():
    controller, processor = make_controller()

    run_stream(controller, ">Q1\n2 1 4\n> Q1 Reverse\n3 2 4\n")

    assert processor.calls == 1
    (ref_id, clusters), = processor.flushed[0]['groups']
    assert ref_id == "seq1"
    assert [strand for strand, _ in clusters] == [FORWARD, REVERSE]


def test_boundary_violation_inside_cluster_is_skipped(caplog):
    controller, processor = make_controller()

    stats = run_stream(controller, ">Q1\n2 1 4\n11 5 3\n4 6 3\n")

    (ref_id, clusters), = processor.flushed[0]['groups']
    assert clusters == [(FORWARD, [MatchTriple(2, 1, 4), MatchTriple(4, 6, 3)])]
    assert stats.boundary_violations == 1
    assert stats.matches_kept == 2


def test_short_matches_never_stored():
    controller, processor = make_controller()

    stats = run_stream(controller, ">Q1\n2 1 1\n4 6 3\n#\n5 1 1\n")

    (ref_id, clusters), = processor.flushed[0]['groups']
    assert clusters == [(FORWARD, [MatchTriple(4, 6, 3)]), (FORWARD, [])]
    assert stats.short_matches == 2


def test_consecutive_breaks_keep_empty_cluster():
    controller, processor = make_controller()

    stats = run_stream(controller, ">Q1\n2 1 4\n#\n#\n3 1 3\n")

    (ref_id, clusters), = processor.flushed[0]['groups']
    assert [len(matches) for _, matches in clusters] == [1, 0, 1]
    assert stats.clusters == 3


def test_header_after_break_adds_no_cluster():
    controller, processor = make_controller()

    run_stream(controller, ">Q1\n2 1 4\n#\n>Q2\n")

    (ref_id, clusters), = processor.flushed[0]['groups']
    assert len(clusters) == 1


def test_query_out_of_order_is_fatal():
    controller, processor = make_controller()

    with pytest.raises(QueryOrderError):
        run_stream(controller, ">Q2\n2 1 4\n>Q1\n2 1 4\n")

    # Q2's batch was flushed before the failed lookup of Q1
    assert [f['query'] for f in processor.flushed] == ["Q2"]


def test_missing_query_is_fatal():
    controller, processor = make_controller()

    with pytest.raises(QueryOrderError, match="Q9"):
        run_stream(controller, ">Q9\n2 1 4\n")
    assert processor.calls == 0


def test_queries_can_be_skipped_forward():
    controller, processor = make_controller()

    run_stream(controller, ">Q1\n2 1 4\n>Q3\n2 1 4\n")

    assert [(f['query'], f['query_length']) for f in processor.flushed] == [("Q1", 10), ("Q3", 10)]


def test_non_unique_reference_aborts_before_flush():
    controller, processor = make_controller(refs=(("seqX", 10), ("seqX", 6)))

    with pytest.raises(DuplicateReferenceError, match="non-unique header"):
        run_stream(controller, ">Q1\n2 1 3\n#\n12 1 3\n")

    assert processor.calls == 0
