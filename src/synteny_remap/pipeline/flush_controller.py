"""
Drives a single pass over the match stream.

State machine::

    NO_ACTIVE_QUERY -> LOADING_QUERY -> ACCUMULATING
    ACCUMULATING --(header, new id)--> flush -> LOADING_QUERY
    ACCUMULATING --(end of input)----> flush -> DONE

A flush hands the current synteny batch and the active query record to the
processor, but only when the batch holds at least one group.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

from ..config.config_loader import ExtensionOptions
from ..core.assembler import ClusterAssembler
from ..core.offsets import OffsetTable
from ..core.records import ReferenceCollection, SequenceRecord, SyntenyBatch
from ..core.remapper import MatchRemapper, RemapStatus
from ..core.scanner import ClusterBreak, EndOfInput, MatchLine, QueryHeader, ScanEvent
from ..io.fasta_reader import QuerySource

logger = logging.getLogger('synteny_remap')

BatchHandler = Callable[[SyntenyBatch, SequenceRecord], Any]


class ControllerState(Enum):
    NO_ACTIVE_QUERY = 'no_active_query'
    LOADING_QUERY = 'loading_query'
    ACCUMULATING = 'accumulating'
    DONE = 'done'


@dataclass
class RunStatistics:
    queries_loaded: int = 0
    flushes: int = 0
    match_lines: int = 0
    matches_kept: int = 0
    short_matches: int = 0
    boundary_violations: int = 0
    clusters: int = 0
    synteny_groups: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class FlushController:
    """
    Glues scanner events to the remapper, the assembler and the processor.

    Args:
        references: Loaded reference collection
        query_source: Forward-only query reader
        processor: Called as ``processor(batch, query)`` on each flush
        options: Extension settings passed through to the processor
        monitor: Optional object with a ``sample()`` method, called per flush
    """

    def __init__(
        self,
        references: ReferenceCollection,
        query_source: QuerySource,
        processor: BatchHandler,
        options: Optional[ExtensionOptions] = None,
        monitor=None,
    ):
        self.references = references
        self.query_source = query_source
        self.processor = processor
        self.options = options or ExtensionOptions()
        self.monitor = monitor

        self.table = OffsetTable(references)
        self.remapper = MatchRemapper(self.table)
        self.assembler = ClusterAssembler(references)

        self.state = ControllerState.NO_ACTIVE_QUERY
        self.query: Optional[SequenceRecord] = None
        self.strand: Optional[str] = None
        self.stats = RunStatistics()
        logger.debug(f"Extension options: {self.options.to_dict()}")

    # ------------------------------------------------------------------
    def run(self, events: Iterable[ScanEvent]) -> RunStatistics:
        """Consume ``events`` to the end and return the run counters."""
        for event in events:
            if isinstance(event, MatchLine):
                self.on_match(event)
            elif isinstance(event, ClusterBreak):
                self.on_break(event)
            elif isinstance(event, QueryHeader):
                self.on_header(event)
            elif isinstance(event, EndOfInput):
                self.on_end(event)
                break

        if self.state is not ControllerState.DONE:
            # event source stopped without an EndOfInput
            self.on_end(EndOfInput())

        self.stats.boundary_violations = self.remapper.boundary_violations
        return self.stats

    # ------------------------------------------------------------------
    def on_header(self, event: QueryHeader):
        self.assembler.close_cluster()

        if self.query is None or event.id != self.query.id:
            if self.assembler.batch:
                self.flush()
            else:
                self.assembler.take_batch()
            self._load_query(event.id)

        self.strand = event.strand
        self.state = ControllerState.ACCUMULATING

    def on_match(self, event: MatchLine):
        self.stats.match_lines += 1
        if not self.assembler.cluster_open:
            self.assembler.open_cluster(self.strand)

        result = self.remapper.remap(event)
        if result.status is RemapStatus.VALID:
            self.stats.matches_kept += 1
        elif result.status is RemapStatus.SHORT:
            self.stats.short_matches += 1
        self.assembler.add(result)

    def on_break(self, event: ClusterBreak):
        # a break right after a header or another break still makes a cluster
        if not self.assembler.cluster_open:
            self.assembler.open_cluster(self.strand)
        self.assembler.close_cluster()

    def on_end(self, event: EndOfInput):
        self.assembler.close_cluster()
        if self.assembler.batch:
            self.flush()
        self.state = ControllerState.DONE
        logger.debug(f"End of match stream after line {event.line_number}")

    # ------------------------------------------------------------------
    def flush(self):
        """Hand the current batch to the processor and start a new one."""
        batch = self.assembler.take_batch()
        self.stats.flushes += 1
        self.stats.synteny_groups += len(batch)
        self.stats.clusters += batch.cluster_count

        logger.debug(f"Flushing {len(batch)} synteny group(s) for query '{self.query.id}'")
        self.processor(batch, self.query)

        if self.monitor is not None:
            self.monitor.sample()

    def _load_query(self, query_id: str):
        self.state = ControllerState.LOADING_QUERY
        self.query = self.query_source.advance_to(query_id)
        self.assembler.batch.query_id = query_id
        self.stats.queries_loaded += 1
        logger.debug(f"Loaded query '{query_id}' ({self.query.length:,} bp), "
                     f"record {self.query_source.records_read} of the query file")


__all__ = [
    'ControllerState',
    'RunStatistics',
    'FlushController',
]
