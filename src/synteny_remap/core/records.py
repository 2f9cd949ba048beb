"""
Data containers shared by the scanner, the assembler and the processors.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import EmptyReferenceError

FORWARD = '+'
REVERSE = '-'


# ================================================================
# SEQUENCES
# ================================================================
@dataclass(frozen=True)
class SequenceRecord:
    """
    A named sequence addressed with 1-based coordinates.

    ``base(1)`` is the first residue and ``subsequence(1, length)``
    returns the whole sequence.
    """
    id: str
    seq: str

    @property
    def length(self) -> int:
        return len(self.seq)

    def __len__(self) -> int:
        return len(self.seq)

    def base(self, pos: int) -> str:
        """Residue at 1-based position ``pos``."""
        if pos < 1 or pos > len(self.seq):
            raise IndexError(f"Position {pos} outside 1..{len(self.seq)} of '{self.id}'")
        return self.seq[pos - 1]

    def subsequence(self, start: int, end: int) -> str:
        """Inclusive 1-based slice."""
        if start < 1 or end > len(self.seq) or start > end + 1:
            raise IndexError(f"Range {start}..{end} outside 1..{len(self.seq)} of '{self.id}'")
        return self.seq[start - 1:end]


class ReferenceCollection:
    """Ordered, read-only set of reference sequences."""

    def __init__(self, records: Iterable[SequenceRecord]):
        self._records: Tuple[SequenceRecord, ...] = tuple(records)
        if not self._records:
            raise EmptyReferenceError("Reference collection is empty")

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> SequenceRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[SequenceRecord]:
        return iter(self._records)

    @property
    def lengths(self) -> List[int]:
        return [rec.length for rec in self._records]

    @property
    def ids(self) -> List[str]:
        return [rec.id for rec in self._records]

    @property
    def total_length(self) -> int:
        return sum(self.lengths)


# ================================================================
# MATCHES AND CLUSTERS
# ================================================================
@dataclass(frozen=True)
class MatchTriple:
    ref_start: int    # reference start (local once remapped)
    query_start: int  # query start
    length: int       # match length

    @property
    def ref_end(self) -> int:
        return self.ref_start + self.length - 1

    @property
    def query_end(self) -> int:
        return self.query_start + self.length - 1


@dataclass
class Cluster:
    strand: str
    matches: List[MatchTriple] = field(default_factory=list)

    @property
    def is_reverse(self) -> bool:
        return self.strand == REVERSE

    def __len__(self) -> int:
        return len(self.matches)


@dataclass
class SyntenyGroup:
    """Clusters found against one reference sequence for the current query."""
    ref_index: int
    ref_id: str
    ref_length: int
    clusters: List[Cluster] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return sum(len(c) for c in self.clusters)


class SyntenyBatch:
    """
    Synteny groups collected for a single query sequence.

    Groups keep an index into ``references`` rather than the record
    itself; use :meth:`reference` to resolve it.
    """

    def __init__(self, references: ReferenceCollection, query_id: Optional[str] = None):
        self.references = references
        self.query_id = query_id
        self.groups: List[SyntenyGroup] = []

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[SyntenyGroup]:
        return iter(self.groups)

    def __bool__(self) -> bool:
        return bool(self.groups)

    def reference(self, group: SyntenyGroup) -> SequenceRecord:
        return self.references[group.ref_index]

    def find_group(self, ref_id: str) -> Optional[SyntenyGroup]:
        # newest first: repeated hits on the same reference come in runs
        for group in reversed(self.groups):
            if group.ref_id == ref_id:
                return group
        return None

    def add_group(self, ref_index: int) -> SyntenyGroup:
        record = self.references[ref_index]
        group = SyntenyGroup(ref_index=ref_index, ref_id=record.id, ref_length=record.length)
        self.groups.append(group)
        return group

    @property
    def cluster_count(self) -> int:
        return sum(len(g.clusters) for g in self.groups)

    @property
    def match_count(self) -> int:
        return sum(g.match_count for g in self.groups)
