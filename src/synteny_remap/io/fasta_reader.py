"""
FASTA input for reference collections and query sequences.
"""

import logging
import os
from typing import Iterator, Optional, Tuple, Union, TextIO

from Bio import SeqIO

from ..core.errors import DuplicateReferenceError, EmptyReferenceError, QueryOrderError
from ..core.records import ReferenceCollection, SequenceRecord

logger = logging.getLogger('synteny_remap')

FastaSource = Union[str, os.PathLike, TextIO]


def validate_fasta_file(filepath: str) -> Tuple[bool, str]:
    """
    Cheap sanity check on a FASTA path.

    Only the first line is inspected; the file is parsed properly when it
    is loaded.

    Returns:
        Tuple of (is_valid, message)
    """
    if not os.path.exists(filepath):
        return False, f"File does not exist: {filepath}"

    if not os.path.isfile(filepath):
        return False, f"Not a file: {filepath}"

    if os.path.getsize(filepath) == 0:
        return False, f"File is empty: {filepath}"

    try:
        with open(filepath, 'r') as f:
            first_line = f.readline().strip()
            if not first_line.startswith('>'):
                return False, f"File does not start with '>' character: {filepath}"
    except UnicodeDecodeError:
        return False, f"File is not a valid text file: {filepath}"

    return True, f"FASTA file looks valid: {filepath}"


def iter_fasta_records(source: FastaSource) -> Iterator[SequenceRecord]:
    """Yield :class:`SequenceRecord` objects one at a time."""
    for record in SeqIO.parse(source, "fasta"):
        yield SequenceRecord(record.id, str(record.seq))


def load_reference_collection(source: FastaSource, strict_ids: bool = False) -> ReferenceCollection:
    """
    Read every reference sequence into memory.

    Args:
        source: Path or open handle of the reference FASTA
        strict_ids: Reject duplicate identifiers with different lengths
            now rather than when a match first lands on them

    Raises:
        EmptyReferenceError: the FASTA holds no sequences
        DuplicateReferenceError: ``strict_ids`` and a clashing identifier
    """
    records = list(iter_fasta_records(source))
    if not records:
        raise EmptyReferenceError(f"No reference sequences found in {_describe(source)}")

    if strict_ids:
        seen = {}
        for rec in records:
            if rec.id in seen and seen[rec.id] != rec.length:
                raise DuplicateReferenceError(
                    f"The reference file contains sequences with non-unique header "
                    f"id '{rec.id}' (lengths {seen[rec.id]} and {rec.length})"
                )
            seen.setdefault(rec.id, rec.length)

    collection = ReferenceCollection(records)
    logger.info(f"Loaded {len(collection)} reference sequence(s), "
                f"{collection.total_length:,} bp total")
    return collection


class QuerySource:
    """
    Forward-only reader over the query FASTA.

    Queries must be requested in file order; skipping ahead is allowed,
    going back is not.
    """

    def __init__(self, source: FastaSource):
        self.source = source
        self._records = iter_fasta_records(source)
        self.current: Optional[SequenceRecord] = None
        self.records_read = 0

    def advance_to(self, query_id: str) -> SequenceRecord:
        """
        Read forward until the record named ``query_id``.

        Raises:
            QueryOrderError: the FASTA ran out first
        """
        if self.current is not None and self.current.id == query_id:
            return self.current

        for record in self._records:
            self.records_read += 1
            self.current = record
            if record.id == query_id:
                return record

        self.current = None
        raise QueryOrderError(
            f"Query file did not find '{query_id}'. It is missing or not in "
            f"the same order as the match stream."
        )


def _describe(source: FastaSource) -> str:
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return getattr(source, 'name', '<stream>')


__all__ = [
    'validate_fasta_file',
    'iter_fasta_records',
    'load_reference_collection',
    'QuerySource',
]
