"""
Shared fixtures for the test-suite.
"""

import io

from synteny_remap.core.records import ReferenceCollection, SequenceRecord
from synteny_remap.pipeline.processors import SyntenyProcessor


def make_references(*specs):
    """Build a ReferenceCollection from (id, length) pairs."""
    return ReferenceCollection(SequenceRecord(name, "ACGT" * (length // 4) + "A" * (length % 4))
                               for name, length in specs)


def fasta_handle(records):
    """In-memory FASTA from (id, sequence) pairs."""
    text = "".join(f">{name}\n{seq}\n" for name, seq in records)
    return io.StringIO(text)


class RecordingProcessor(SyntenyProcessor):
    """Copies every flushed batch out for later inspection."""

    def __init__(self, options=None):
        super().__init__(options)
        self.flushed = []

    def process(self, batch, query):
        self.flushed.append({
            'query': query.id,
            'query_length': query.length,
            'groups': [
                (group.ref_id, [(c.strand, list(c.matches)) for c in group.clusters])
                for group in batch
            ],
        })
