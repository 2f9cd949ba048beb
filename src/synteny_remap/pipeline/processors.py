"""
Synteny processors: the consumers of flushed batches.

The flush controller calls ``process`` synchronously once per query that
collected at least one synteny group. The batch and the query record are
only valid during that call; a processor that needs them later must copy
what it uses.
"""

import logging
from typing import Any, Dict, List

from ..config.config_loader import ExtensionOptions
from ..core.records import SequenceRecord, SyntenyBatch

logger = logging.getLogger('synteny_remap')


class SyntenyProcessor:
    """Base class for batch consumers."""

    def __init__(self, options: ExtensionOptions = None):
        self.options = options or ExtensionOptions()
        self.calls = 0

    def __call__(self, batch: SyntenyBatch, query: SequenceRecord):
        self.calls += 1
        self.process(batch, query)

    def process(self, batch: SyntenyBatch, query: SequenceRecord):
        raise NotImplementedError

    def close(self):
        """Called once after the final flush."""


class SummaryProcessor(SyntenyProcessor):
    """Records the shape of every flushed batch for the run report."""

    def __init__(self, options: ExtensionOptions = None):
        super().__init__(options)
        self.summaries: List[Dict[str, Any]] = []

    def process(self, batch: SyntenyBatch, query: SequenceRecord):
        groups = []
        for group in batch:
            reverse = sum(1 for c in group.clusters if c.is_reverse)
            groups.append({
                'reference': group.ref_id,
                'reference_length': group.ref_length,
                'clusters': len(group.clusters),
                'forward_clusters': len(group.clusters) - reverse,
                'reverse_clusters': reverse,
                'matches': group.match_count,
                'matched_bases': sum(m.length for c in group.clusters for m in c.matches),
            })

        summary = {
            'query': query.id,
            'query_length': query.length,
            'groups': groups,
            'clusters': batch.cluster_count,
            'matches': batch.match_count,
        }
        self.summaries.append(summary)

        if self.options.do_delta:
            logger.info(f"Query '{query.id}': {len(groups)} synteny group(s), "
                        f"{summary['clusters']} cluster(s), {summary['matches']} match(es)")
        else:
            logger.info(f"Query '{query.id}': {summary['clusters']} cluster(s) "
                        f"across {len(groups)} reference(s)")


__all__ = [
    'SyntenyProcessor',
    'SummaryProcessor',
]
