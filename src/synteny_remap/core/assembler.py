"""
Cluster and synteny-group assembly.

Matches arrive one at a time; each cluster is bound to the reference
sequence of its first in-bounds match and filed under that sequence's
synteny group when it closes.
"""

import logging
from typing import Optional

from .errors import DuplicateReferenceError, StraddlingClusterError
from .records import Cluster, ReferenceCollection, SyntenyBatch, SyntenyGroup
from .remapper import RemapResult

logger = logging.getLogger('synteny_remap')


class ClusterAssembler:
    """
    Builds the synteny batch for one query at a time.

    ``current_group`` carries over between clusters: a cluster that never
    receives an in-bounds match is still filed, under the group used last.
    """

    def __init__(self, references: ReferenceCollection):
        self.references = references
        self.batch = SyntenyBatch(references)
        self.current_group: Optional[SyntenyGroup] = None

        self._cluster: Optional[Cluster] = None
        self._bound_id: Optional[str] = None

        self.empty_clusters_dropped = 0

    # ------------------------------------------------------------------
    # cluster lifecycle
    # ------------------------------------------------------------------
    @property
    def cluster_open(self) -> bool:
        return self._cluster is not None

    def open_cluster(self, strand: str) -> Cluster:
        if self._cluster is not None:
            self.close_cluster()
        self._cluster = Cluster(strand)
        self._bound_id = None
        return self._cluster

    def add(self, result: RemapResult):
        """Add a remapped match to the open cluster."""
        if not result.in_bounds:
            return

        record = self.references[result.ref_index]
        if self._bound_id is None:
            self.current_group = self._bind(result.ref_index)
            self._bound_id = record.id
        elif record.id != self._bound_id:
            raise StraddlingClusterError(
                f"A cluster was found straddling two reference sequences: "
                f"'{self._bound_id}' and '{record.id}'"
            )

        if result.keep:
            self._cluster.matches.append(result.match)

    def close_cluster(self):
        if self._cluster is None:
            return

        cluster, self._cluster = self._cluster, None
        self._bound_id = None

        if self.current_group is None:
            # nothing in this batch to file it under
            self.empty_clusters_dropped += 1
            logger.debug("Dropping empty cluster with no synteny group to attach to")
            return

        self.current_group.clusters.append(cluster)

    # ------------------------------------------------------------------
    # batch lifecycle
    # ------------------------------------------------------------------
    def take_batch(self, next_query_id: Optional[str] = None) -> SyntenyBatch:
        """Hand over the finished batch and start an empty one."""
        self.close_cluster()
        batch = self.batch
        self.batch = SyntenyBatch(self.references, next_query_id)
        self.current_group = None
        return batch

    def _bind(self, ref_index: int) -> SyntenyGroup:
        record = self.references[ref_index]
        group = self.batch.find_group(record.id)

        if group is None:
            group = self.batch.add_group(ref_index)
            logger.debug(f"New synteny group for reference '{record.id}'")
        elif group.ref_length != record.length:
            raise DuplicateReferenceError(
                f"The reference file may contain sequences with non-unique header "
                f"ids ('{record.id}' has lengths {group.ref_length} and {record.length}); "
                f"check your input files"
            )
        return group
