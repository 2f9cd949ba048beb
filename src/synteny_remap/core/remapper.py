"""
Translate raw matches into per-sequence reference coordinates.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .offsets import OffsetTable
from .records import MatchTriple
from .scanner import MatchLine

logger = logging.getLogger('synteny_remap')


class RemapStatus(Enum):
    VALID = 'valid'          # in bounds, kept
    SHORT = 'short'          # in bounds, length <= 1, not stored
    BOUNDARY = 'boundary'    # crosses a sequence boundary, skipped


@dataclass(frozen=True)
class RemapResult:
    status: RemapStatus
    ref_index: int
    match: MatchTriple       # local reference coordinates

    @property
    def in_bounds(self) -> bool:
        return self.status is not RemapStatus.BOUNDARY

    @property
    def keep(self) -> bool:
        return self.status is RemapStatus.VALID


class MatchRemapper:
    """
    Classifies each raw match against the offset table.

    Out-of-range starts propagate :class:`CoordinateRangeError` from the
    table; boundary violations are logged and reported as
    ``RemapStatus.BOUNDARY``.
    """

    def __init__(self, table: OffsetTable):
        self.table = table
        self.boundary_violations = 0

    def remap(self, raw: MatchLine) -> RemapResult:
        index, local = self.table.remap(raw.ref_start)
        record = self.table.references[index]
        match = MatchTriple(local, raw.query_start, raw.length)

        # local <= 0 catches starts on a separator and before the first sequence
        if match.ref_end > record.length or local <= 0:
            self.boundary_violations += 1
            self._warn_boundary(record.id, raw)
            return RemapResult(RemapStatus.BOUNDARY, index, match)

        if raw.length <= 1:
            return RemapResult(RemapStatus.SHORT, index, match)

        return RemapResult(RemapStatus.VALID, index, match)

    def _warn_boundary(self, ref_id: str, raw: MatchLine):
        where = f" (line {raw.line_number})" if raw.line_number else ""
        logger.warning(
            f"A match was found extending beyond the boundary of reference "
            f"sequence '>{ref_id}'{where}: start={raw.ref_start} length={raw.length}. "
            f"Check that the upstream matcher ran with sequence separators; skipping."
        )

