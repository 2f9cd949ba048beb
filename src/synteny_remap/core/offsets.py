"""
Cumulative offset table over a concatenated reference.

The upstream match finder sees all reference sequences joined end to
end with one separator position between neighbours, so sequence ``i``
starts at ``sum(L_k + 1 for k < i)``.
"""

from typing import Tuple

import numpy as np

from .errors import CoordinateRangeError
from .records import ReferenceCollection

# Cursor steps tried before falling back to a binary search
CURSOR_MAX_STEPS = 8


class OffsetTable:
    """Maps a concatenated coordinate to (sequence index, local coordinate)."""

    def __init__(self, references: ReferenceCollection):
        self.references = references
        lengths = np.asarray(references.lengths, dtype=np.int64)

        self.lengths = lengths
        self.offsets = np.zeros(len(lengths), dtype=np.int64)
        if len(lengths) > 1:
            self.offsets[1:] = np.cumsum(lengths[:-1] + 1)

        # last valid global coordinate
        self.span = int(self.offsets[-1] + lengths[-1])

        # python ints for the scalar cursor path
        self._offsets = self.offsets.tolist()
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._offsets)

    def offset(self, index: int) -> int:
        return self._offsets[index]

    def remap(self, global_pos: int) -> Tuple[int, int]:
        """
        Translate ``global_pos`` into ``(index, local)``.

        ``index`` is the last sequence whose offset is <= ``global_pos``.
        Coordinates below the first offset resolve to sequence 0 with a
        non-positive local coordinate; the caller treats that as a
        boundary violation.

        Raises:
            CoordinateRangeError: ``global_pos`` is past the end of the
                last reference sequence.
        """
        if global_pos > self.span:
            raise CoordinateRangeError(
                f"Match start {global_pos} is beyond the concatenated reference "
                f"span of {self.span} over {len(self)} sequence(s)"
            )

        index = self._locate(global_pos)
        return index, global_pos - self._offsets[index]

    def _locate(self, global_pos: int) -> int:
        offsets = self._offsets
        n = len(offsets)
        cur = self._cursor

        if global_pos >= offsets[cur]:
            # moving forward: walk a few steps before giving up on the cursor
            for _ in range(CURSOR_MAX_STEPS):
                if cur + 1 < n and offsets[cur + 1] <= global_pos:
                    cur += 1
                else:
                    self._cursor = cur
                    return cur

        cur = int(np.searchsorted(self.offsets, global_pos, side='right')) - 1
        cur = max(cur, 0)
        self._cursor = cur
        return cur
