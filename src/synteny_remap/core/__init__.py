"""
Streaming reconstruction of synteny groups from clustered match output.
"""

from .errors import (
    SyntenyRemapError,
    EmptyReferenceError,
    InputFormatError,
    CoordinateRangeError,
    DuplicateReferenceError,
    StraddlingClusterError,
    QueryOrderError,
)
from .records import (
    FORWARD,
    REVERSE,
    SequenceRecord,
    ReferenceCollection,
    MatchTriple,
    Cluster,
    SyntenyGroup,
    SyntenyBatch,
)
from .offsets import OffsetTable
from .scanner import (
    QueryHeader,
    ClusterBreak,
    MatchLine,
    EndOfInput,
    scan_records,
)
from .remapper import MatchRemapper, RemapResult, RemapStatus
from .assembler import ClusterAssembler

__all__ = [
    # Errors
    'SyntenyRemapError',
    'EmptyReferenceError',
    'InputFormatError',
    'CoordinateRangeError',
    'DuplicateReferenceError',
    'StraddlingClusterError',
    'QueryOrderError',

    # Records
    'FORWARD',
    'REVERSE',
    'SequenceRecord',
    'ReferenceCollection',
    'MatchTriple',
    'Cluster',
    'SyntenyGroup',
    'SyntenyBatch',

    # Engine parts
    'OffsetTable',
    'QueryHeader',
    'ClusterBreak',
    'MatchLine',
    'EndOfInput',
    'scan_records',
    'MatchRemapper',
    'RemapResult',
    'RemapStatus',
    'ClusterAssembler',
]
