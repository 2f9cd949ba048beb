"""
Rebuild per-reference synteny groups from clustered MUM output.
"""

__version__ = "1.0.0"
__description__ = "Coordinate remapping and synteny grouping for clustered MUM streams"

from .core import (
    SyntenyRemapError,
    SequenceRecord,
    ReferenceCollection,
    MatchTriple,
    Cluster,
    SyntenyGroup,
    SyntenyBatch,
    OffsetTable,
    scan_records,
)
from .config import ExtensionOptions, load_config

__all__ = [
    'SyntenyRemapError',
    'SequenceRecord',
    'ReferenceCollection',
    'MatchTriple',
    'Cluster',
    'SyntenyGroup',
    'SyntenyBatch',
    'OffsetTable',
    'scan_records',
    'ExtensionOptions',
    'load_config',

    # Version info
    '__version__',
    '__description__',
]
