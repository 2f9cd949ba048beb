from .fasta_reader import (
    validate_fasta_file,
    iter_fasta_records,
    load_reference_collection,
    QuerySource,
)

from .results_writer import (
    clean_configuration,
    save_run_summary,
)

__all__ = [
    # Fasta reader functions
    'validate_fasta_file',
    'iter_fasta_records',
    'load_reference_collection',
    'QuerySource',

    # Results writer functions
    'clean_configuration',
    'save_run_summary',
]
