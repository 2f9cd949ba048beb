"""
Input validation before a run.
"""

from pathlib import Path
from typing import Dict, List, Tuple

from ..io.fasta_reader import validate_fasta_file


def validate_inputs(
    reference: str,
    query: str,
    matches: str,
    config: Dict
) -> Tuple[bool, List[str]]:
    """
    Validate all pipeline inputs.

    Args:
        reference: Path to the reference FASTA
        query: Path to the query FASTA
        matches: Path to the match stream, or "-" for stdin
        config: Pipeline configuration

    Returns:
        Tuple of (is_valid, error_messages)
    """
    errors = []

    for label, path in (('Reference', reference), ('Query', query)):
        if not path:
            errors.append(f"{label} FASTA file not given")
            continue
        valid, msg = validate_fasta_file(path)
        if not valid:
            errors.append(f"{label} FASTA file: {msg}")

    if matches and matches != '-' and not Path(matches).is_file():
        errors.append(f"Match file does not exist: {matches}")

    prefix = config.get('io', {}).get('output_prefix')
    if prefix and config.get('output', {}).get('write_summary', True):
        out_dir = Path(prefix).parent
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            errors.append(f"Cannot create output directory {out_dir}: {e}")

    return len(errors) == 0, errors
