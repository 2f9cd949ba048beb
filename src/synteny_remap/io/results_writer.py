"""
Run report writing for the synteny remapping pipeline.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional


def clean_configuration(config: dict) -> dict:
    """Drop private keys and anything that will not serialise to JSON."""
    config_copy = {}
    for key, value in config.items():
        if key.startswith('_'):
            continue
        try:
            json.dumps(value)
            config_copy[key] = value
        except (TypeError, ValueError):
            config_copy[key] = str(type(value))
    return config_copy


def save_run_summary(
    output_prefix: str,
    batches: List[Dict[str, Any]],
    statistics: Dict[str, Any],
    reference: Optional[str] = None,
    query: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    performance: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Save the per-query batch summaries of a run as ``<prefix>.summary.json``.

    Args:
        output_prefix: Path prefix for the report
        batches: One summary dict per flushed batch
        statistics: Run counters from the flush controller
        reference: Reference FASTA path
        query: Query FASTA path
        config: Optional configuration dictionary
        performance: Optional timing/memory report

    Returns:
        Path of the written report
    """
    report_path = Path(f"{output_prefix}.summary.json")
    report_path.parent.mkdir(parents=True, exist_ok=True)

    report = {
        'timestamp': datetime.now().isoformat(),
        'reference': reference,
        'query': query,
        'statistics': statistics,
        'num_batches': len(batches),
        'batches': batches,
    }
    if config is not None:
        report['configuration'] = clean_configuration(config)
    if performance is not None:
        report['performance'] = performance

    with open(report_path, 'w') as f:
        json.dump(report, f, indent=2)

    return str(report_path)


__all__ = [
    'clean_configuration',
    'save_run_summary',
]
