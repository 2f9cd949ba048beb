import sys
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, Any, Optional, TextIO, Union

from ..config.config_loader import load_config, apply_overrides, ExtensionOptions
from ..core.errors import SyntenyRemapError
from ..core.scanner import scan_records
from ..diagnostics.performance import RunMonitor
from ..io.fasta_reader import load_reference_collection, QuerySource
from ..io.results_writer import save_run_summary
from .flush_controller import FlushController, RunStatistics
from .processors import SyntenyProcessor, SummaryProcessor

Source = Union[str, Path, TextIO]


def setup_logging(config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration."""
    debug = config.get('debug', {})
    log_level_str = debug.get('log_level', 'INFO')
    if debug.get('verbose'):
        log_level_str = 'DEBUG'
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    logger = logging.getLogger('synteny_remap')
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Console handler, diagnostics go to stderr
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    logs_dir = config.get('io', {}).get('logs_dir')
    if logs_dir:
        log_dir = Path(logs_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / 'synteny_remap.log')
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def _open_source(stack: ExitStack, source: Source) -> TextIO:
    if isinstance(source, (str, Path)):
        if str(source) == '-':
            return sys.stdin
        return stack.enter_context(open(source, 'r'))
    return source


def run_postnuc(
    config: Dict[str, Any],
    logger: logging.Logger,
    reference: Source,
    query: Source,
    matches: Source,
    processor: Optional[SyntenyProcessor] = None,
    monitor: Optional[RunMonitor] = None,
) -> RunStatistics:
    """
    Rebuild synteny groups from a clustered match stream.

    Args:
        config: Configuration dictionary
        logger: Logger instance
        reference: Reference FASTA path or handle
        query: Query FASTA path or handle
        matches: Match stream path, handle, or "-" for stdin
        processor: Batch consumer, a SummaryProcessor by default
        monitor: Optional run monitor sampled on every flush

    Returns:
        Run statistics

    Raises:
        SyntenyRemapError: on any fatal input inconsistency
    """
    options = ExtensionOptions.from_config(config)
    if processor is None:
        processor = SummaryProcessor(options)

    strict_ids = config.get('validation', {}).get('strict_reference_ids', False)

    with ExitStack() as stack:
        references = load_reference_collection(_open_source(stack, reference), strict_ids=strict_ids)
        query_source = QuerySource(_open_source(stack, query))
        match_stream = _open_source(stack, matches)

        controller = FlushController(
            references, query_source, processor,
            options=options, monitor=monitor,
        )
        stats = controller.run(scan_records(match_stream))

    processor.close()

    logger.info(
        f"Processed {stats.match_lines} match line(s) over {stats.queries_loaded} "
        f"query sequence(s): {stats.matches_kept} kept, {stats.short_matches} short, "
        f"{stats.boundary_violations} boundary violation(s), {stats.flushes} flush(es)"
    )
    return stats


def main(config_path: Optional[str] = None, overrides: Optional[Dict] = None) -> int:
    """
    Run the pipeline described by a configuration file plus overrides.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    config = load_config(config_path)
    config = apply_overrides(config, overrides)

    logger = setup_logging(config)
    logger.info(f"Configuration loaded from {config.get('_source', 'default')}")

    io_cfg = config.get('io', {})
    reference = io_cfg.get('reference')
    query = io_cfg.get('query')
    matches = io_cfg.get('matches') or '-'

    if config.get('validation', {}).get('validate_inputs', True):
        from ..diagnostics.validation import validate_inputs
        is_valid, errors = validate_inputs(reference, query, matches, config)
        if not is_valid:
            for error in errors:
                logger.error(f"Validation error: {error}")
            return 1

    monitor = RunMonitor()
    monitor.start()

    try:
        processor = SummaryProcessor(ExtensionOptions.from_config(config))
        stats = run_postnuc(config, logger, reference, query, matches,
                            processor=processor, monitor=monitor)
    except SyntenyRemapError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Failed to process inputs: {e}", exc_info=config.get('debug', {}).get('verbose', False))
        return 1
    finally:
        monitor.stop()

    if config.get('output', {}).get('write_summary', True):
        report_path = save_run_summary(
            io_cfg.get('output_prefix') or 'out',
            processor.summaries,
            stats.to_dict(),
            reference=str(reference),
            query=str(query),
            config=config,
            performance=monitor.get_report(),
        )
        logger.info(f"Run summary written to {report_path}")

    return 0
