"""
Command-line interface for the synteny remapping pipeline.
"""

import sys
import argparse


def build_parser() -> argparse.ArgumentParser:
    from synteny_remap import __version__

    parser = argparse.ArgumentParser(
        prog='synteny-remap',
        description="Translate clustered MUM coordinates from a concatenated reference back "
                    "to each reference sequence and group the clusters by reference and query",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Match clusters on stdin
  mgaps < out.mums | %(prog)s ref.fasta qry.fasta out

  # Match clusters from a file, clusters only, debug logging
  %(prog)s ref.fasta qry.fasta out --input out.mgaps -d --debug

  # Custom configuration
  %(prog)s ref.fasta qry.fasta out --config my_config.yaml
        """
    )

    parser.add_argument('reference', help='Reference FASTA (as given to the match finder)')
    parser.add_argument('query', help='Query FASTA, sequences in match-stream order')
    parser.add_argument('prefix', help='Output prefix, report goes to <prefix>.summary.json')

    parser.add_argument(
        '--input',
        type=str,
        default='-',
        help='Clustered match stream (default: stdin)'
    )

    # Extension settings
    parser.add_argument(
        '-b', '--break-length',
        type=int,
        help='Alignment break (give-up) length'
    )

    parser.add_argument(
        '-B', '--banding',
        type=int,
        help='Diagonal banding for extension'
    )

    parser.add_argument(
        '-d', '--clusters-only',
        action='store_true',
        help='Report match clusters rather than extended alignments'
    )

    parser.add_argument(
        '-e', '--no-extend',
        action='store_true',
        help='Do not extend alignments outward from clusters'
    )

    parser.add_argument(
        '-s', '--keep-shadows',
        action='store_true',
        help="Don't remove shadowed alignments"
    )

    parser.add_argument(
        '-t', '--to-seq-end',
        action='store_true',
        help='Force alignment to the ends of sequence if within break length'
    )

    # Configuration
    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration YAML file'
    )

    parser.add_argument(
        '--logs-dir',
        type=str,
        help='Also write the log to this directory'
    )

    parser.add_argument(
        '--strict-ids',
        action='store_true',
        help='Reject reference files with clashing sequence ids up front'
    )

    parser.add_argument(
        '--no-summary',
        action='store_true',
        help='Do not write the JSON run summary'
    )

    # Debug
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def build_overrides(args: argparse.Namespace) -> dict:
    """Turn parsed arguments into configuration overrides."""
    config_overrides = {
        'io': {
            'reference': args.reference,
            'query': args.query,
            'matches': args.input,
            'output_prefix': args.prefix,
        }
    }

    extension = {}
    if args.break_length is not None:
        extension['break_length'] = args.break_length
    if args.banding is not None:
        extension['banding'] = args.banding
    if args.clusters_only:
        extension['do_delta'] = False
    if args.no_extend:
        extension['do_extend'] = False
    if args.keep_shadows:
        extension['do_shadows'] = True
    if args.to_seq_end:
        extension['to_seq_end'] = True
    if extension:
        config_overrides['extension'] = extension

    if args.logs_dir:
        config_overrides['io']['logs_dir'] = args.logs_dir

    if args.strict_ids:
        config_overrides['validation'] = {'strict_reference_ids': True}

    if args.no_summary:
        config_overrides['output'] = {'write_summary': False}

    if args.verbose:
        config_overrides['debug'] = config_overrides.get('debug', {})
        config_overrides['debug']['verbose'] = True

    if args.debug:
        config_overrides['debug'] = config_overrides.get('debug', {})
        config_overrides['debug']['log_level'] = 'DEBUG'

    return config_overrides


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    from synteny_remap.pipeline.main_pipeline import main as pipeline_main

    try:
        return pipeline_main(config_path=args.config, overrides=build_overrides(args))
    except (OSError, ValueError) as e:
        # config file problems surface before logging is set up
        print(f"Pipeline failed: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
