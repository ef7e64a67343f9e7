"""
Command-line interface for the complexity scanner.
"""

import argparse
import os
import sys
from typing import List, Optional

from complexityscanner import __version__
from complexityscanner.config import OUTPUT_FORMATS, ScanConfig, load_scan_config
from complexityscanner.core.engine import ComplexityScanner
from complexityscanner.core.errors import ComplexityScannerError, OutputError
from complexityscanner.formatters import get_formatter
from complexityscanner.formatters.table import supports_color
from complexityscanner.logging_config import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="complexityscanner",
        description="Compute cyclomatic complexity of Python functions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  complexityscanner ./src                    # Table of all functions
  complexityscanner ./src -t 5 -s            # Flag functions above 5, add summary
  complexityscanner app.py -o json           # Output as JSON
  complexityscanner . --exclude build -j 4   # Skip build/, use 4 workers
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "path",
        help="File or directory to analyze",
    )
    parser.add_argument(
        "-t", "--threshold",
        type=int,
        help="Complexity threshold to highlight (default: 10)",
    )
    parser.add_argument(
        "-o", "--output",
        choices=OUTPUT_FORMATS,
        help="Output format (default: table)",
    )
    parser.add_argument(
        "-s", "--summary",
        action="store_true",
        default=None,
        help="Show the summary block in table output (JSON always carries it)",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        help="Additional directory name to skip (can be specified multiple times)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Abort on the first file that cannot be read or parsed",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat files with syntax errors as parse failures",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of parallel workers (default: 1)",
    )
    parser.add_argument(
        "--output-file",
        help="Write the report to a file instead of stdout",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )

    return parser


def build_config(args: argparse.Namespace) -> ScanConfig:
    """Load the config file (explicit or discovered) and apply command-line overrides."""
    config = load_scan_config(args.config, start_dir=args.path)

    if args.threshold is not None:
        config.threshold = args.threshold
    if args.output is not None:
        config.output_format = args.output
    if args.summary is not None:
        config.summary = args.summary
    if args.exclude:
        config.extra_exclude_dirs = config.extra_exclude_dirs + args.exclude
    if args.fail_fast is not None:
        config.fail_fast = args.fail_fast
    if args.strict is not None:
        config.strict_parsing = args.strict
    if args.jobs is not None:
        config.max_workers = max(1, args.jobs)
    if args.no_color:
        config.color = False

    return config


def cmd_analyze(args: argparse.Namespace) -> int:
    """Run the analysis and write the report."""
    config = build_config(args)

    # Fail on a bad format before doing any work
    if config.output_format == "table":
        use_color = config.color and not args.output_file and supports_color()
        formatter = get_formatter("table", use_color=use_color, show_summary=config.summary)
    else:
        formatter = get_formatter(config.output_format)

    scanner = ComplexityScanner(config)
    result = scanner.scan(args.path)

    output = formatter.format_result(result)

    if args.output_file:
        try:
            with open(args.output_file, "w", encoding="utf-8") as f:
                f.write(output + "\n")
        except OSError as e:
            raise OutputError(args.output_file, str(e)) from e
    else:
        print(output)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        return cmd_analyze(args)

    except KeyboardInterrupt:
        print("\nAnalysis interrupted.", file=sys.stderr)
        return 130
    except ComplexityScannerError as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
