#!/usr/bin/env python3
"""
Kollator - Document Deduplication and Version Collation

Main entry point for the Kollator system. This orchestrator coordinates the
pipeline from corpus import through clustering to document and report output.
"""

import logging
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from kollator import __version__
from kollator.config import config, InvalidConfigurationError, validate_threshold, validate_delimiter
from kollator.exporters import render_markdown, write_markdown, write_report
from kollator.importers import BaseImporter, MockImporter
from kollator.models import Corpus
from kollator.pipeline import collate_importer, importer_for_path


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO)
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    # stdout is reserved for the collated document
    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ],
        force=True
    )


def build_importer(importer_type: str, input_path: Optional[str], delimiter: Optional[str]) -> BaseImporter:
    """
    Select the importer for the requested source.

    Args:
        importer_type: 'mock' or 'text'
        input_path: File, directory or '-' for stdin (required for 'text')
        delimiter: Block delimiter marker override

    Returns:
        The importer to read blocks from
    """
    if importer_type == "mock":
        return MockImporter()

    if not input_path:
        raise ValueError("An input path is required for the text importer (use '-' for stdin)")

    return importer_for_path(input_path, delimiter)


def run_collation_pipeline(args: argparse.Namespace) -> Corpus:
    """
    Execute the collation pipeline: import -> normalize -> cluster -> select -> emit.

    Configuration is validated before any input is read, so an invalid run
    produces no output at all.

    Args:
        args: Parsed command line arguments

    Returns:
        The finalized Corpus
    """
    logging.info("Starting Kollator collation pipeline...")

    threshold = validate_threshold(args.threshold, field="threshold") if args.threshold is not None else config.threshold
    delimiter = validate_delimiter(args.delimiter, field="delimiter") if args.delimiter is not None else config.delimiter

    importer = build_importer(args.importer, args.input, delimiter)
    corpus = collate_importer(importer, threshold)
    logging.info(f"Retrieved {len(corpus.blocks)} blocks")
    canonicals = corpus.canonical_blocks()

    if args.output:
        write_markdown(canonicals, args.output, delimiter)
    else:
        sys.stdout.write(render_markdown(canonicals, delimiter))

    if args.report:
        write_report(corpus, args.report)

    logging.info(f"Pipeline completed. Kept {len(canonicals)} of {len(corpus.blocks)} blocks.")
    return corpus


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Kollator - Collapse near-duplicate documents into their most complete revision",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --input docs/guide.md                    # Print the deduplicated document
  python main.py --input docs/ --output clean/guide.md    # Collate a directory of markdown files
  python main.py --importer mock --report report.json     # Run on sample data and write a report
  cat corpus.md | python main.py --input - --threshold 0.9
        """
    )

    parser.add_argument(
        "--importer",
        choices=["text", "mock"],
        default="text",
        help="Source of blocks: delimited text input or built-in sample data (default: text)"
    )

    parser.add_argument(
        "--input",
        type=str,
        help="Input file, directory of markdown files, or '-' for stdin"
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write the deduplicated document here instead of stdout"
    )

    parser.add_argument(
        "--report",
        type=str,
        help="Write a JSON report of clusters and differences"
    )

    parser.add_argument(
        "--threshold",
        type=float,
        help="Minimum similarity in [0, 1] to merge two blocks (default from config: collation.threshold)"
    )

    parser.add_argument(
        "--delimiter",
        type=str,
        help="Literal marker line separating blocks (default from config: collation.delimiter)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a YAML configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Kollator {__version__}"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    if args.config:
        config.config_path = Path(args.config)
        config.reload()

    setup_logging()
    logging.info("Kollator - Document Deduplication and Version Collation")

    try:
        run_collation_pipeline(args)

    except InvalidConfigurationError as e:
        logging.error(f"Invalid configuration: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except (FileNotFoundError, ValueError) as e:
        logging.error(f"Collation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        logging.info("Collation interrupted by user")
        print("\nCollation interrupted.", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
