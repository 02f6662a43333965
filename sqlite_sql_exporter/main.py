#!/usr/bin/env python3
"""
SQLite SQL Exporter - CLI Entry Point
=====================================
Converts a SQLite database file into a MySQL-compatible SQL dump:
- CREATE TABLE statements with mapped column types
- Primary keys, NOT NULL and DEFAULT constraints
- One INSERT statement per row
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .config import ConfigLoader
from .database_exporter import export_database
from .exceptions import ExportError
from .utils import default_output_path, print_dry_run_info, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SQLite SQL Exporter - Convert a SQLite database into a MySQL SQL dump',
        epilog=(
            'examples:\n'
            '  %(prog)s my-database.db\n'
            '  %(prog)s ./data/products.db ./exports/products.sql'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        'sqlite_file',
        help='Path to the SQLite database file (.db)'
    )
    parser.add_argument(
        'output_file',
        nargs='?',
        help='Output SQL file path (default: <input name>_export.sql next to the input)'
    )
    parser.add_argument(
        '-c', '--config',
        help='Path to an optional YAML configuration file'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be exported without writing anything'
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = ConfigLoader(args.config)
        missing_columns = config.get_missing_column_policy()
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    input_path = Path(args.sqlite_file)
    if not input_path.exists():
        logging.error(f"SQLite file '{input_path}' not found")
        sys.exit(1)
    if not input_path.is_file():
        logging.error(f"'{input_path}' is not a file")
        sys.exit(1)

    output_path = Path(args.output_file) if args.output_file else default_output_path(args.sqlite_file)

    # Dry run mode
    if args.dry_run:
        logging.info("DRY RUN MODE - No file will be written")
        try:
            print_dry_run_info(str(input_path))
        except ExportError as e:
            logging.error(f"Dry run failed: {e}")
            sys.exit(1)
        sys.exit(0)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    logging.info(f"Input file:  {input_path.resolve()}")
    logging.info(f"Output file: {output_path.resolve()}")

    try:
        stats = export_database(str(input_path), str(output_path), missing_columns=missing_columns)
    except ExportError as e:
        logging.error(f"Export failed: {e}")
        logging.error("Make sure the SQLite file is valid and not corrupted.")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)

    # Print summary
    logging.info("=" * 50)
    logging.info("EXPORT COMPLETE")
    logging.info(f"Tables: {stats.total_tables}")
    logging.info(f"Total Rows: {stats.total_rows}")
    logging.info(f"Total Lines: {stats.total_lines}")
    logging.info(f"File Size: {stats.bytes_written} bytes")


if __name__ == '__main__':
    main()
