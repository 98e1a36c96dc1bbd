#!/usr/bin/env python3
"""
Command-line entry point for doc-comment extraction.

Resolves the project settings, extracts ``/** ... */`` comments from the
requested JavaScript/JSX paths and writes the extraction report as JSON for
the documentation renderer.

Usage:
    python run_extract.py extract src lib/util.js
    python run_extract.py extract --verbosity 3 --output-dir out/reports
    python run_extract.py init . --api-dir docs-api
    python run_extract.py verbosity 4
"""

import argparse
import logging
import os
import sys
from dataclasses import replace

from core.project_config import (
    ConfigValidationError,
    find_config_path,
    init_project,
    load_project_config,
    set_verbosity,
    validate_verbosity,
)
from core.run_artifacts import write_extraction_report
from core.structured_logging import (
    configure_structured_logging,
    phase_scope,
    set_run_id,
)
from extraction.config import DEFAULT_DESTRUCTURING_POLICY, DESTRUCTURING_POLICIES
from extraction.extractor import extract
from extraction.selector import SelectionError

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="JavaScript/JSX doc-comment extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_extract.py extract src\n"
            "  python run_extract.py init . --api-dir docs-api\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Extract doc comments and write a report."
    )
    extract_parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to extract from. Default: the whole project.",
    )
    extract_parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory to start the settings file search from. Default: cwd.",
    )
    extract_parser.add_argument(
        "--verbosity",
        type=int,
        default=None,
        help="Override the configured verbosity (0-5) for this run.",
    )
    extract_parser.add_argument(
        "--output-dir",
        default=None,
        help="Report directory. Default: <apiDir>/reports under the project root.",
    )
    extract_parser.add_argument(
        "--destructuring",
        choices=DESTRUCTURING_POLICIES,
        default=DEFAULT_DESTRUCTURING_POLICY,
        help="How to name destructuring declarations. Default: expand.",
    )

    init_parser = subparsers.add_parser(
        "init", help="Create the settings file and a default ignore file."
    )
    init_parser.add_argument("root", nargs="?", default=".", help="Project root.")
    init_parser.add_argument(
        "--api-dir",
        required=True,
        help="Name of the generated documentation folder.",
    )

    verbosity_parser = subparsers.add_parser(
        "verbosity", help="Persist a verbosity level (0-5) in the settings file."
    )
    verbosity_parser.add_argument("level", type=int)
    verbosity_parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory to start the settings file search from. Default: cwd.",
    )

    return parser.parse_args(argv)


def run_extract(args: argparse.Namespace) -> int:
    """Extract and write the report. Returns the process exit code."""
    config = load_project_config(find_config_path(args.config_dir))
    if args.verbosity is not None:
        config = replace(
            config,
            verbosity=validate_verbosity(args.verbosity),
            settings={**config.settings, "verbosity": args.verbosity},
        )

    configure_structured_logging(config.verbosity)
    run_id = set_run_id()

    include_paths = [os.path.abspath(p) for p in args.paths] or [config.abs_path]
    logger.info(f"Project root     : {config.abs_path}")
    logger.info(f"Include paths    : {', '.join(include_paths)}")

    with phase_scope("extract"):
        report = extract(include_paths, config, destructuring=args.destructuring)

    output_dir = args.output_dir or os.path.join(config.api_path, "reports")
    with phase_scope("report"):
        report_path = write_extraction_report(report, run_id, output_dir=output_dir)
    logger.info("Extraction report written: %s", report_path)
    return 0


def main(argv=None) -> None:
    """Main entry point for the extraction CLI."""
    configure_structured_logging()
    args = parse_args(argv)

    try:
        if args.command == "init":
            config = init_project(args.root, args.api_dir)
            logger.info("Initialized project at %s", config.abs_path)
        elif args.command == "verbosity":
            config = set_verbosity(find_config_path(args.config_dir), args.level)
            logger.info("Verbosity set to %d", config.verbosity)
        else:
            sys.exit(run_extract(args))

    except ConfigValidationError as e:
        logger.error(f"Settings error: {e}")
        sys.exit(1)
    except SelectionError as e:
        logger.error(f"File selection failed: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"File error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
