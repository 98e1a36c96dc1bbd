"""
High-level orchestrator for doc-comment extraction.

This module drives file selection and, for each selected file, parsing and
comment binding. Parse failures are isolated per file; selection failures
abort the run.
"""

import logging
import os
from typing import Iterator, List, Optional, Sequence

from core.project_config import ProjectConfig
from core.structured_logging import phase_scope
from extraction.binder import bind
from extraction.config import (
    DEFAULT_DESTRUCTURING_POLICY,
    PROGRESS_NAME_WIDTH,
    VERBOSITY_ERROR_MESSAGE,
    VERBOSITY_ERROR_STACK,
    VERBOSITY_FAILED_COUNT,
    VERBOSITY_FAILED_LIST,
    VERBOSITY_PROGRESS,
)
from extraction.models import ExtractionReport, FileResult
from extraction.parser import ParseError, parse_file
from extraction.selector import select_files

logger = logging.getLogger(__name__)


def extract_file(
    root: str,
    relative_path: str,
    destructuring: str = DEFAULT_DESTRUCTURING_POLICY,
) -> FileResult:
    """Extract the tagged comments of a single file.

    Args:
        root: Scan root directory.
        relative_path: File path relative to ``root``.
        destructuring: Destructuring declarator policy for the binder.

    Returns:
        FileResult named after ``relative_path``.

    Raises:
        OSError: If the file cannot be read.
        ParseError: If the file is not valid JavaScript/JSX.

    Example:
        >>> result = extract_file("/path/to/project", "src/math.js")
        >>> [tagged.name for tagged in result.content]
        ['add', 'subtract']
    """
    parsed = parse_file(os.path.join(root, relative_path))
    content = bind(parsed, destructuring=destructuring)
    logger.debug("Extracted %d tagged comments from %s", len(content), relative_path)
    return FileResult(name=relative_path, content=content)


def _report_failure(relative_path: str, error: ParseError, verbosity: int) -> None:
    if verbosity >= VERBOSITY_ERROR_STACK:
        logger.error("Error processing %s", relative_path, exc_info=error)
    elif verbosity >= VERBOSITY_ERROR_MESSAGE:
        logger.error("Error processing %s: %s", relative_path, error.diagnostic)


def _report_progress(index: int, total: int, relative_path: str, verbosity: int) -> None:
    if verbosity >= VERBOSITY_PROGRESS:
        logger.info(
            "Files processed: %d/%d  %s",
            index,
            total,
            relative_path[:PROGRESS_NAME_WIDTH],
        )


def _report_summary(report: ExtractionReport, verbosity: int) -> None:
    # Emitted at every verbosity level, 0 included
    logger.warning(f"Files processed: {report.files_processed}")
    if not report.failed_files:
        return
    if verbosity >= VERBOSITY_FAILED_LIST:
        logger.warning(
            "The following %d files were unparsable:\n%s",
            report.files_failed,
            "\n".join(report.failed_files),
        )
    elif verbosity >= VERBOSITY_FAILED_COUNT:
        logger.warning("%d files were unparsable", report.files_failed)


def iter_file_results(
    include_paths: Sequence[str],
    config: ProjectConfig,
    failed_files: Optional[List[str]] = None,
    destructuring: str = DEFAULT_DESTRUCTURING_POLICY,
) -> Iterator[FileResult]:
    """Yield one FileResult per selected file, in selection order.

    Selection happens before the first result is yielded. A file that fails
    to parse yields an empty FileResult and its path is appended to
    ``failed_files`` when a list is supplied.

    Raises:
        SelectionError: If file selection fails.
        OSError: If a selected file cannot be read.
    """
    root = config.abs_path
    with phase_scope("select"):
        files = select_files(root, include_paths, config.ignore_file)
    total = len(files)

    if not files:
        logger.warning(f"No source files selected under {root}")

    for index, relative_path in enumerate(files, start=1):
        try:
            result = extract_file(root, relative_path, destructuring=destructuring)
        except ParseError as e:
            if failed_files is not None:
                failed_files.append(relative_path)
            _report_failure(relative_path, e, config.verbosity)
            result = FileResult(name=relative_path)
        _report_progress(index, total, relative_path, config.verbosity)
        yield result


def extract(
    include_paths: Sequence[str],
    config: ProjectConfig,
    destructuring: str = DEFAULT_DESTRUCTURING_POLICY,
) -> ExtractionReport:
    """Extract doc comments from every selected file of a project.

    Args:
        include_paths: Files or directories to extract from, absolute or
            relative to ``config.abs_path``.
        config: Resolved project settings (scan root, ignore file, verbosity).
        destructuring: Destructuring declarator policy for the binder.

    Returns:
        ExtractionReport with one FileResult per selected file and the
        paths that failed to parse.

    Raises:
        SelectionError: If file selection fails.
        OSError: If a selected file cannot be read.

    Example:
        >>> report = extract(["src"], resolve_project_config())
        >>> print(f"{report.comments_extracted} comments from {report.files_processed} files")
    """
    report = ExtractionReport()
    for result in iter_file_results(
        include_paths,
        config,
        failed_files=report.failed_files,
        destructuring=destructuring,
    ):
        report.files.append(result)

    _report_summary(report, config.verbosity)
    logger.debug(f"Extraction complete: {report}")
    return report
