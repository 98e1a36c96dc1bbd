"""
Doc-comment extraction engine.

Tree-sitter-based JavaScript/JSX parser that binds ``/** ... */`` comments to
the declaration that follows them.
"""

from extraction.models import (
    ExtractionReport,
    FileResult,
    RawComment,
    TaggedComment,
)
from extraction.selector import SelectionError, select_files
from extraction.parser import (
    ParseError,
    create_parser,
    parse_comments,
    parse_file,
    parse_source,
)
from extraction.binder import bind, extract_tagged_comments
from extraction.extractor import extract, extract_file, iter_file_results

__all__ = [
    # Data models
    "ExtractionReport",
    "FileResult",
    "RawComment",
    "TaggedComment",
    # File selection
    "SelectionError",
    "select_files",
    # Low-level parsing
    "ParseError",
    "create_parser",
    "parse_comments",
    "parse_file",
    "parse_source",
    # Binding
    "bind",
    "extract_tagged_comments",
    # High-level orchestration
    "extract",
    "extract_file",
    "iter_file_results",
]
