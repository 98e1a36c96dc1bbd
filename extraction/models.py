"""
Data models for extracted doc comments.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Union


@dataclass(frozen=True)
class RawComment:
    """A doc block comment collected while parsing.

    Attributes:
        text: Comment body without the ``/*`` and ``*/`` delimiters.
            Always starts with ``*``.
        end_offset: Byte offset immediately after the closing ``*/``.
    """

    text: str
    end_offset: int


@dataclass(frozen=True)
class Declarator:
    """One binding of a ``const``/``let``/``var`` statement.

    Attributes:
        kind: tree-sitter type of the binding target
            (``identifier``, ``object_pattern`` or ``array_pattern``).
        names: Bound identifiers in authored left-to-right order.
    """

    kind: str
    names: Tuple[str, ...]

    @property
    def is_destructuring(self) -> bool:
        return self.kind != "identifier"


@dataclass(frozen=True)
class MethodDefinition:
    """A method of a class body. ``name`` is None for computed keys."""

    start: int
    name: str | None


@dataclass(frozen=True)
class VariableDeclaration:
    """A ``const``/``let``/``var`` statement and its declarators."""

    start: int
    declarators: Tuple[Declarator, ...]


@dataclass(frozen=True)
class FunctionDeclaration:
    """A named function or generator declaration."""

    start: int
    name: str | None


@dataclass(frozen=True)
class OtherNode:
    """Any other node kind; comments bound to it are dropped."""

    start: int
    kind: str


SyntaxNode = Union[MethodDefinition, VariableDeclaration, FunctionDeclaration, OtherNode]


@dataclass(frozen=True)
class TaggedComment:
    """A doc comment paired with the name of the construct it documents."""

    comment: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"comment": self.comment, "name": self.name}


@dataclass
class FileResult:
    """Extraction result for a single file.

    Attributes:
        name: File path relative to the scan root (POSIX separators).
        content: Tagged comments in source order. Empty when the file
            failed to parse.
    """

    name: str
    content: List[TaggedComment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary suitable for JSON serialization."""
        return {
            "name": self.name,
            "content": [tagged.to_dict() for tagged in self.content],
        }


@dataclass
class ExtractionReport:
    """Everything produced by one extraction run.

    Attributes:
        files: One FileResult per selected file, in selection order.
        failed_files: Paths of files that failed to parse, in selection order.
    """

    files: List[FileResult] = field(default_factory=list)
    failed_files: List[str] = field(default_factory=list)

    @property
    def files_processed(self) -> int:
        return len(self.files)

    @property
    def files_failed(self) -> int:
        return len(self.failed_files)

    @property
    def comments_extracted(self) -> int:
        return sum(len(result.content) for result in self.files)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the report to a dictionary suitable for JSON serialization."""
        return {
            "files": [result.to_dict() for result in self.files],
            "failed_files": list(self.failed_files),
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "comments_extracted": self.comments_extracted,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionReport(processed={self.files_processed}, "
            f"failed={self.files_failed}, comments={self.comments_extracted})"
        )

