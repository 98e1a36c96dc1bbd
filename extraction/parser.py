"""
Tree-sitter parser initialization and doc-comment collection.

This module parses JavaScript/JSX source and, in a single pre-order pass,
collects doc block comments together with an offset-ordered index of the
syntax nodes that comments can bind to.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser, Tree

from extraction.config import (
    CLASS_BODY_NODE,
    COMMENT_NODE,
    DESTRUCTURING_PATTERNS,
    FUNCTION_DECLARATION_TYPES,
    METHOD_KEY_NAME_TYPES,
    METHOD_NODE_TYPES,
    SKIPPED_NODE_TYPES,
    VARIABLE_DECLARATION_TYPES,
)
from extraction.models import (
    Declarator,
    FunctionDeclaration,
    MethodDefinition,
    OtherNode,
    RawComment,
    SyntaxNode,
    VariableDeclaration,
)

logger = logging.getLogger(__name__)

# Module-level language constant. The JavaScript grammar parses JSX, hashbang
# lines, top-level return and import/export in any statement position.
JS_LANGUAGE = Language(tsjs.language())


class ParseError(Exception):
    """Raised when source text is not valid JavaScript/JSX.

    Attributes:
        diagnostic: Human-readable description of the first syntax problem.
        line: 1-indexed line of the problem, or None.
        column: 1-indexed byte column of the problem, or None.
        file_path: Path of the offending file when known.
    """

    def __init__(
        self,
        diagnostic: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        file_path: Optional[str] = None,
    ):
        self.diagnostic = diagnostic
        self.line = line
        self.column = column
        self.file_path = file_path
        location = f" ({file_path})" if file_path else ""
        super().__init__(f"{diagnostic}{location}")


@dataclass
class ParsedSource:
    """Output of a parse pass.

    Attributes:
        nodes: Bindable syntax nodes in pre-order. Start offsets are
            non-decreasing; at equal offsets outer nodes come first.
        comments: Doc comments in source order.
        starts: Start offset of each entry in ``nodes``, for bisection.
    """

    nodes: List[SyntaxNode] = field(default_factory=list)
    comments: List[RawComment] = field(default_factory=list)
    starts: List[int] = field(default_factory=list)


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for JavaScript/JSX.

    Returns:
        A Parser instance configured with the JavaScript language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"const a = 1;")
    """
    parser = Parser(JS_LANGUAGE)
    logger.debug("Created tree-sitter JavaScript parser")
    return parser


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8")


def _iter_named_preorder(root: Node) -> Iterator[Node]:
    """Yield named descendants of ``root`` in pre-order, root excluded."""
    stack = list(reversed(root.named_children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


def find_first_error_node(tree: Tree) -> Optional[Node]:
    """Return the first ERROR or MISSING node in source order, if any."""
    root = tree.root_node
    if not root.has_error:
        return None
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing or node.type == "ERROR":
            return node
        stack.extend(
            reversed([child for child in node.children if child.has_error or child.is_missing])
        )
    return None


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_missing or node.type == "ERROR":
            count += 1
        stack.extend(node.children)
    return count


def _describe_error(node: Node, source_bytes: bytes) -> str:
    if node.is_missing:
        return f'Missing "{node.type}"'
    snippet = _node_text(node, source_bytes).strip().splitlines()
    if not snippet:
        return "Unexpected end of input"
    return f'Unexpected "{snippet[0][:40]}"'


def doc_comment_text(comment_source: str) -> Optional[str]:
    """Return the body of a doc block comment, or None for any other comment.

    A doc comment is a ``/* ... */`` comment whose first content character is
    ``*``. The body keeps that leading ``*``: ``/** Adds */`` gives ``"* Adds "``.
    """
    if not (comment_source.startswith("/*") and comment_source.endswith("*/")):
        return None
    if len(comment_source) < 4:
        return None
    body = comment_source[2:-2]
    if not body.startswith("*"):
        return None
    return body


def _method_name(node: Node, source_bytes: bytes) -> Optional[str]:
    key = node.child_by_field_name("name")
    if key is None:
        return None
    if key.type in METHOD_KEY_NAME_TYPES:
        return _node_text(key, source_bytes)
    if key.type == "string":
        return _node_text(key, source_bytes)[1:-1]
    # computed_property_name has no static name
    return None


def pattern_bound_names(pattern: Node, source_bytes: bytes) -> Tuple[str, ...]:
    """Collect the identifiers bound by a declarator target, left to right.

    Handles plain identifiers as well as object/array patterns with nested
    patterns, default values and rest elements.
    """
    names: List[str] = []
    stack = [pattern]
    while stack:
        current = stack.pop()
        kind = current.type
        if kind in ("identifier", "shorthand_property_identifier_pattern"):
            names.append(_node_text(current, source_bytes))
        elif kind == "pair_pattern":
            value = current.child_by_field_name("value")
            if value is not None:
                stack.append(value)
        elif kind in ("assignment_pattern", "object_assignment_pattern"):
            left = current.child_by_field_name("left")
            if left is not None:
                stack.append(left)
        elif kind in DESTRUCTURING_PATTERNS or kind == "rest_pattern":
            stack.extend(reversed(current.named_children))
    return tuple(names)


def _declarators(node: Node, source_bytes: bytes) -> Tuple[Declarator, ...]:
    declarators = []
    for child in node.named_children:
        if child.type != "variable_declarator":
            continue
        target = child.child_by_field_name("name")
        if target is None:
            continue
        declarators.append(
            Declarator(kind=target.type, names=pattern_bound_names(target, source_bytes))
        )
    return tuple(declarators)


def _in_class_body(node: Node) -> bool:
    parent = node.parent
    return parent is not None and parent.type == CLASS_BODY_NODE


def to_syntax_node(node: Node, source_bytes: bytes) -> SyntaxNode:
    """Convert a tree-sitter node into the binder's tagged node variant."""
    start = node.start_byte
    if node.type in METHOD_NODE_TYPES and _in_class_body(node):
        return MethodDefinition(start=start, name=_method_name(node, source_bytes))
    if node.type in VARIABLE_DECLARATION_TYPES:
        return VariableDeclaration(start=start, declarators=_declarators(node, source_bytes))
    if node.type in FUNCTION_DECLARATION_TYPES:
        name_node = node.child_by_field_name("name")
        name = _node_text(name_node, source_bytes) if name_node is not None else None
        return FunctionDeclaration(start=start, name=name)
    return OtherNode(start=start, kind=node.type)


def parse_source(source: Union[bytes, str], file_path: Optional[str] = None) -> ParsedSource:
    """Parse JavaScript/JSX source and collect doc comments and bindable nodes.

    Args:
        source: Source text, either UTF-8 bytes or str.
        file_path: Optional path used in error messages.

    Returns:
        A ParsedSource with the node index and the doc comments.

    Raises:
        TypeError: If source is neither bytes nor str.
        ParseError: If the source is not valid UTF-8 or not valid syntax.

    Example:
        >>> parsed = parse_source(b"/** Adds */\\nfunction add() {}")
        >>> parsed.comments[0].text
        '* Adds '
    """
    if isinstance(source, str):
        source_bytes = source.encode("utf-8")
    elif isinstance(source, bytes):
        source_bytes = source
        try:
            source_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Source is not valid UTF-8: {e}", file_path=file_path) from e
    else:
        raise TypeError(f"Source must be bytes or str, got {type(source).__name__}")

    tree = create_parser().parse(source_bytes)

    error_node = find_first_error_node(tree)
    if error_node is not None:
        line = error_node.start_point.row + 1
        column = error_node.start_point.column + 1
        raise ParseError(
            f"{_describe_error(error_node, source_bytes)} at line {line}, column {column}",
            line=line,
            column=column,
            file_path=file_path,
        )

    parsed = ParsedSource()
    for node in _iter_named_preorder(tree.root_node):
        if node.type == COMMENT_NODE:
            body = doc_comment_text(_node_text(node, source_bytes))
            if body is not None:
                parsed.comments.append(RawComment(text=body, end_offset=node.end_byte))
            continue
        if node.type in SKIPPED_NODE_TYPES:
            continue
        parsed.nodes.append(to_syntax_node(node, source_bytes))
        parsed.starts.append(node.start_byte)

    logger.debug(
        "Parsed %d bytes: %d doc comments, %d nodes",
        len(source_bytes),
        len(parsed.comments),
        len(parsed.nodes),
    )
    return parsed


def parse_comments(text: Union[bytes, str]) -> ParsedSource:
    """Parse ``text`` into its node index and doc comments.

    The result feeds straight into :func:`extraction.binder.bind`.
    """
    return parse_source(text)


def parse_file(file_path: str) -> ParsedSource:
    """Parse a JavaScript/JSX source file from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
        ParseError: If the file is not valid JavaScript/JSX.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except FileNotFoundError:
        logger.error(f"File not found: {file_path}")
        raise
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise

    return parse_source(source_bytes, file_path=file_path)
