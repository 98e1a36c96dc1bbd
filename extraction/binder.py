"""
Comment-to-declaration binding.

Each doc comment documents the next thing the author wrote: the binder looks
up the first syntax node starting at or after the comment's end offset and
derives the documented name(s) from that node's kind.
"""

import logging
from bisect import bisect_left
from typing import List, Optional, Union

from extraction.config import (
    DEFAULT_DESTRUCTURING_POLICY,
    DESTRUCTURING_POLICIES,
    DESTRUCTURING_SKIP,
)
from extraction.models import (
    FunctionDeclaration,
    MethodDefinition,
    RawComment,
    SyntaxNode,
    TaggedComment,
    VariableDeclaration,
)
from extraction.parser import ParsedSource, parse_source

logger = logging.getLogger(__name__)


def find_node_after(parsed: ParsedSource, offset: int) -> Optional[SyntaxNode]:
    """Return the outermost node with the smallest start offset >= ``offset``.

    Args:
        parsed: Parse output whose ``starts`` are non-decreasing.
        offset: Byte offset to search from.

    Returns:
        The following node, or None when nothing starts at or after ``offset``.
    """
    index = bisect_left(parsed.starts, offset)
    if index >= len(parsed.nodes):
        return None
    return parsed.nodes[index]


def names_for_node(node: SyntaxNode, destructuring: str = DEFAULT_DESTRUCTURING_POLICY) -> List[str]:
    """Derive the documented names for a bound node.

    Args:
        node: The node following a doc comment.
        destructuring: ``"expand"`` to name every identifier bound by a
            destructuring declarator, ``"skip"`` to ignore such declarators.

    Returns:
        Names in authored order. Empty for node kinds that are not documented.
    """
    if isinstance(node, (MethodDefinition, FunctionDeclaration)):
        return [node.name] if node.name else []

    if isinstance(node, VariableDeclaration):
        names: List[str] = []
        for declarator in node.declarators:
            if declarator.is_destructuring and destructuring == DESTRUCTURING_SKIP:
                continue
            names.extend(declarator.names)
        return names

    return []


def bind_comment(
    parsed: ParsedSource,
    comment: RawComment,
    destructuring: str = DEFAULT_DESTRUCTURING_POLICY,
) -> List[TaggedComment]:
    """Bind one doc comment, returning zero or more tagged comments."""
    node = find_node_after(parsed, comment.end_offset)
    if node is None:
        logger.debug("Comment ending at %d has no following node", comment.end_offset)
        return []
    return [
        TaggedComment(comment=comment.text, name=name)
        for name in names_for_node(node, destructuring)
    ]


def bind(
    parsed: ParsedSource,
    destructuring: str = DEFAULT_DESTRUCTURING_POLICY,
) -> List[TaggedComment]:
    """Bind every doc comment of a parsed source to the node that follows it.

    Args:
        parsed: Output of :func:`extraction.parser.parse_source`.
        destructuring: Destructuring declarator policy, see :func:`names_for_node`.

    Returns:
        Tagged comments in source order of their comments; declarator
        expansions keep left-to-right order.

    Raises:
        ValueError: If ``destructuring`` is not a known policy.
    """
    if destructuring not in DESTRUCTURING_POLICIES:
        raise ValueError(
            f"Unknown destructuring policy {destructuring!r}. "
            f"Expected one of: {DESTRUCTURING_POLICIES}"
        )

    tagged: List[TaggedComment] = []
    for comment in parsed.comments:
        tagged.extend(bind_comment(parsed, comment, destructuring))
    return tagged


def extract_tagged_comments(
    source: Union[bytes, str],
    destructuring: str = DEFAULT_DESTRUCTURING_POLICY,
) -> List[TaggedComment]:
    """Parse ``source`` and bind its doc comments in one call.

    Raises:
        ParseError: If the source is not valid JavaScript/JSX.

    Example:
        >>> extract_tagged_comments("/** Adds */\\nfunction add() {}")
        [TaggedComment(comment='* Adds ', name='add')]
    """
    return bind(parse_source(source), destructuring=destructuring)
