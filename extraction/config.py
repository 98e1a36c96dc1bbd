"""
Configuration constants for JavaScript doc-comment extraction.

Defines the tree-sitter node type strings used for comment binding and the
file selection defaults.
"""

from typing import Set

from core.project_config import DEFAULT_IGNORE_FILE

# Recognized source extensions (JSX is part of the JavaScript grammar)
SOURCE_EXTENSIONS: tuple = (".js", ".jsx")

# Base rule: exclude everything, re-include explicitly
BASE_IGNORE_PATTERN: str = "*"

# Comment node type (includes //, /* */, /** */)
COMMENT_NODE: str = "comment"

# Node types never used as binding targets
SKIPPED_NODE_TYPES: Set[str] = {
    COMMENT_NODE,
    "hash_bang_line",
}

# tree-sitter node type -> binder kind
# method_definition also covers object-literal methods; only class members
# become MethodDefinition
METHOD_NODE_TYPES: Set[str] = {"method_definition"}
CLASS_BODY_NODE: str = "class_body"

VARIABLE_DECLARATION_TYPES: Set[str] = {
    "lexical_declaration",   # const / let
    "variable_declaration",  # var
}

FUNCTION_DECLARATION_TYPES: Set[str] = {
    "function_declaration",
    "generator_function_declaration",
}

# Method key node types that carry a static name
METHOD_KEY_NAME_TYPES: Set[str] = {
    "property_identifier",
    "private_property_identifier",
    "number",
}

# Destructuring patterns a declarator may bind through
DESTRUCTURING_PATTERNS: Set[str] = {
    "object_pattern",
    "array_pattern",
}

# Destructuring policies understood by the binder
DESTRUCTURING_EXPAND: str = "expand"
DESTRUCTURING_SKIP: str = "skip"
DESTRUCTURING_POLICIES: tuple = (DESTRUCTURING_EXPAND, DESTRUCTURING_SKIP)
DEFAULT_DESTRUCTURING_POLICY: str = DESTRUCTURING_EXPAND

# Verbosity thresholds for progress and failure reporting
VERBOSITY_PROGRESS: int = 2
VERBOSITY_FAILED_LIST: int = 2
VERBOSITY_FAILED_COUNT: int = 1
VERBOSITY_ERROR_MESSAGE: int = 3
VERBOSITY_ERROR_STACK: int = 4

# Width of the file name column in progress lines
PROGRESS_NAME_WIDTH: int = 60
