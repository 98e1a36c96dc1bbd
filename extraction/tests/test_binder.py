"""
Unit tests for binder.py

Tests binding doc comments to the following declaration and deriving names
for each supported node kind.
"""

import unittest

from extraction.binder import bind, extract_tagged_comments, find_node_after, names_for_node
from extraction.models import (
    Declarator,
    FunctionDeclaration,
    OtherNode,
    TaggedComment,
    VariableDeclaration,
)
from extraction.parser import ParseError, parse_comments, parse_source


def _pairs(source, **kwargs):
    return [(t.comment, t.name) for t in extract_tagged_comments(source, **kwargs)]


class TestFunctionDeclarations(unittest.TestCase):
    """Test binding to function declarations."""

    def test_adds_two_numbers(self):
        """Test the basic function doc comment case."""
        source = "/** Adds two numbers */\nfunction add(a, b) { return a + b; }\n"
        self.assertEqual(
            extract_tagged_comments(source),
            [TaggedComment(comment="* Adds two numbers ", name="add")],
        )

    def test_generator_function(self):
        """Test that generator declarations are named."""
        source = "/** Yields ids */\nfunction* ids() { yield 1; }\n"
        self.assertEqual(_pairs(source), [("* Yields ids ", "ids")])

    def test_async_function(self):
        """Test that async declarations are named."""
        source = "/** Loads data */\nasync function load() {}\n"
        self.assertEqual(_pairs(source), [("* Loads data ", "load")])

    def test_multiline_comment_text_is_verbatim(self):
        """Test that the comment body is kept byte for byte."""
        source = "/**\n * Subtracts.\n * @param {number} a\n */\nfunction sub(a) {}\n"
        self.assertEqual(
            _pairs(source),
            [("*\n * Subtracts.\n * @param {number} a\n ", "sub")],
        )

    def test_consecutive_comments_bind_to_same_node(self):
        """Test that stacked comments all bind to the next declaration."""
        source = "/** one */\n/** two */\nfunction f() {}\n"
        self.assertEqual(_pairs(source), [("* one ", "f"), ("* two ", "f")])


class TestVariableDeclarations(unittest.TestCase):
    """Test binding to const/let/var declarations."""

    def test_config_flags_expand_per_declarator(self):
        """Test one tagged comment per declarator with the same text."""
        source = "/** Config flag */\nconst DEBUG = true, VERBOSE = false;\n"
        self.assertEqual(
            _pairs(source),
            [("* Config flag ", "DEBUG"), ("* Config flag ", "VERBOSE")],
        )

    def test_var_and_let(self):
        """Test var and let declarations."""
        source = "/** counter */\nvar count = 0;\n/** user */\nlet user;\n"
        self.assertEqual(_pairs(source), [("* counter ", "count"), ("* user ", "user")])

    def test_arrow_function_constant(self):
        """Test that a const arrow function is named after the binding."""
        source = "/** Multiplies */\nconst multiply = (a, b) => a * b;\n"
        self.assertEqual(_pairs(source), [("* Multiplies ", "multiply")])

    def test_destructuring_expands_bound_names(self):
        """Test that destructuring names every bound identifier in order."""
        source = "/** Parts */\nconst { a, b: renamed } = obj, [first, ...others] = list;\n"
        self.assertEqual(
            [name for _, name in _pairs(source)],
            ["a", "renamed", "first", "others"],
        )

    def test_destructuring_skip_policy(self):
        """Test that the skip policy drops only destructuring declarators."""
        source = "/** Parts */\nconst { a } = obj, plain = 1;\n"
        self.assertEqual(_pairs(source, destructuring="skip"), [("* Parts ", "plain")])

    def test_unknown_destructuring_policy(self):
        """Test that an unknown policy raises ValueError."""
        with self.assertRaises(ValueError):
            extract_tagged_comments("const a = 1;", destructuring="join")


class TestMethodDefinitions(unittest.TestCase):
    """Test binding to class methods."""

    def test_class_methods(self):
        """Test plain, static and accessor methods."""
        source = (
            "class Greeter {\n"
            "  /** Builds text */\n"
            "  message() { return 'hi'; }\n"
            "  /** Static factory */\n"
            "  static create() { return new Greeter(); }\n"
            "  /** Getter */\n"
            "  get size() { return 1; }\n"
            "}\n"
        )
        self.assertEqual(
            _pairs(source),
            [
                ("* Builds text ", "message"),
                ("* Static factory ", "create"),
                ("* Getter ", "size"),
            ],
        )

    def test_string_and_private_keys(self):
        """Test string keys are unquoted and private names kept as written."""
        source = (
            "class K {\n"
            "  /** quoted */\n"
            "  'with space'() {}\n"
            "  /** private */\n"
            "  #secret() {}\n"
            "}\n"
        )
        self.assertEqual(
            _pairs(source),
            [("* quoted ", "with space"), ("* private ", "#secret")],
        )

    def test_computed_key_is_dropped(self):
        """Test that computed keys produce nothing."""
        source = "class K {\n  /** computed */\n  [Symbol.iterator]() {}\n}\n"
        self.assertEqual(_pairs(source), [])

    def test_object_literal_methods_are_dropped(self):
        """Test that methods of object literals are not named."""
        source = "const api = {\n  /** helper */\n  helper() { return 1; }\n};\n"
        self.assertEqual(extract_tagged_comments(source), [])

    def test_object_literal_inside_class_method(self):
        """Test that only class members are named when both kinds are nested."""
        source = (
            "class Store {\n"
            "  /** Builds handlers */\n"
            "  handlers() {\n"
            "    return {\n"
            "      /** click */\n"
            "      onClick() {},\n"
            "    };\n"
            "  }\n"
            "}\n"
        )
        self.assertEqual(_pairs(source), [("* Builds handlers ", "handlers")])


class TestBindingGaps(unittest.TestCase):
    """Comments that do not produce tagged comments."""

    def test_trailing_comment_produces_nothing(self):
        """Test that a comment with no following node is skipped."""
        source = "function f() {}\n/** trailing */\n"
        self.assertEqual(extract_tagged_comments(source), [])

    def test_other_node_kinds_are_dropped(self):
        """Test that classes, statements and exports are not named."""
        source = (
            "/** class */\nclass Widget {}\n"
            "/** call */\ninit();\n"
            "/** exported */\nexport function shared() {}\n"
        )
        self.assertEqual(extract_tagged_comments(source), [])

    def test_nested_declaration_inside_function(self):
        """Test that the nearest following node wins over the enclosing one."""
        source = (
            "function outer() {\n"
            "  /** inner helper */\n"
            "  function inner() {}\n"
            "}\n"
        )
        self.assertEqual(_pairs(source), [("* inner helper ", "inner")])

    def test_parse_error_propagates(self):
        """Test that parse errors are not swallowed."""
        with self.assertRaises(ParseError):
            extract_tagged_comments("/** doc */\nfunction f( {\n")


class TestNodeLookup(unittest.TestCase):
    """Test the offset-indexed node search."""

    def test_find_node_after_exact_offset(self):
        """Test that a node starting exactly at the offset is found."""
        parsed = parse_source("/** a */function a() {}")
        node = find_node_after(parsed, len("/** a */"))
        self.assertIsInstance(node, FunctionDeclaration)
        self.assertEqual(node.name, "a")

    def test_find_node_after_end_of_file(self):
        """Test that an offset past every node gives None."""
        parsed = parse_source("const a = 1;")
        self.assertIsNone(find_node_after(parsed, 100))

    def test_names_for_other_node(self):
        """Test that other node kinds have no names."""
        self.assertEqual(names_for_node(OtherNode(start=0, kind="class_declaration")), [])

    def test_names_for_declaration_keeps_order(self):
        """Test that declarator order is preserved."""
        node = VariableDeclaration(
            start=0,
            declarators=(
                Declarator(kind="identifier", names=("z",)),
                Declarator(kind="identifier", names=("a",)),
            ),
        )
        self.assertEqual(names_for_node(node), ["z", "a"])

    def test_bind_is_deterministic(self):
        """Test that binding the same parse twice gives equal results."""
        source = "/** a */\nconst a = 1, b = 2;\n/** c */\nfunction c() {}\n"
        parsed = parse_source(source)
        self.assertEqual(bind(parsed), bind(parsed))

    def test_bind_accepts_parse_comments_output(self):
        """Test that parse_comments output binds directly."""
        parsed = parse_comments("/** doc */\nconst a = 1;\n")
        self.assertEqual(bind(parsed), [TaggedComment(comment="* doc ", name="a")])


if __name__ == "__main__":
    unittest.main()
