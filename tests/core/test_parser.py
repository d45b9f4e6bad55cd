"""
Tests for the tree-sitter Parser wrapper.
"""

import pytest

from typify.core.errors import ConversionError, ParseFailure
from typify.core.parser import JsParser, first_error, get_language
from typify.enums import Dialect


def test_parse_module():
  tree = JsParser().parse("import x from 'x';\nconst a = 1;")
  assert tree.root.type == "program"
  assert tree.dialect == Dialect.JSX
  assert tree.text(tree.root.named_children[1]) == "const a = 1;"


def test_parse_jsx():
  tree = JsParser().parse("const el = <div className='a'>{name}</div>;")
  assert first_error(tree.root) is None


def test_syntax_error_position():
  """
  Scenario: Unbalanced parenthesis on the second line.
  Expect: ParseFailure carrying a 1-based position.
  """
  with pytest.raises(ParseFailure) as exc:
    JsParser().parse("const a = 1;\nfunction broken( {")

  assert isinstance(exc.value, ConversionError)
  assert exc.value.line is not None
  assert exc.value.line >= 1
  assert "line" in str(exc.value)


def test_type_annotations_rejected_in_jsx():
  with pytest.raises(ParseFailure):
    JsParser().parse("function f(a: string) {}")


def test_type_annotations_accepted_in_tsx():
  tree = JsParser(Dialect.TSX).parse("function f(a: string) {}")
  assert tree.dialect == Dialect.TSX
  assert first_error(tree.root) is None


def test_dialect_from_string():
  assert JsParser("tsx").dialect == Dialect.TSX


def test_language_cached():
  assert get_language(Dialect.JSX) is get_language(Dialect.JSX)


def test_non_ascii_offsets():
  """Node offsets are byte offsets; text() must decode slices correctly."""
  tree = JsParser().parse('const s = "héllo";\nconst t = 1;')
  assert tree.text(tree.root.named_children[1]) == "const t = 1;"
