"""
Tree-sitter Parsing.

Wraps the tree-sitter runtime to turn JavaScript (with JSX) or TSX source into
a concrete syntax tree. The parser is error tolerant, so any ``ERROR`` or
missing node in the result is promoted to a ``ParseFailure``.

Loaded ``Language`` objects are cached per dialect; they are read-only and safe
to share between conversions.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

import tree_sitter
import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts

from typify.core.errors import ParseFailure
from typify.enums import Dialect

_LANGUAGES: Dict[Dialect, tree_sitter.Language] = {}


def get_language(dialect: Dialect) -> tree_sitter.Language:
  """
  Loads (once) the tree-sitter grammar for a dialect.

  Args:
      dialect (Dialect): The input dialect.

  Returns:
      tree_sitter.Language: The compiled grammar.
  """
  if dialect not in _LANGUAGES:
    if dialect == Dialect.TSX:
      _LANGUAGES[dialect] = tree_sitter.Language(tsts.language_tsx())
    else:
      _LANGUAGES[dialect] = tree_sitter.Language(tsjs.language())
  return _LANGUAGES[dialect]


@dataclass
class SyntaxTree:
  """
  A parsed source file.

  Attributes:
      source (bytes): UTF-8 encoded source. All node offsets index into it.
      tree (tree_sitter.Tree): The tree-sitter tree.
      dialect (Dialect): Grammar used for parsing.
  """

  source: bytes
  tree: tree_sitter.Tree
  dialect: Dialect = Dialect.JSX

  @property
  def root(self) -> tree_sitter.Node:
    """The ``program`` node."""
    return self.tree.root_node

  def text(self, node: tree_sitter.Node) -> str:
    """
    Returns the source text covered by a node.

    Args:
        node: Any node of this tree.

    Returns:
        str: Decoded text.
    """
    return self.source[node.start_byte : node.end_byte].decode("utf-8")


def iter_nodes(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
  """Yields ``node`` and all its descendants in source order."""
  stack = [node]
  while stack:
    current = stack.pop()
    yield current
    stack.extend(reversed(current.children))


def first_error(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
  """
  Finds the first ``ERROR`` or missing node of a subtree.

  Args:
      node: Root of the subtree.

  Returns:
      Optional[tree_sitter.Node]: The offending node, or None.
  """
  if not node.has_error:
    return None
  for current in iter_nodes(node):
    if current.type == "ERROR" or current.is_missing:
      return current
  return node


class JsParser:
  """
  The Parser collaborator: source text in, syntax tree out.
  """

  def __init__(self, dialect: Dialect = Dialect.JSX):
    """
    Initializes the parser for a dialect.

    Args:
        dialect (Dialect): ``jsx`` for JavaScript modules, ``tsx`` to also accept annotations.
    """
    self.dialect = Dialect(dialect)
    self._parser = tree_sitter.Parser(get_language(self.dialect))

  def parse(self, code: str) -> SyntaxTree:
    """
    Parses source code in module mode.

    Args:
        code (str): Source text.

    Returns:
        SyntaxTree: The parsed tree.

    Raises:
        ParseFailure: If the text contains syntax errors.
    """
    source = code.encode("utf-8")
    tree = self._parser.parse(source)
    bad = first_error(tree.root_node)
    if bad is not None:
      row, col = bad.start_point
      kind = "Missing token" if bad.is_missing else "Syntax error"
      raise ParseFailure(kind, line=row + 1, column=col + 1)
    return SyntaxTree(source=source, tree=tree, dialect=self.dialect)
