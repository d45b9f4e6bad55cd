"""
Import Rewriting Mixin.

Turns ``require`` declarations into static import statements:

* ``const x = require("mod")``            -> ``import x from "mod";``
* ``const { a, b: c } = require("mod")``  -> ``import { a, b as c } from "mod";``

Only declarations with a single declarator whose initializer is ``require``
called with exactly one string literal are rewritten, and only when the
declaration sits directly in a statement list (program, block or switch case).
The first declaration of a module path wins; later ones are removed without
emitting a second import.

The mixin also assembles the final import list, placing bundle imports in front
of the require-derived ones.
"""

from typing import List, Optional, Tuple

from tree_sitter import Node

from typify.semantics.catalog import BUNDLE_EMIT_ORDER, BUNDLES
from typify.semantics.schema import ImportRequirement, ImportSpecifier

REQUIRE_CALLEE = "require"

_STATEMENT_LIST_TYPES = frozenset({"program", "statement_block", "switch_case", "switch_default"})


def _declarators(node: Node) -> List[Node]:
  return [c for c in node.named_children if c.type == "variable_declarator"]


def _string_literal(node: Node) -> Optional[Tuple[str, str]]:
  """Returns (raw contents, quote) of a quoted string literal node."""
  if node.type != "string":
    return None
  raw = node.text.decode("utf-8")
  if len(raw) < 2 or raw[0] not in "'\"" or raw[-1] != raw[0]:
    return None
  return raw[1:-1], raw[0]


class ImportMixin:
  """
  Mixin for require-to-import conversion.

  Assumed attributes on self:
      ctx (RewriterContext): Shared conversion state.
      config (RuntimeConfig): Conversion settings.
      tracer (TraceLogger): Event logger.
  """

  def visit_variable_declaration(self, node: Node) -> Optional[bool]:
    if self._rewrite_require(node):
      return False
    return super().visit_variable_declaration(node)

  def visit_lexical_declaration(self, node: Node) -> Optional[bool]:
    if self._rewrite_require(node):
      return False
    return super().visit_lexical_declaration(node)

  def _require_source(self, declarator: Node) -> Optional[Tuple[str, str]]:
    """
    Matches ``require("<literal>")`` initializers.

    Returns:
        Optional[Tuple[str, str]]: (module path, quote) or None if the shape differs.
    """
    value = declarator.child_by_field_name("value")
    if value is None or value.type != "call_expression":
      return None
    callee = value.child_by_field_name("function")
    if callee is None or callee.type != "identifier" or self.ctx.text(callee) != REQUIRE_CALLEE:
      return None
    args = value.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
      return None
    arg_nodes = [a for a in args.named_children if a.type != "comment"]
    if len(arg_nodes) != 1:
      return None
    return _string_literal(arg_nodes[0])

  def _import_for_pattern(self, target: Optional[Node], source: str, quote: str) -> Optional[ImportRequirement]:
    """
    Builds the import equivalent of a declaration target.

    Returns:
        Optional[ImportRequirement]: None if the target shape is not supported.
    """
    if target is None:
      return None
    if target.type == "identifier":
      return ImportRequirement.default(self.ctx.text(target), source, quote)
    if target.type != "object_pattern":
      return None

    specifiers: List[ImportSpecifier] = []
    for prop in target.named_children:
      if prop.type == "comment":
        continue
      if prop.type == "shorthand_property_identifier_pattern":
        name = self.ctx.text(prop)
        specifiers.append(ImportSpecifier(imported=name, local=name))
      elif prop.type == "pair_pattern":
        key = prop.child_by_field_name("key")
        value = prop.child_by_field_name("value")
        if key is None or value is None or key.type != "property_identifier" or value.type != "identifier":
          return None
        specifiers.append(ImportSpecifier(imported=self.ctx.text(key), local=self.ctx.text(value)))
      else:
        return None

    if not specifiers:
      return None
    return ImportRequirement(source=source, specifiers=specifiers, quote=quote)

  def _rewrite_require(self, node: Node) -> bool:
    """
    Converts one declaration if it is a require declaration.

    Args:
        node: A ``variable_declaration`` or ``lexical_declaration`` node.

    Returns:
        bool: True if the declaration was consumed (and removed).
    """
    if not self.config.rewrite_requires:
      return False
    if node.parent is None or node.parent.type not in _STATEMENT_LIST_TYPES:
      return False

    declarators = _declarators(node)
    if len(declarators) != 1:
      return False
    declarator = declarators[0]

    literal = self._require_source(declarator)
    if literal is None:
      return False
    source, quote = literal

    requirement = self._import_for_pattern(declarator.child_by_field_name("name"), source, quote)
    if requirement is None:
      self.tracer.log_inspection(self.ctx.text(node), "skipped", "unsupported require target")
      return False

    if source in self.ctx.require_imports:
      self.tracer.log_import("Dropped duplicate require", source)
    else:
      self.ctx.require_imports[source] = requirement
      self.tracer.log_import("Rewrote require", source, ", ".join(requirement.binding_names))

    self.ctx.remove_statement(node)
    self.tracer.log_mutation(node.type, self.ctx.text(node), "(removed)")
    return True

  def assemble_imports(self) -> List[ImportRequirement]:
    """
    Builds the ordered import list for the file.

    Bundle imports come first in ``BUNDLE_EMIT_ORDER``; require-derived
    imports follow in the order their declarations appeared.

    Returns:
        List[ImportRequirement]: Imports to print before the body.
    """
    disabled = set(self.config.disabled_bundles)
    result = [
      BUNDLES[bundle].requirement()
      for bundle in BUNDLE_EMIT_ORDER
      if bundle in self.ctx.bundles and bundle not in disabled
    ]
    result.extend(self.ctx.require_imports.values())
    return result
