"""
Declaration Mutability Mixin.

Rewrites ``var`` declarations into block-scoped ones: ``const`` when the bound
name is never reassigned in its scope, ``let`` otherwise. Declarations with
several declarators or a destructuring target are left alone.
"""

from typing import Optional

from tree_sitter import Node

from typify.analysis.scopes import Binding

STRICT_KEYWORD = "const"
RELAXED_KEYWORD = "let"


def decide_keyword(binding: Binding) -> str:
  """
  Chooses the block-scoped keyword for a binding.

  This depends only on the reassignment evidence of the binding, never on the
  keyword currently written in the source, so repeated application is stable.

  Args:
      binding: The declared variable.

  Returns:
      str: ``const`` or ``let``.
  """
  return STRICT_KEYWORD if binding.constant else RELAXED_KEYWORD


class DeclarationMixin:
  """
  Mixin for ``var`` -> ``const``/``let`` conversion.

  Assumed attributes on self:
      ctx (RewriterContext): Shared conversion state.
      config (RuntimeConfig): Conversion settings.
      tracer (TraceLogger): Event logger.
  """

  def visit_variable_declaration(self, node: Node) -> Optional[bool]:
    self._rewrite_mutability(node)
    return super().visit_variable_declaration(node)

  def _rewrite_mutability(self, node: Node) -> Optional[str]:
    """
    Replaces the ``var`` keyword of a single-declarator declaration.

    Args:
        node: A ``variable_declaration`` node.

    Returns:
        Optional[str]: The keyword written, or None if the declaration was left unchanged.
    """
    if not self.config.rewrite_var:
      return None

    declarators = [c for c in node.named_children if c.type == "variable_declarator"]
    if len(declarators) != 1:
      return None
    name = declarators[0].child_by_field_name("name")
    if name is None or name.type != "identifier":
      return None

    keyword_token = node.children[0] if node.children else None
    if keyword_token is None or keyword_token.type != "var":
      return None

    binding = self.ctx.scopes.binding_at(name)
    if binding is None:
      return None

    keyword = decide_keyword(binding)
    self.ctx.replace(keyword_token, keyword)
    self.tracer.log_mutation("variable_declaration", f"var {binding.name}", f"{keyword} {binding.name}")
    return keyword
