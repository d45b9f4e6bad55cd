"""
Base Rewriter Implementation.

This module provides the ``BaseRewriter`` class, the traversal driver used by
the ``TypifyRewriter``. It walks the syntax tree once, parent before children,
and dispatches every node to a ``visit_<node type>`` handler when one exists.
Function-like nodes of any kind are dispatched to ``visit_function``.

A handler returning ``False`` stops the walk from descending into the node
(used when the node has been removed). Handlers record edits on the shared
``RewriterContext`` instead of mutating the tree.
"""

from typing import Callable, Optional

from tree_sitter import Node

from typify.analysis.scopes import FUNCTION_TYPES
from typify.core.rewriter.context import RewriterContext


class BaseRewriter:
  """
  The base class for the single-pass tree walk.
  """

  def __init__(self, context: RewriterContext):
    """
    Initializes the rewriter.

    Args:
        context: Per-conversion state (tree, scopes, config, edits).
    """
    self.ctx = context
    self.config = context.config
    self.tracer = context.tracer

  def _handler_for(self, node: Node) -> Optional[Callable[[Node], Optional[bool]]]:
    handler = getattr(self, f"visit_{node.type}", None)
    if handler is None and node.type in FUNCTION_TYPES:
      handler = getattr(self, "visit_function", None)
    return handler

  def run(self) -> RewriterContext:
    """
    Walks the whole tree.

    Returns:
        RewriterContext: The context, populated with edits and import state.
    """
    stack = [self.ctx.tree.root]
    while stack:
      node = stack.pop()
      handler = self._handler_for(node)
      if handler is not None and handler(node) is False:
        continue
      stack.extend(reversed(node.named_children))
    return self.ctx

  def visit_variable_declaration(self, node: Node) -> Optional[bool]:
    return True

  def visit_lexical_declaration(self, node: Node) -> Optional[bool]:
    return True
