"""
Rewriter Context Module.

This module provides the `RewriterContext` container, which holds the shared
state of one file conversion: the parsed tree, its scope analysis, the edits
collected so far, the raised bundle flags and the require-derived imports.

A context is created per conversion and discarded afterwards, so nothing leaks
between files.
"""

from typing import Dict, List, Optional

from tree_sitter import Node

from typify.analysis.scopes import ScopeInfo
from typify.config import RuntimeConfig
from typify.core.conversion_result import ParameterReport
from typify.core.parser import SyntaxTree
from typify.core.printer import Edit
from typify.core.tracer import TraceLogger
from typify.enums import Bundle
from typify.semantics.schema import ImportRequirement


class RewriterContext:
  """
  Shared state container for the rewriting pass.
  """

  def __init__(
    self,
    tree: SyntaxTree,
    scopes: ScopeInfo,
    config: Optional[RuntimeConfig] = None,
    tracer: Optional[TraceLogger] = None,
  ):
    """
    Initializes the context.

    Args:
        tree: The parsed file.
        scopes: Scope analysis of ``tree``.
        config: The runtime configuration for the conversion.
        tracer: Event logger for this run.
    """
    self.tree = tree
    self.scopes = scopes
    self.config = config or RuntimeConfig()
    self.tracer = tracer or TraceLogger()

    # -- Output State --
    self.edits: List[Edit] = []

    # Raised bundles in first-trigger order (dict used as ordered set)
    self.bundles: Dict[Bundle, str] = {}

    # source path -> import, first declaration wins
    self.require_imports: Dict[str, ImportRequirement] = {}

    self.parameters: List[ParameterReport] = []

  def text(self, node: Node) -> str:
    return self.tree.text(node)

  # --- Edits ---

  def insert(self, offset: int, text: str) -> None:
    self.edits.append(Edit(offset, offset, text))

  def replace(self, node: Node, text: str) -> None:
    self.edits.append(Edit(node.start_byte, node.end_byte, text))

  def remove_statement(self, node: Node) -> None:
    self.edits.append(Edit(node.start_byte, node.end_byte, "", remove_line=True))

  # --- Bundles ---

  def raise_bundle(self, bundle: Bundle, trigger: str) -> None:
    """
    Marks a bundle as needed by this file.

    Args:
        bundle: The bundle to raise.
        trigger: Parameter name that caused it (kept for the first trigger only).
    """
    if bundle in self.bundles:
      return
    self.bundles[bundle] = trigger
    self.tracer.log_import("Bundle raised", bundle.value, f"triggered by '{trigger}'")

  @property
  def active_bundles(self) -> frozenset:
    return frozenset(self.bundles)
