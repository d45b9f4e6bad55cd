"""
Parameter Annotation Mixin.

For every function in the file, every untyped identifier parameter receives a
type annotation decided by the chain

    usage classifier -> name-pattern catalog -> ``any``

Independently of the annotation, each parameter name is run through the
bundle-trigger predicates so that the import bundles a file relies on are known
once the walk is over.
"""

from typing import FrozenSet, Iterator, Optional, Tuple

from tree_sitter import Node

from typify.analysis.scopes import Binding, function_kind
from typify.analysis.usage import classify
from typify.core.conversion_result import ParameterReport
from typify.enums import Bundle, VerdictSource
from typify.semantics.catalog import CatalogMatch, lookup, triggered_bundles
from typify.semantics.types import ANY, TypeVerdict

_ANNOTATED_PARAMETER_TYPES = ("required_parameter", "optional_parameter")


def infer_verdict(
  name: str,
  binding: Optional[Binding],
  function_type: str,
  active: FrozenSet[Bundle] = frozenset(),
) -> Tuple[TypeVerdict, VerdictSource, Optional[CatalogMatch]]:
  """
  Runs the inference chain for one parameter.

  Args:
      name: Parameter name.
      binding: Resolved binding (None skips the usage stage).
      function_type: Node type of the declaring function.
      active: Bundles already raised in the file.

  Returns:
      Tuple of the verdict, the stage that produced it and the catalog match, if any.
  """
  if binding is not None:
    verdict = classify(binding, function_type)
    if verdict is not None:
      return verdict, VerdictSource.USAGE, None

  match = lookup(name, active)
  if match is not None:
    return match.verdict, VerdictSource.CATALOG, match

  return ANY, VerdictSource.FALLBACK, None


class ParameterSlot:
  """
  An identifier-shaped parameter and where its annotation goes.
  """

  def __init__(self, node: Node, identifier: Node, annotation: Optional[Node] = None, bare: bool = False):
    self.node = node
    self.identifier = identifier
    self.annotation = annotation
    self.bare = bare


def parameter_slots(function: Node) -> Iterator[ParameterSlot]:
  """
  Yields the identifier-shaped parameters of a function.

  Plain identifiers (JavaScript) and ``required_parameter``/``optional_parameter``
  wrapping an identifier without a default value (TSX) qualify. Defaults, rest
  parameters and destructuring patterns are skipped.

  Args:
      function: Any function-like node.

  Yields:
      ParameterSlot: One per qualifying parameter, in order.
  """
  single = function.child_by_field_name("parameter")
  if single is not None and single.type == "identifier":
    yield ParameterSlot(single, single, bare=True)
    return

  params = function.child_by_field_name("parameters")
  if params is None:
    return
  for param in params.named_children:
    if param.type == "identifier":
      yield ParameterSlot(param, param)
    elif param.type in _ANNOTATED_PARAMETER_TYPES:
      pattern = param.child_by_field_name("pattern")
      if pattern is None or pattern.type != "identifier" or param.child_by_field_name("value") is not None:
        continue
      yield ParameterSlot(param, pattern, annotation=param.child_by_field_name("type"))


class AnnotationMixin:
  """
  Mixin for parameter type synthesis.

  Assumed attributes on self:
      ctx (RewriterContext): Shared conversion state.
      config (RuntimeConfig): Conversion settings.
      tracer (TraceLogger): Event logger.
  """

  def _function_label(self, node: Node) -> str:
    name = node.child_by_field_name("name")
    if name is not None:
      return self.ctx.text(name)
    parent = node.parent
    if parent is not None and parent.type == "variable_declarator":
      target = parent.child_by_field_name("name")
      if target is not None and target.type == "identifier":
        return self.ctx.text(target)
    return "<anonymous>"

  def visit_function(self, node: Node) -> Optional[bool]:
    if not self.config.annotate_parameters:
      return True

    label = self._function_label(node)
    for slot in parameter_slots(node):
      name = self.ctx.text(slot.identifier)
      for bundle in triggered_bundles(name):
        self.ctx.raise_bundle(bundle, name)
      self._annotate(node, label, slot, name)
    return True

  def _annotate(self, function: Node, label: str, slot: ParameterSlot, name: str) -> None:
    line = slot.identifier.start_point[0] + 1

    if slot.annotation is not None:
      existing = self.ctx.text(slot.annotation).lstrip(":").strip()
      self.ctx.parameters.append(
        ParameterReport(function=label, name=name, annotation=existing, source=VerdictSource.ANNOTATED, line=line)
      )
      self.tracer.log_inspection(name, "kept", existing)
      return

    binding = self.ctx.scopes.binding_at(slot.identifier)
    verdict, source, match = infer_verdict(name, binding, function_kind(function), self.ctx.active_bundles)
    if match is not None:
      self.ctx.raise_bundle(match.bundle, name)

    rendered = verdict.render()
    if slot.bare:
      self.ctx.replace(slot.identifier, f"({name}: {rendered})")
    else:
      self.ctx.insert(slot.node.end_byte, f": {rendered}")

    self.ctx.parameters.append(
      ParameterReport(function=label, name=name, annotation=rendered, source=source, line=line)
    )
    self.tracer.log_verdict(name, rendered, source.value, line)
