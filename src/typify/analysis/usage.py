"""
Usage Classifier.

Decides a parameter's type from how the parameter is used inside its declaring
function. The decision is a short-circuiting rule chain:

1.  Binding rules look at the parameter as a whole (error-first callbacks,
    ``next`` middleware).
2.  Reference rules look at one reference site at a time, in source order.
    Every reference is tried against every rule before moving to the next
    reference; the first rule that fires decides the verdict.

Each rule is a small pure function returning a verdict or None, so rules can be
tested in isolation. ``classify`` returns None (no evidence) when nothing
fires, which tells the caller to fall back to the name-pattern catalog.
"""

from typing import Callable, Optional, Sequence, Tuple

from tree_sitter import Node

from typify.analysis.scopes import DECLARED_FUNCTION_TYPES, Binding, Reference, logical_parent, same
from typify.semantics.types import (
  ANY_ARRAY,
  BOOLEAN,
  ERROR_OR_NULL,
  NUMBER,
  STRING,
  STRING_RECORD,
  NamedReference,
  TypeVerdict,
)

BindingRule = Callable[[Binding, str], Optional[TypeVerdict]]
ReferenceRule = Callable[[Reference, str], Optional[TypeVerdict]]

_ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/"})

REQUEST_NAMES = frozenset({"req", "request"})
RESPONSE_NAMES = frozenset({"res", "response"})


def _operator(node: Node) -> Optional[str]:
  op = node.child_by_field_name("operator")
  return op.type if op is not None else None


def _unwrap(node: Optional[Node]) -> Optional[Node]:
  while node is not None and node.type == "parenthesized_expression" and node.named_children:
    node = node.named_children[0]
  return node


# --- Binding rules ---


def error_callback(binding: Binding, function_type: str) -> Optional[TypeVerdict]:
  """``err``/``error`` in a declared or arrow function is ``Error | null``."""
  if function_type in DECLARED_FUNCTION_TYPES or function_type == "arrow_function":
    if binding.name in ("err", "error"):
      return ERROR_OR_NULL
  return None


def next_middleware(binding: Binding, function_type: str) -> Optional[TypeVerdict]:
  """``next`` is the Express continuation."""
  if binding.name == "next":
    return NamedReference("NextFunction")
  return None


# --- Reference rules ---


def string_concatenation(ref: Reference, name: str) -> Optional[TypeVerdict]:
  """Operand of a binary ``+``."""
  if ref.parent_type == "binary_expression" and _operator(ref.parent) == "+":
    if ref.role("left", "right"):
      return STRING
  return None


def numeric_operation(ref: Reference, name: str) -> Optional[TypeVerdict]:
  """Operand of ``+ - * /`` whose other operand is a numeric literal."""
  if ref.parent_type != "binary_expression" or _operator(ref.parent) not in _ARITHMETIC_OPERATORS:
    return None
  role = ref.role("left", "right")
  if role is None:
    return None
  other = _unwrap(ref.parent.child_by_field_name("right" if role == "left" else "left"))
  if other is not None and other.type == "number":
    return NUMBER
  return None


def array_map(ref: Reference, name: str) -> Optional[TypeVerdict]:
  """Object of a ``.map`` member that is called."""
  if ref.parent_type != "member_expression" or ref.role("object") is None:
    return None
  prop = ref.parent.child_by_field_name("property")
  if prop is None or prop.text.decode("utf-8") != "map":
    return None
  call, callee = logical_parent(ref.parent)
  if call is not None and call.type == "call_expression" and same(call.child_by_field_name("function"), callee):
    return ANY_ARRAY
  return None


def branch_condition(ref: Reference, name: str) -> Optional[TypeVerdict]:
  """Test expression of an ``if`` statement or a ternary."""
  if ref.parent_type in ("if_statement", "ternary_expression") and ref.role("condition"):
    return BOOLEAN
  return None


def member_access(ref: Reference, name: str) -> Optional[TypeVerdict]:
  """Object of a property access; request/response names get Express types."""
  if ref.parent_type not in ("member_expression", "subscript_expression") or ref.role("object") is None:
    return None
  if name in REQUEST_NAMES:
    return NamedReference("Request")
  if name in RESPONSE_NAMES:
    return NamedReference("Response")
  return STRING_RECORD


BINDING_RULES: Tuple[BindingRule, ...] = (error_callback, next_middleware)

REFERENCE_RULES: Tuple[ReferenceRule, ...] = (
  string_concatenation,
  numeric_operation,
  array_map,
  branch_condition,
  member_access,
)


def classify_references(references: Sequence[Reference], name: str) -> Optional[TypeVerdict]:
  """
  Runs the reference rules over reference sites in source order.

  Args:
      references: Reference sites of the parameter.
      name: The parameter name (case-sensitive).

  Returns:
      Optional[TypeVerdict]: The first verdict found, or None.
  """
  for ref in references:
    for rule in REFERENCE_RULES:
      verdict = rule(ref, name)
      if verdict is not None:
        return verdict
  return None


def classify(binding: Binding, function_type: str) -> Optional[TypeVerdict]:
  """
  Classifies a parameter from its usage.

  Args:
      binding: The parameter binding with its resolved references.
      function_type: Node type of the declaring function (e.g. ``arrow_function``).

  Returns:
      Optional[TypeVerdict]: The verdict, or None if there is no structural evidence.
  """
  for rule in BINDING_RULES:
    verdict = rule(binding, function_type)
    if verdict is not None:
      return verdict
  return classify_references(binding.references, binding.name)
