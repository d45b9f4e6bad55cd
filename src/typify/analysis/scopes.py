"""
Lexical Scope and Binding Analysis.

This module provides a static analysis pass that runs before rewriting. It
builds the lexical scopes of a parsed file, registers every declared name as a
``Binding`` and resolves each identifier occurrence to the binding it refers to.

The `ScopeAnalyzer` tracks:
1.  **Function scopes**: programs, function declarations/expressions, arrows and
    methods. ``var`` declarations and parameters live here.
2.  **Block scopes**: statement blocks, loops, ``catch`` clauses and ``switch``
    bodies. ``let``, ``const``, classes and function declarations live here.
3.  **References**: every read and write of a bound name, in source order. Writes
    are assignment targets, ``++``/``--`` operands and for-in/of targets.

Declarations are hoisted by construction: all occurrences are collected during
the walk and resolved only once every scope is populated.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node

from typify.core.parser import SyntaxTree
from typify.enums import ReferenceKind

FUNCTION_TYPES = frozenset(
  {
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
  }
)

DECLARED_FUNCTION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})

_DEFAULT_EXPORT_DECLARATIONS = {
  "function_expression": "function_declaration",
  "function": "function_declaration",
  "generator_function": "generator_function_declaration",
}

_NAMED_EXPRESSION_TYPES = frozenset({"function_expression", "function", "generator_function"})

_BLOCK_SCOPE_TYPES = frozenset({"statement_block", "for_statement", "for_in_statement", "catch_clause", "switch_body"})

# TypeScript-only subtrees never contain value references we care about.
_TYPE_ONLY_TYPES = frozenset(
  {
    "type_annotation",
    "type_arguments",
    "type_parameters",
    "interface_declaration",
    "type_alias_declaration",
    "asserts_annotation",
  }
)


def same(a: Optional[Node], b: Optional[Node]) -> bool:
  """True if both handles point at the same tree node."""
  if a is None or b is None:
    return False
  return a.id == b.id


def logical_parent(node: Node) -> Tuple[Optional[Node], Node]:
  """
  Finds the parent of an expression with parentheses made transparent.

  Args:
      node: The expression node.

  Returns:
      Tuple[Optional[Node], Node]: The first non-parenthesis ancestor and the
      child of that ancestor which (transitively) wraps ``node``.
  """
  child = node
  parent = node.parent
  while parent is not None and parent.type == "parenthesized_expression":
    child = parent
    parent = parent.parent
  return parent, child


def field_of(parent: Optional[Node], child: Node, *names: str) -> Optional[str]:
  """
  Returns which of the named fields of ``parent`` holds ``child``.

  Args:
      parent: Candidate parent node.
      child: Candidate child node.
      *names: Field names to test, in order.

  Returns:
      Optional[str]: The matching field name or None.
  """
  if parent is None:
    return None
  for name in names:
    if same(parent.child_by_field_name(name), child):
      return name
  return None


def function_kind(node: Node) -> str:
  """
  Returns the node type a function counts as for declaration-sensitive rules.

  An anonymous ``export default function () {}`` parses as an expression but
  declares the module's default export, so it counts as a declaration.

  Args:
      node: A function-like node.

  Returns:
      str: The node type, with default-exported expressions mapped to their
      declaration form.
  """
  declared = _DEFAULT_EXPORT_DECLARATIONS.get(node.type)
  parent = node.parent
  if declared is None or parent is None or parent.type != "export_statement":
    return node.type
  if any(child.type == "default" for child in parent.children):
    return declared
  return node.type


@dataclass
class Reference:
  """
  One occurrence of a bound name.

  Attributes:
      node: The identifier node.
      kind: Read or write.
      parent: The enclosing expression with parentheses skipped.
      child: The node directly below ``parent`` that wraps ``node``.
  """

  node: Node
  kind: ReferenceKind
  parent: Optional[Node]
  child: Node

  @classmethod
  def at(cls, node: Node, kind: ReferenceKind) -> "Reference":
    parent, child = logical_parent(node)
    return cls(node=node, kind=kind, parent=parent, child=child)

  @property
  def parent_type(self) -> Optional[str]:
    return self.parent.type if self.parent is not None else None

  def role(self, *fields: str) -> Optional[str]:
    """Returns the field of ``parent`` that holds this reference, if any of ``fields``."""
    return field_of(self.parent, self.child, *fields)


@dataclass
class Binding:
  """
  A declared name and every resolved occurrence of it.
  """

  name: str
  kind: str
  """One of var, let, const, param, function, class, import, catch."""

  scope: "Scope"
  node: Node
  """The identifier that declares the name (first declaration)."""

  initialized: bool = True
  declarations: int = 1
  references: List[Reference] = field(default_factory=list)

  @property
  def writes(self) -> List[Reference]:
    return [r for r in self.references if r.kind == ReferenceKind.WRITE]

  @property
  def reassigned(self) -> bool:
    """True if the name is ever assigned again after its declaration."""
    return self.declarations > 1 or bool(self.writes)

  @property
  def constant(self) -> bool:
    """True if the binding can be declared ``const``."""
    return self.initialized and not self.reassigned


class Scope:
  """
  Represents a lexical scope (function or block).
  """

  def __init__(self, node: Node, parent: Optional["Scope"] = None, is_function: bool = False):
    """
    Initialize the scope.

    Args:
        node: The node that opens the scope.
        parent: The enclosing scope (None for the program).
        is_function: True for program and function scopes (``var`` targets).
    """
    self.node = node
    self.parent = parent
    self.is_function = is_function
    self.bindings: Dict[str, Binding] = {}

  def lookup(self, name: str) -> Optional[Binding]:
    """
    Resolve a name, traversing parent scopes.

    Args:
        name: Identifier to resolve.

    Returns:
        The Binding if declared in this or an enclosing scope, else None.
    """
    scope: Optional[Scope] = self
    while scope is not None:
      if name in scope.bindings:
        return scope.bindings[name]
      scope = scope.parent
    return None

  def function_scope(self) -> "Scope":
    """Returns the nearest enclosing function (or program) scope."""
    scope = self
    while not scope.is_function and scope.parent is not None:
      scope = scope.parent
    return scope

  def __repr__(self) -> str:
    return f"<Scope {self.node.type} {sorted(self.bindings)}>"


class ScopeInfo:
  """
  Result of scope analysis for one file.
  """

  def __init__(self, root: Scope):
    self.root = root
    self._declared: Dict[int, Binding] = {}

  def binding_at(self, identifier: Node) -> Optional[Binding]:
    """
    Returns the binding declared by an identifier node.

    Args:
        identifier: An identifier in declaration position (parameter, declarator name...).

    Returns:
        Optional[Binding]: The binding, or None if the node declares nothing.
    """
    return self._declared.get(identifier.id)

  def _register_declaration(self, identifier: Node, binding: Binding) -> None:
    self._declared[identifier.id] = binding


class ScopeAnalyzer:
  """
  Builds a `ScopeInfo` for a syntax tree.

  Usage::

      info = ScopeAnalyzer(tree).analyze()
      binding = info.binding_at(param_identifier)
      for ref in binding.references: ...
  """

  def __init__(self, tree: SyntaxTree):
    self.tree = tree
    self._occurrences: List[Tuple[Node, Scope, ReferenceKind]] = []
    self._info: Optional[ScopeInfo] = None

  def analyze(self) -> ScopeInfo:
    """
    Walks the tree, then resolves every collected occurrence.

    Returns:
        ScopeInfo: Scopes, bindings and references of the file.
    """
    root_node = self.tree.root
    root = Scope(root_node, None, is_function=True)
    self._info = ScopeInfo(root)
    self._occurrences = []

    for child in root_node.named_children:
      self._walk(child, root)

    for node, scope, kind in self._occurrences:
      binding = scope.lookup(self.tree.text(node))
      if binding is not None:
        binding.references.append(Reference.at(node, kind))

    return self._info

  # --- Declarations ---

  def _declare(self, identifier: Node, scope: Scope, kind: str, initialized: bool = True) -> None:
    name = self.tree.text(identifier)
    existing = scope.bindings.get(name)
    if existing is not None:
      existing.declarations += 1
      self._info._register_declaration(identifier, existing)
      return
    binding = Binding(name=name, kind=kind, scope=scope, node=identifier, initialized=initialized)
    scope.bindings[name] = binding
    self._info._register_declaration(identifier, binding)

  def _declare_pattern(self, pattern: Optional[Node], target: Scope, kind: str, walk_scope: Scope, initialized: bool = True) -> None:
    """Declares every name bound by a (possibly destructuring) pattern."""
    if pattern is None:
      return
    t = pattern.type
    if t in ("identifier", "shorthand_property_identifier_pattern"):
      self._declare(pattern, target, kind, initialized)
    elif t in ("object_pattern", "array_pattern"):
      for child in pattern.named_children:
        self._declare_pattern(child, target, kind, walk_scope, initialized)
    elif t == "pair_pattern":
      key = pattern.child_by_field_name("key")
      if key is not None and key.type == "computed_property_name":
        self._walk(key, walk_scope)
      self._declare_pattern(pattern.child_by_field_name("value"), target, kind, walk_scope, initialized)
    elif t in ("object_assignment_pattern", "assignment_pattern"):
      self._declare_pattern(pattern.child_by_field_name("left"), target, kind, walk_scope, initialized)
      self._walk(pattern.child_by_field_name("right"), walk_scope)
    elif t == "rest_pattern":
      for child in pattern.named_children:
        self._declare_pattern(child, target, kind, walk_scope, initialized)
    elif t in ("required_parameter", "optional_parameter"):
      self._declare_pattern(pattern.child_by_field_name("pattern"), target, kind, walk_scope, initialized)
      self._walk(pattern.child_by_field_name("value"), walk_scope)

  def _collect_writes(self, pattern: Optional[Node], scope: Scope) -> None:
    """Records every name (re)assigned by an assignment target."""
    if pattern is None:
      return
    t = pattern.type
    if t in ("identifier", "shorthand_property_identifier_pattern"):
      self._occurrences.append((pattern, scope, ReferenceKind.WRITE))
    elif t in ("object_pattern", "array_pattern", "rest_pattern"):
      for child in pattern.named_children:
        self._collect_writes(child, scope)
    elif t == "pair_pattern":
      key = pattern.child_by_field_name("key")
      if key is not None and key.type == "computed_property_name":
        self._walk(key, scope)
      self._collect_writes(pattern.child_by_field_name("value"), scope)
    elif t in ("object_assignment_pattern", "assignment_pattern"):
      self._collect_writes(pattern.child_by_field_name("left"), scope)
      self._walk(pattern.child_by_field_name("right"), scope)
    else:
      self._walk(pattern, scope)

  # --- Traversal ---

  def _walk(self, node: Optional[Node], scope: Scope) -> None:
    if node is None:
      return
    t = node.type

    if t in _TYPE_ONLY_TYPES or t == "comment":
      return
    if t == "identifier":
      self._occurrences.append((node, scope, ReferenceKind.READ))
      return
    if t == "shorthand_property_identifier":
      self._occurrences.append((node, scope, ReferenceKind.READ))
      return
    if t in FUNCTION_TYPES:
      self._walk_function(node, scope)
      return
    if t in ("class_declaration", "abstract_class_declaration"):
      name = node.child_by_field_name("name")
      if name is not None and name.type in ("identifier", "type_identifier"):
        self._declare(name, scope, "class")
      self._walk_children(node, scope, skip=name)
      return
    if t == "class":
      self._walk_children(node, scope, skip=node.child_by_field_name("name"))
      return
    if t in ("variable_declaration", "lexical_declaration"):
      self._walk_declaration(node, scope)
      return
    if t == "for_in_statement":
      self._walk_for_in(node, scope)
      return
    if t == "catch_clause":
      inner = self._open_scope(node, scope)
      self._declare_pattern(node.child_by_field_name("parameter"), inner, "catch", inner)
      self._walk(node.child_by_field_name("body"), inner)
      return
    if t in _BLOCK_SCOPE_TYPES:
      inner = self._open_scope(node, scope)
      self._walk_children(node, inner)
      return
    if t == "import_statement":
      self._walk_import(node, scope)
      return
    if t == "export_specifier":
      self._walk(node.child_by_field_name("name"), scope)
      return
    if t == "assignment_expression":
      left = node.child_by_field_name("left")
      if left is not None and left.type in ("identifier", "object_pattern", "array_pattern"):
        self._collect_writes(left, scope)
      else:
        self._walk(left, scope)
      self._walk(node.child_by_field_name("right"), scope)
      return
    if t == "augmented_assignment_expression":
      left = node.child_by_field_name("left")
      if left is not None and left.type == "identifier":
        self._occurrences.append((left, scope, ReferenceKind.WRITE))
      else:
        self._walk(left, scope)
      self._walk(node.child_by_field_name("right"), scope)
      return
    if t == "update_expression":
      argument = node.child_by_field_name("argument")
      if argument is not None and argument.type == "identifier":
        self._occurrences.append((argument, scope, ReferenceKind.WRITE))
      else:
        self._walk(argument, scope)
      return

    self._walk_children(node, scope)

  def _walk_children(self, node: Node, scope: Scope, skip: Optional[Node] = None) -> None:
    for child in node.named_children:
      if skip is not None and same(child, skip):
        continue
      self._walk(child, scope)

  def _open_scope(self, node: Node, parent: Scope, is_function: bool = False) -> Scope:
    return Scope(node, parent, is_function=is_function)

  def _walk_function(self, node: Node, scope: Scope) -> None:
    t = node.type
    name = node.child_by_field_name("name")
    if t in DECLARED_FUNCTION_TYPES and name is not None:
      self._declare(name, scope, "function")

    inner = self._open_scope(node, scope, is_function=True)
    if t in _NAMED_EXPRESSION_TYPES and name is not None:
      self._declare(name, inner, "function")
    if t == "method_definition" and name is not None and name.type == "computed_property_name":
      self._walk(name, scope)

    params = node.child_by_field_name("parameters")
    if params is not None:
      for param in params.named_children:
        self._declare_pattern(param, inner, "param", inner)
    single = node.child_by_field_name("parameter")
    if single is not None:
      self._declare_pattern(single, inner, "param", inner)

    body = node.child_by_field_name("body")
    if body is None:
      return
    if body.type == "statement_block":
      # The function body shares the parameter scope.
      self._walk_children(body, inner)
    else:
      self._walk(body, inner)

  def _walk_declaration(self, node: Node, scope: Scope) -> None:
    if node.type == "variable_declaration":
      kind = "var"
      target = scope.function_scope()
    else:
      kind_node = node.child_by_field_name("kind")
      kind = self.tree.text(kind_node) if kind_node is not None else "let"
      target = scope
    for declarator in node.named_children:
      if declarator.type != "variable_declarator":
        continue
      value = declarator.child_by_field_name("value")
      self._declare_pattern(declarator.child_by_field_name("name"), target, kind, scope, initialized=value is not None)
      self._walk(value, scope)

  def _walk_for_in(self, node: Node, scope: Scope) -> None:
    inner = self._open_scope(node, scope)
    kind_node = node.child_by_field_name("kind")
    left = node.child_by_field_name("left")
    if kind_node is not None:
      kind = self.tree.text(kind_node)
      target = inner.function_scope() if kind == "var" else inner
      self._declare_pattern(left, target, kind, inner)
    else:
      self._collect_writes(left, inner)
    self._walk(node.child_by_field_name("right"), scope)
    self._walk(node.child_by_field_name("body"), inner)

  def _walk_import(self, node: Node, scope: Scope) -> None:
    for clause in node.named_children:
      if clause.type != "import_clause":
        continue
      for child in clause.named_children:
        if child.type == "identifier":
          self._declare(child, scope, "import")
        elif child.type == "namespace_import":
          for ident in child.named_children:
            if ident.type == "identifier":
              self._declare(ident, scope, "import")
        elif child.type == "named_imports":
          for spec in child.named_children:
            if spec.type != "import_specifier":
              continue
            local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
            if local is not None and local.type == "identifier":
              self._declare(local, scope, "import")
