"""
Tests for the Usage Classifier.

Verifies that:
1. Each structural rule produces its verdict.
2. Binding rules (`err`, `next`) win over reference evidence.
3. The first reference that matches any rule decides.
4. No evidence yields None so the caller can fall back.
"""

import pytest

from typify.analysis.scopes import ScopeAnalyzer, function_kind
from typify.analysis.usage import array_map, classify, classify_references, string_concatenation
from typify.core.parser import JsParser, iter_nodes


def param(code, name):
  """Returns the binding of parameter ``name`` and its function's node type."""
  tree = JsParser().parse(code)
  info = ScopeAnalyzer(tree).analyze()
  for node in iter_nodes(tree.root):
    if node.type == "identifier" and tree.text(node) == name:
      binding = info.binding_at(node)
      if binding is not None and binding.kind == "param":
        return binding, function_kind(binding.scope.node)
  raise AssertionError(f"No parameter named {name}")


def verdict_for(code, name):
  binding, function_type = param(code, name)
  verdict = classify(binding, function_type)
  return verdict.render() if verdict is not None else None


@pytest.mark.parametrize(
  "code, name, expected",
  [
    ('function greet(name) { return "Hello " + name; }', "name", "string"),
    ("function f(a, b) { return a + b; }", "a", "string"),
    ("function calc(value) { return value * 2; }", "value", "number"),
    ("function calc(value) { return 10 - value; }", "value", "number"),
    ("function calc(value) { return value / (4); }", "value", "number"),
    ("function names(items) { return items.map(fn); }", "items", "any[]"),
    ("function names(items) { return (items).map(fn); }", "items", "any[]"),
    ("function f(flag) { if (flag) { run(); } }", "flag", "boolean"),
    ("const f = (ok) => ok ? 1 : 0;", "ok", "boolean"),
    ("function p(user) { return user.name; }", "user", "Record<string, any>"),
    ("function p(user) { return user['name']; }", "user", "Record<string, any>"),
    ("function h(req) { return req.body; }", "req", "Request"),
    ("function h(request) { return request.params; }", "request", "Request"),
    ("function h(res) { res.send(1); }", "res", "Response"),
    ("function h(response) { return response.status; }", "response", "Response"),
  ],
)
def test_reference_rules(code, name, expected):
  assert verdict_for(code, name) == expected


def test_multiplication_needs_numeric_literal():
  """
  Scenario: Both operands of `*` are parameters.
  Expect: No numeric evidence.
  """
  assert verdict_for("function f(a, b) { return a * b; }", "a") is None


def test_map_must_be_called():
  """A bare `.map` read is plain member access."""
  assert verdict_for("function f(list) { return list.map; }", "list") == "Record<string, any>"


def test_first_reference_decides():
  """
  Scenario: `s.length` appears before `s + ...`.
  Expect: Member access wins because it is the earlier reference.
  """
  assert verdict_for("function f(s) { log(s.length); return s + 1; }", "s") == "Record<string, any>"


def test_rules_tried_in_order_for_one_reference():
  """`items.map(...)` is both a member access and a map call; map is tried first."""
  binding, _ = param("function f(items) { return items.map(fn); }", "items")
  ref = binding.references[0]
  assert string_concatenation(ref, "items") is None
  assert array_map(ref, "items") is not None
  assert classify_references(binding.references, "items").render() == "any[]"


def test_err_in_declared_function_ignores_usage():
  assert verdict_for("function done(err) { return err.message; }", "err") == "Error | null"


def test_error_in_arrow_function():
  assert verdict_for("const cb = (error, data) => data;", "error") == "Error | null"


def test_err_in_function_expression_uses_usage():
  """
  Scenario: `err` in a function expression.
  Expect: The error rule is limited to declared/arrow functions.
  """
  assert verdict_for("const g = function (err) { return err.message; };", "err") == "Record<string, any>"


@pytest.mark.parametrize(
  "code",
  [
    "export default function (err) { return err.message; }",
    "export default function* (err) { yield err.message; }",
  ],
)
def test_err_in_anonymous_default_export(code):
  """
  Scenario: An anonymous default-exported function.
  Expect: It counts as a declaration, so the error rule applies.
  """
  assert verdict_for(code, "err") == "Error | null"


def test_default_export_kind_only_for_default():
  tree = JsParser().parse("export default function (a) {}\nconst f = function (b) {};")
  kinds = [function_kind(n) for n in iter_nodes(tree.root) if n.type in ("function_expression", "function")]
  assert kinds[0] == "function_declaration"
  assert kinds[1] in ("function_expression", "function")


def test_next_is_middleware_continuation():
  assert verdict_for("function mw(req, res, next) { next(); }", "next") == "NextFunction"
  assert verdict_for("const g = function (next) { return next + 1; };", "next") == "NextFunction"


def test_no_evidence():
  assert verdict_for("function f(x) { log(x); }", "x") is None
  assert verdict_for("function f(x) {}", "x") is None
