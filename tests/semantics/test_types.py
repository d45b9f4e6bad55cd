"""
Tests for Type Verdicts and Import Schemas.
"""

import pytest

from typify.semantics.schema import ImportRequirement, ImportSpecifier
from typify.semantics.types import (
  ANY,
  ANY_ARRAY,
  BOOLEAN,
  ERROR_OR_NULL,
  NUMBER,
  STRING,
  STRING_RECORD,
  NamedReference,
  Primitive,
)


def test_render():
  assert ANY.render() == "any"
  assert STRING.render() == "string"
  assert NUMBER.render() == "number"
  assert BOOLEAN.render() == "boolean"
  assert ERROR_OR_NULL.render() == "Error | null"
  assert ANY_ARRAY.render() == "any[]"
  assert STRING_RECORD.render() == "Record<string, any>"
  assert NamedReference("Request").render() == "Request"
  assert str(NamedReference("Model", ANY)) == "Model<any>"


def test_primitive_is_closed():
  with pytest.raises(ValueError):
    Primitive("bigint")


def test_verdicts_are_values():
  assert NamedReference("Socket") == NamedReference("Socket")
  assert Primitive("string") == STRING


def test_specifiers_deduplicated_by_local_name():
  req = ImportRequirement(
    source="mod",
    specifiers=[
      ImportSpecifier(imported="a", local="a"),
      ImportSpecifier(imported="b", local="a"),
      ImportSpecifier(imported="c", local="d"),
    ],
  )
  assert req.binding_names == ["a", "d"]
  assert req.specifiers[1].is_aliased


def test_default_and_named_constructors():
  default = ImportRequirement.default("fs", "fs", quote="'")
  assert default.is_default
  assert default.quote == "'"

  named = ImportRequirement.named(["Request", "Response"], "express")
  assert not named.is_default
  assert [s.local for s in named.specifiers] == ["Request", "Response"]
