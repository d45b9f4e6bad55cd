"""
Pydantic Schemas for Import Synthesis.

This module defines the structures that describe an import statement to be
emitted in front of the rewritten program, and the fixed bundle definitions
that group related external type declarations.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typify.enums import Bundle


class ImportSpecifier(BaseModel):
  """
  A single named binding of an import statement.

  ``import { a }`` has ``imported == local == "a"``;
  ``import { b as c }`` has ``imported="b", local="c"``.
  """

  model_config = ConfigDict(frozen=True)

  imported: str = Field(..., description="Exported name in the source module.")
  local: str = Field(..., description="Name bound in the importing module.")

  @property
  def is_aliased(self) -> bool:
    """True if the local name differs from the exported name."""
    return self.imported != self.local


def _dedupe(specifiers: List[ImportSpecifier]) -> List[ImportSpecifier]:
  seen = set()
  result = []
  for spec in specifiers:
    if spec.local in seen:
      continue
    seen.add(spec.local)
    result.append(spec)
  return result


class ImportRequirement(BaseModel):
  """
  One import statement to be synthesized.

  Require-derived requirements are unique per ``source`` within a conversion.
  Bundle imports are tracked separately and are not merged with them.
  """

  source: str = Field(..., description="Module path as written in the source, e.g. 'express'.")
  default_binding: Optional[str] = Field(None, description="Local name of the default import.")
  specifiers: List[ImportSpecifier] = Field(default_factory=list, description="Ordered, unique named bindings.")
  quote: str = Field('"', description="Quote character used when printing the module path.")

  @field_validator("specifiers")
  @classmethod
  def unique_locals(cls, v: List[ImportSpecifier]) -> List[ImportSpecifier]:
    """
    Drops specifiers whose local name was already bound, keeping first occurrence.

    Args:
        v (List[ImportSpecifier]): Raw specifier list.

    Returns:
        List[ImportSpecifier]: De-duplicated list in original order.
    """
    return _dedupe(v)

  @property
  def is_default(self) -> bool:
    """True if the statement binds the module's default export."""
    return self.default_binding is not None

  @property
  def binding_names(self) -> List[str]:
    """Local names introduced by this import, default first."""
    names = [self.default_binding] if self.default_binding else []
    return names + [s.local for s in self.specifiers]

  @classmethod
  def default(cls, name: str, source: str, quote: str = '"') -> "ImportRequirement":
    """
    Builds a default-style import (`import name from "source"`).

    Args:
        name (str): Local binding name.
        source (str): Module path.
        quote (str): Quote character to print the path with.

    Returns:
        ImportRequirement: The requirement.
    """
    return cls(source=source, default_binding=name, quote=quote)

  @classmethod
  def named(cls, names: List[str], source: str, quote: str = '"') -> "ImportRequirement":
    """
    Builds a named import where every binding keeps its exported name.

    Args:
        names (List[str]): Exported names.
        source (str): Module path.
        quote (str): Quote character to print the path with.

    Returns:
        ImportRequirement: The requirement.
    """
    return cls(source=source, specifiers=[ImportSpecifier(imported=n, local=n) for n in names], quote=quote)


class BundleSpec(BaseModel):
  """
  A bundle of type declarations imported together from one module.
  """

  model_config = ConfigDict(frozen=True)

  key: Bundle
  source: str = Field(..., description="Module the declarations come from.")
  names: List[str] = Field(..., description="Named bindings imported for the bundle.")
  description: Optional[str] = Field(None, description="Human readable label.")

  def requirement(self) -> ImportRequirement:
    """
    Returns the import statement this bundle emits.

    Returns:
        ImportRequirement: Named import of all bundle declarations.
    """
    return ImportRequirement.named(list(self.names), self.source)
