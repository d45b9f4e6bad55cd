"""
Type Verdicts.

A verdict is the single annotation decision produced for one parameter. Verdicts
are small immutable values; each knows how to render itself as TypeScript
annotation text.

The closed set of verdicts is:

*   ``Primitive``: ``string``, ``number`` or ``boolean``.
*   ``ErrorOrNull``: ``Error | null`` (error-first callback convention).
*   ``ArrayOf``: ``any[]``.
*   ``NamedReference``: an external declaration such as ``Request`` or
    ``Model<any>``.
*   ``RecordOfStringToAny``: ``Record<string, any>``.
*   ``AnyType``: ``any``.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TypeVerdict:
  """
  Base class for inferred parameter types.
  """

  def render(self) -> str:
    """
    Renders the verdict as TypeScript type text.

    Returns:
        str: The annotation text without the leading colon.
    """
    raise NotImplementedError

  def __str__(self) -> str:
    return self.render()


@dataclass(frozen=True)
class AnyType(TypeVerdict):
  """The catch-all verdict when no evidence and no catalog entry applies."""

  def render(self) -> str:
    return "any"


@dataclass(frozen=True)
class Primitive(TypeVerdict):
  """
  A primitive keyword type.
  """

  name: str
  """One of ``string``, ``number`` or ``boolean``."""

  def __post_init__(self) -> None:
    if self.name not in ("string", "number", "boolean"):
      raise ValueError(f"Unsupported primitive: '{self.name}'")

  def render(self) -> str:
    return self.name


@dataclass(frozen=True)
class ErrorOrNull(TypeVerdict):
  """The ``Error | null`` union given to error-first callback parameters."""

  def render(self) -> str:
    return "Error | null"


@dataclass(frozen=True)
class ArrayOf(TypeVerdict):
  """
  An array type. Element inference is out of scope, so the element is ``any``.
  """

  element: TypeVerdict = AnyType()

  def render(self) -> str:
    return f"{self.element.render()}[]"


@dataclass(frozen=True)
class NamedReference(TypeVerdict):
  """
  A reference to a named (usually imported) declaration.
  """

  name: str
  """The referenced type name, e.g. ``Request``."""

  type_argument: Optional[TypeVerdict] = None
  """Optional single type argument, e.g. ``any`` in ``Model<any>``."""

  def render(self) -> str:
    if self.type_argument is None:
      return self.name
    return f"{self.name}<{self.type_argument.render()}>"


@dataclass(frozen=True)
class RecordOfStringToAny(TypeVerdict):
  """The generic object shape used for member-accessed parameters."""

  def render(self) -> str:
    return "Record<string, any>"


ANY = AnyType()
STRING = Primitive("string")
NUMBER = Primitive("number")
BOOLEAN = Primitive("boolean")
ERROR_OR_NULL = ErrorOrNull()
ANY_ARRAY = ArrayOf(ANY)
STRING_RECORD = RecordOfStringToAny()
