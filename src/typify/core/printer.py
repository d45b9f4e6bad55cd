"""
Source Splicing Printer.

Produces output text from the original source plus a list of byte-range edits.
Code that no edit touches is copied verbatim, so comments, formatting and the
relative placement of lines are preserved without a code generator.

It also renders synthesized ``import`` statements.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from typify.core.errors import PrintFailure
from typify.semantics.schema import ImportRequirement


@dataclass(frozen=True)
class Edit:
  """
  A replacement of ``source[start:end]`` by ``text``.

  Inserts have ``start == end``; deletions have empty ``text``.
  """

  start: int
  end: int
  text: str = ""
  remove_line: bool = False
  """For deletions: also drop the line if nothing else remains on it."""

  @property
  def is_insert(self) -> bool:
    return self.start == self.end


def _is_blank(chunk: bytes) -> bool:
  return chunk.strip(b" \t\r") == b""


class SourcePrinter:
  """
  The Printer collaborator.
  """

  def __init__(self, source: bytes):
    """
    Args:
        source (bytes): UTF-8 source the edit offsets refer to.
    """
    self.source = source

  def _line_bounds(self, start: int, end: int) -> Tuple[int, int]:
    src = self.source
    line_start = src.rfind(b"\n", 0, start) + 1
    line_end = src.find(b"\n", end)
    if line_end == -1:
      line_end = len(src)
    return line_start, line_end

  def _expand(self, edits: Iterable[Edit]) -> List[Edit]:
    """
    Widens statement deletions to their whole line when nothing else remains on it.

    Deletions that share a line are judged together, so a line holding only
    several removed statements disappears along with their separators.
    """
    src = self.source
    result: List[Edit] = []
    groups: List[Tuple[int, int, List[Edit]]] = []
    for edit in sorted(edits, key=lambda e: (e.start, e.end)):
      if not edit.remove_line:
        result.append(edit)
        continue
      line_start, line_end = self._line_bounds(edit.start, edit.end)
      if groups and line_start <= groups[-1][1]:
        first, last, members = groups[-1]
        groups[-1] = (first, max(last, line_end), members + [edit])
      else:
        groups.append((line_start, line_end, [edit]))

    for line_start, line_end, members in groups:
      leftover = []
      cursor = line_start
      for edit in members:
        leftover.append(src[cursor : max(cursor, edit.start)])
        cursor = max(cursor, edit.end)
      leftover.append(src[cursor:line_end])
      if not _is_blank(b"".join(leftover)):
        result.extend(members)
        continue
      if line_end < len(src):
        line_end += 1
      result.append(Edit(line_start, line_end, "".join(e.text for e in members)))
    return result

  def _normalize(self, edits: Iterable[Edit]) -> List[Edit]:
    """
    Orders edits and drops those swallowed by a deletion.

    Raises:
        PrintFailure: If two edits partially overlap.
    """
    ordered = sorted(self._expand(edits), key=lambda e: (e.start, e.end))
    result: List[Edit] = []
    for edit in ordered:
      if result:
        last = result[-1]
        if edit.start < last.end:
          if edit.end <= last.end and not last.text:
            continue
          raise PrintFailure(f"Overlapping edits at bytes {last.start}-{last.end} and {edit.start}-{edit.end}")
      result.append(edit)
    return result

  def print(self, edits: Iterable[Edit]) -> str:
    """
    Applies edits to the source.

    Args:
        edits: Edits with offsets into the original source.

    Returns:
        str: The rewritten text.
    """
    pieces: List[bytes] = []
    cursor = 0
    for edit in self._normalize(edits):
      pieces.append(self.source[cursor : edit.start])
      pieces.append(edit.text.encode("utf-8"))
      cursor = edit.end
    pieces.append(self.source[cursor:])
    return b"".join(pieces).decode("utf-8")

  @staticmethod
  def print_import(requirement: ImportRequirement) -> str:
    """
    Renders an import statement.

    Args:
        requirement (ImportRequirement): The import to print.

    Returns:
        str: e.g. ``import { a, b as c } from "mod";``
    """
    clauses = []
    if requirement.default_binding:
      clauses.append(requirement.default_binding)
    if requirement.specifiers or not clauses:
      names = [f"{s.imported} as {s.local}" if s.is_aliased else s.local for s in requirement.specifiers]
      clauses.append("{ " + ", ".join(names) + " }" if names else "{}")
    q = requirement.quote
    return f"import {', '.join(clauses)} from {q}{requirement.source}{q};"
