"""
Conversion Error Taxonomy.

Every failure that aborts a file conversion derives from ``ConversionError``.
Rule mismatches inside the rewriters are not errors: an unrecognized node shape
simply leaves the node untouched.
"""

from typing import Optional


class ConversionError(Exception):
  """
  Base class for failures that abort a whole conversion.
  """


class ParseFailure(ConversionError):
  """
  Raised when the source text is not syntactically valid.

  Attributes:
      line (Optional[int]): 1-based line of the first syntax error.
      column (Optional[int]): 1-based column of the first syntax error.
  """

  def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
    self.line = line
    self.column = column
    if line is not None:
      message = f"{message} (line {line}, column {column})"
    super().__init__(message)


class PrintFailure(ConversionError):
  """
  Raised when the collected edits cannot be applied to the source text.
  """
