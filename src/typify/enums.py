"""
Enumerations for typify.

This module defines the standard enumerations shared by the analysis passes,
the rewriters and the pipeline coordinator.
"""

from enum import Enum


class Dialect(str, Enum):
  """
  Grammar used to parse the input source.

  ``JSX`` is plain JavaScript with component syntax (the default input).
  ``TSX`` accepts TypeScript annotations as well, so partially typed files
  can be processed without losing existing annotations.
  """

  JSX = "jsx"
  TSX = "tsx"


class ReferenceKind(str, Enum):
  """Whether an identifier occurrence reads or (re)assigns its binding."""

  READ = "read"
  WRITE = "write"


class Bundle(str, Enum):
  """
  Named groups of external type declarations emitted as one import statement.
  """

  EXPRESS = "express"
  MONGODB = "mongodb"
  MONGOOSE = "mongoose"
  SQL = "sql"
  SOCKETIO = "socketio"
  JWT = "jwt"
  AXIOS = "axios"
  FETCH = "fetch"


class ConversionStage(str, Enum):
  """
  States of a single file conversion.

  A conversion only moves forward: Parsed -> Visited -> ImportsAssembled -> Printed.
  """

  PENDING = "pending"
  PARSED = "parsed"
  VISITED = "visited"
  IMPORTS_ASSEMBLED = "imports_assembled"
  PRINTED = "printed"


class VerdictSource(str, Enum):
  """Which stage of the inference chain produced a parameter annotation."""

  USAGE = "usage"
  CATALOG = "catalog"
  FALLBACK = "fallback"
  ANNOTATED = "annotated"
