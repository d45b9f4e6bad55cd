"""
CLI Command Handlers Facade.

Re-exports the handlers from `typify.cli.handlers` so the dispatcher and the
tests have one place to reach (and patch) them.
"""

from typify.cli.handlers.convert import (
  handle_convert,
  _collect_sources,
  _convert_single_file,
  _print_batch_summary,
)
from typify.cli.handlers.inspect import handle_inspect

__all__ = [
  "_collect_sources",
  "_convert_single_file",
  "_print_batch_summary",
  "handle_convert",
  "handle_inspect",
]
