from .convert import handle_convert, _collect_sources, _convert_single_file, _print_batch_summary
from .inspect import handle_inspect

__all__ = [
  "_collect_sources",
  "_convert_single_file",
  "_print_batch_summary",
  "handle_convert",
  "handle_inspect",
]
