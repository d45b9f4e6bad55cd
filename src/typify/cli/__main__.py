"""
Main Entry Point for the typify CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `typify.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from typify import __version__
from typify.cli import commands
from typify.enums import Dialect


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="typify: JavaScript to TypeScript converter")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)
  dialects = [d.value for d in Dialect]

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Convert a JavaScript file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, default=None, help="Output destination (file or dir)")
  cmd_conv.add_argument(
    "--stdout",
    action="store_true",
    help="Print the converted code instead of writing files (single file only)",
  )
  cmd_conv.add_argument("--dialect", choices=dialects, default=None, help="Input grammar (default: from toml)")
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace (phases, verdicts) to a JSON file."
  )

  # --- Command: INSPECT ---
  cmd_insp = subparsers.add_parser("inspect", help="Show the inferred parameter types without writing")
  cmd_insp.add_argument("path", type=Path, help="Input source file or directory")
  cmd_insp.add_argument("--dialect", choices=dialects, default=None, help="Input grammar (default: from toml)")
  cmd_insp.add_argument("--json", action="store_true", help="Output the report as JSON")

  args = parser.parse_args(argv)

  if args.command == "convert":
    return commands.handle_convert(args.path, args.out, args.stdout, args.dialect, args.json_trace)

  elif args.command == "inspect":
    return commands.handle_inspect(args.path, args.dialect, args.json)

  return 0


if __name__ == "__main__":
  sys.exit(main())
