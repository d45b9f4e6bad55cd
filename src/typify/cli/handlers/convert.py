"""
Convert Command Handler.

This module implements the logic for the `typify convert` command.
It orchestrates:
1. Configuration loading (``[tool.typify]`` plus CLI overrides).
2. Source discovery (single file or directory walk).
3. Conversion via the Engine.
4. Output writing, trace dumping and the batch summary.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError
from rich.table import Table

from typify.config import RuntimeConfig
from typify.core.conversion_result import ConversionResult
from typify.core.engine import ConversionEngine
from typify.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

SOURCE_PATTERNS = ("*.js", "*.jsx", "*.mjs", "*.cjs")
SKIPPED_DIRS = {"node_modules", ".git"}


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  to_stdout: bool = False,
  dialect: Optional[str] = None,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to convert.
      output_path: Destination file (single input) or directory (batch). When
          omitted, outputs are written next to their sources.
      to_stdout: Print the result of a single file instead of writing it.
      dialect: Override for the input grammar ('jsx' or 'tsx').
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      dialect=dialect,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValidationError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  engine = ConversionEngine(config)

  if input_path.is_file():
    if to_stdout:
      dest = None
    elif output_path is not None and output_path.is_dir():
      dest = output_path / config.output_path_for(input_path).name
    else:
      dest = output_path or config.output_path_for(input_path)

    result = _convert_single_file(input_path, dest, engine, json_trace_path)
    return 0 if result.success else 1

  if to_stdout:
    log_error("--stdout only applies to a single input file.")
    return 1

  sources = _collect_sources(input_path)
  if not sources:
    log_warning(f"No JavaScript files found in {input_path}")
    return 0

  log_info(f"Processing {len(sources)} files from {input_path}...")
  batch_results: Dict[str, ConversionResult] = {}

  for src_file in sources:
    rel_path = src_file.relative_to(input_path)
    if output_path is not None:
      dest_file = config.output_path_for(output_path / rel_path)
    else:
      dest_file = config.output_path_for(src_file)

    batch_trace = None
    if json_trace_path:
      # One trace per file, written beside its output.
      batch_trace = dest_file.with_suffix(".trace.json")

    batch_results[str(rel_path)] = _convert_single_file(src_file, dest_file, engine, batch_trace)

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _collect_sources(root: Path) -> List[Path]:
  """
  Lists the JavaScript files below a directory, in a stable order.

  Args:
      root: Directory to walk.

  Returns:
      List[Path]: Matching files outside dependency and VCS folders.
  """
  found = set()
  for pattern in SOURCE_PATTERNS:
    for path in root.rglob(pattern):
      if not path.is_file():
        continue
      if SKIPPED_DIRS.intersection(path.relative_to(root).parts):
        continue
      found.add(path)
  return sorted(found)


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: ConversionEngine,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Converts one file and writes (or prints) the result.

  Args:
      input_path: Source file path.
      output_path: Destination file path. None prints to stdout.
      engine: The configured engine.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run(code)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {e}")

  if not result.success:
    log_error(f"Failed to convert [path]{input_path}[/path]: {'; '.join(result.errors)}")
    return result

  if output_path is None:
    print(result.code)
    return result

  try:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(result.code)
  except OSError as e:
    log_error(f"Failed to write {output_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)], stage=result.stage)

  log_success(f"Converted: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Reports a directory run: one line when every file converted, else a table of failures.

  Args:
      results: Relative filename -> conversion result, in processing order.
  """
  failed = {name: res for name, res in results.items() if not res.success}
  converted = len(results) - len(failed)
  typed = sum(len(res.parameters) for res in results.values() if res.success)

  if not failed:
    log_success(f"Batch Complete: {converted}/{len(results)} files converted, {typed} parameters typed.")
    return

  table = Table(title="Conversion Report")
  table.add_column("File", style="cyan")
  table.add_column("Reached", justify="center")
  table.add_column("Error", style="red")

  for filename, res in failed.items():
    table.add_row(filename, res.stage.value, "; ".join(res.errors) or "Unknown Error")

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {converted} converted, {len(failed)} failed.")
