"""
Inspect Command Handler.

Runs the conversion pipeline without writing anything and reports, per
parameter, the type that would be attached and which stage of the inference
chain decided it.
"""

import json
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from typify.cli.handlers.convert import _collect_sources
from typify.config import RuntimeConfig
from typify.core.conversion_result import ParameterReport
from typify.core.engine import ConversionEngine
from typify.enums import VerdictSource
from typify.utils.console import TYPIFY_THEME, console, log_error, log_info, log_warning

_SOURCE_STYLES = {
  VerdictSource.USAGE: "green",
  VerdictSource.CATALOG: "cyan",
  VerdictSource.FALLBACK: "yellow",
  VerdictSource.ANNOTATED: "dim",
}

# JSON reports own stdout; failures go to stderr instead.
_stderr = Console(stderr=True, theme=TYPIFY_THEME)


def _report_error(message: str, json_mode: bool) -> None:
  if json_mode:
    _stderr.print(f"❌ {message}", style="error", markup=False, highlight=False)
  else:
    log_error(message)


def handle_inspect(input_path: Path, dialect: Optional[str] = None, json_mode: bool = False) -> int:
  """
  Handles the 'inspect' command execution.

  Args:
      input_path: File or directory to analyze.
      dialect: Override for the input grammar ('jsx' or 'tsx').
      json_mode: If True, output JSON to stdout and suppress Rich output.

  Returns:
      int: Exit code (0 if every file parsed, 1 otherwise).
  """
  if not input_path.exists():
    _report_error(f"Input not found: {input_path}", json_mode)
    return 1

  try:
    config = RuntimeConfig.load(
      dialect=dialect,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValidationError as e:
    _report_error(f"Invalid configuration: {e}", json_mode)
    return 1

  if input_path.is_file():
    files = [input_path]
    root = input_path.parent
  else:
    files = _collect_sources(input_path)
    root = input_path

  if not files:
    if not json_mode:
      log_warning(f"No JavaScript files found in {input_path}")
    return 0

  if not json_mode:
    log_info(f"Inspecting {len(files)} file(s)...")

  engine = ConversionEngine(config)
  rows: List[Tuple[str, ParameterReport]] = []
  failed = False

  for path in files:
    rel = str(path.relative_to(root))
    try:
      code = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
      _report_error(f"Failed to read {path}: {e}", json_mode)
      failed = True
      continue

    result = engine.run(code)
    if not result.success:
      _report_error(f"{rel}: {'; '.join(result.errors)}", json_mode)
      failed = True
      continue
    rows.extend((rel, report) for report in result.parameters)

  if json_mode:
    output_list = [{"file": rel, **report.model_dump(mode="json")} for rel, report in rows]
    print(json.dumps(output_list, indent=2))
  else:
    _print_report(rows)

  return 1 if failed else 0


def _print_report(rows: List[Tuple[str, ParameterReport]]) -> None:
  if not rows:
    console.print("[dim]No parameters found.[/dim]")
    return

  table = Table(title="Parameter Types")
  table.add_column("File", style="cyan")
  table.add_column("Line", justify="right")
  table.add_column("Function")
  table.add_column("Parameter", style="bold")
  table.add_column("Type", style="bold green")
  table.add_column("Source", justify="center")

  for rel, report in rows:
    style = _SOURCE_STYLES.get(report.source, "white")
    table.add_row(
      rel,
      str(report.line),
      report.function,
      report.name,
      report.annotation,
      f"[{style}]{report.source.value}[/{style}]",
    )

  console.print(table)

  by_source = {s: sum(1 for _, r in rows if r.source == s) for s in VerdictSource}
  summary = ", ".join(f"{count} {source.value}" for source, count in by_source.items() if count)
  console.print(f"\n[bold]Summary:[/bold] {len(rows)} parameters ({summary}).")
