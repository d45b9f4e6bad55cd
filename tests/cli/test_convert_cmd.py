"""
Tests for the `convert` command handler.

Verifies that:
1. A single file is written next to its source with the configured suffix.
2. `--stdout` prints instead of writing.
3. Directories are walked and mirrored under `--out`.
4. Failures produce exit code 1 and no output file.
"""

import json

from rich.console import Console

from typify.cli.__main__ import main
from typify.cli.handlers.convert import _collect_sources
from typify.utils.console import set_console


def test_single_file(tmp_path):
  src = tmp_path / "app.js"
  src.write_text("var x = 1;\nfunction f(name) { return 'hi ' + name; }\n", encoding="utf-8")

  assert main(["convert", str(src)]) == 0

  out = tmp_path / "app.ts"
  assert out.read_text(encoding="utf-8") == "const x = 1;\nfunction f(name: string) { return 'hi ' + name; }\n"
  # Source untouched
  assert src.read_text(encoding="utf-8").startswith("var x")


def test_single_file_explicit_out(tmp_path):
  src = tmp_path / "app.js"
  src.write_text("var x = 1;", encoding="utf-8")
  dest = tmp_path / "build" / "server.ts"

  assert main(["convert", str(src), "--out", str(dest)]) == 0
  assert dest.read_text(encoding="utf-8") == "const x = 1;"


def test_stdout(tmp_path, capsys):
  src = tmp_path / "app.js"
  src.write_text("var x = 1;", encoding="utf-8")

  assert main(["convert", str(src), "--stdout"]) == 0

  assert capsys.readouterr().out == "const x = 1;\n"
  assert not (tmp_path / "app.ts").exists()


def test_toml_suffix_used(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.typify]\noutput_suffix = ".mts"\n', encoding="utf-8")
  src = tmp_path / "lib.js"
  src.write_text("var y = 2;", encoding="utf-8")

  assert main(["convert", str(src)]) == 0
  assert (tmp_path / "lib.mts").exists()


def test_parse_error_exit_code(tmp_path):
  buffer = Console(record=True, width=200)
  set_console(buffer)
  src = tmp_path / "broken.js"
  src.write_text("function (", encoding="utf-8")

  assert main(["convert", str(src)]) == 1

  assert not (tmp_path / "broken.ts").exists()
  assert "ParseFailure" in buffer.export_text()


def test_missing_input(tmp_path):
  assert main(["convert", str(tmp_path / "nope.js")]) == 1


def test_directory_mirrored(tmp_path):
  """
  Scenario: Nested sources, a dependency folder and a non-JS file.
  Expect: Only project JS files converted, structure mirrored under --out.
  """
  root = tmp_path / "proj"
  (root / "routes").mkdir(parents=True)
  (root / "node_modules" / "dep").mkdir(parents=True)
  (root / "index.js").write_text("var a = require('./routes/users');", encoding="utf-8")
  (root / "routes" / "users.cjs").write_text("function list(db) {}", encoding="utf-8")
  (root / "node_modules" / "dep" / "index.js").write_text("var z = 1;", encoding="utf-8")
  (root / "README.md").write_text("# proj", encoding="utf-8")
  out = tmp_path / "dist"

  assert main(["convert", str(root), "--out", str(out)]) == 0

  assert (out / "index.ts").read_text(encoding="utf-8") == "import a from './routes/users';\n\n"
  assert (out / "routes" / "users.ts").read_text(encoding="utf-8") == (
    'import { Db, Collection, Document } from "mongodb";\n\nfunction list(db: Db) {}'
  )
  assert not (out / "node_modules").exists()


def test_directory_in_place_with_failure(tmp_path):
  buffer = Console(record=True, width=200)
  set_console(buffer)
  (tmp_path / "good.js").write_text("var a = 1;", encoding="utf-8")
  (tmp_path / "bad.js").write_text("var = ;", encoding="utf-8")

  assert main(["convert", str(tmp_path)]) == 1

  assert (tmp_path / "good.ts").read_text(encoding="utf-8") == "const a = 1;"
  assert not (tmp_path / "bad.ts").exists()
  assert "Conversion Report" in buffer.export_text()


def test_directory_rejects_stdout(tmp_path):
  assert main(["convert", str(tmp_path), "--stdout"]) == 1


def test_json_trace(tmp_path):
  src = tmp_path / "app.js"
  src.write_text("function f(x) {}", encoding="utf-8")
  trace = tmp_path / "trace" / "app.json"

  assert main(["convert", str(src), "--json-trace", str(trace)]) == 0

  events = json.loads(trace.read_text(encoding="utf-8"))
  assert any(e["type"] == "type_verdict" for e in events)


def test_collect_sources_sorted(tmp_path):
  for name in ("b.mjs", "a.js", "c.jsx", "d.ts"):
    (tmp_path / name).write_text("", encoding="utf-8")
  assert [p.name for p in _collect_sources(tmp_path)] == ["a.js", "b.mjs", "c.jsx"]
