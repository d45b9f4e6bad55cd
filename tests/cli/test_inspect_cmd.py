"""
Tests for the `inspect` command handler.
"""

import json

from rich.console import Console

from typify.cli.__main__ import main
from typify.utils.console import set_console


def test_inspect_json(tmp_path, capsys):
  src = tmp_path / "app.js"
  src.write_text("function f(name, pool, x) { return 'a' + name; }", encoding="utf-8")

  assert main(["inspect", str(src), "--json"]) == 0

  report = json.loads(capsys.readouterr().out)
  assert [(r["name"], r["annotation"], r["source"]) for r in report] == [
    ("name", "string", "usage"),
    ("pool", "Pool", "catalog"),
    ("x", "any", "fallback"),
  ]
  assert report[0]["file"] == "app.js"
  assert report[0]["function"] == "f"
  # Nothing written
  assert not (tmp_path / "app.ts").exists()


def test_inspect_table(tmp_path):
  buffer = Console(record=True, width=200)
  set_console(buffer)
  (tmp_path / "a.js").write_text("const h = (req) => req.body;", encoding="utf-8")

  assert main(["inspect", str(tmp_path)]) == 0

  text = buffer.export_text()
  assert "Parameter Types" in text
  assert "Request" in text
  assert "1 parameters" in text


def test_inspect_tsx_reports_annotated(tmp_path, capsys):
  src = tmp_path / "typed.tsx"
  src.write_text("function f(a: number) {}", encoding="utf-8")

  assert main(["inspect", str(src), "--dialect", "tsx", "--json"]) == 0

  report = json.loads(capsys.readouterr().out)
  assert report == [{"file": "typed.tsx", "function": "f", "name": "a", "annotation": "number", "source": "annotated", "line": 1}]


def test_inspect_parse_error(tmp_path, capsys):
  src = tmp_path / "bad.js"
  src.write_text("function (", encoding="utf-8")
  assert main(["inspect", str(src), "--json"]) == 1


def test_inspect_json_keeps_failures_off_stdout(tmp_path, capsys):
  """
  Scenario: One of two files fails to parse in JSON mode.
  Expect: Stdout holds only the JSON report; the failure is on stderr.
  """
  buffer = Console(record=True, width=200)
  set_console(buffer)
  (tmp_path / "bad.js").write_text("function (", encoding="utf-8")
  (tmp_path / "good.js").write_text("function f(x) {}", encoding="utf-8")

  assert main(["inspect", str(tmp_path), "--json"]) == 1

  captured = capsys.readouterr()
  report = json.loads(captured.out)
  assert [r["file"] for r in report] == ["good.js"]
  assert "bad.js" in captured.err
  assert "bad.js" not in buffer.export_text()
