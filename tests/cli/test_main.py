"""
Tests for CLI argument parsing and dispatch.

Verifies that:
1. Each subcommand reaches its handler with parsed arguments.
2. `--version` reports the package version.
3. A missing subcommand is an argparse error.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from typify import __version__
from typify.cli.__main__ import main


def test_convert_dispatch():
  with patch("typify.cli.commands.handle_convert", return_value=0) as mock_handle:
    code = main(["convert", "app.js", "--out", "dist", "--dialect", "tsx", "--json-trace", "t.json"])

  assert code == 0
  mock_handle.assert_called_once_with(Path("app.js"), Path("dist"), False, "tsx", Path("t.json"))


def test_convert_stdout_flag():
  with patch("typify.cli.commands.handle_convert", return_value=1) as mock_handle:
    code = main(["convert", "app.js", "--stdout"])

  assert code == 1
  mock_handle.assert_called_once_with(Path("app.js"), None, True, None, None)


def test_inspect_dispatch():
  with patch("typify.cli.commands.handle_inspect", return_value=0) as mock_handle:
    main(["inspect", "src", "--json"])

  mock_handle.assert_called_once_with(Path("src"), None, True)


def test_invalid_dialect_rejected():
  with pytest.raises(SystemExit) as exc:
    main(["convert", "app.js", "--dialect", "coffee"])
  assert exc.value.code == 2


def test_command_required():
  with pytest.raises(SystemExit) as exc:
    main([])
  assert exc.value.code == 2


def test_version(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert __version__ in capsys.readouterr().out
