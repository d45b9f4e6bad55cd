"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Engine helpers shared by the rewriter and end-to-end tests.
- Console isolation so log capture in one test does not leak into another.
"""

import sys
from pathlib import Path
from typing import Callable

import pytest

# Add src to path so we can import 'typify' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from typify.config import RuntimeConfig
from typify.core.engine import ConversionEngine
from typify.core.parser import JsParser, SyntaxTree
from typify.utils.console import reset_console


@pytest.fixture(autouse=True)
def isolated_console():
  """Ensures logging goes back to a fresh stdout console after every test."""
  yield
  reset_console()


@pytest.fixture
def convert() -> Callable[..., str]:
  """
  Returns a helper running the full pipeline and asserting success.

  Usage: ``convert(code, rewrite_var=False)``; keyword arguments build the RuntimeConfig.
  """

  def _convert(code: str, **settings) -> str:
    engine = ConversionEngine(RuntimeConfig(**settings))
    result = engine.run(code)
    assert result.success, result.errors
    return result.code

  return _convert


@pytest.fixture
def parse() -> Callable[..., SyntaxTree]:
  """Returns a helper parsing code with the given dialect (default jsx)."""

  def _parse(code: str, dialect: str = "jsx") -> SyntaxTree:
    return JsParser(dialect).parse(code)

  return _parse

