"""
Tests for Config Persistence (TOML).

Verifies that:
1. RuntimeConfig.load() picks up [tool.typify] from pyproject.toml.
2. CLI arguments override TOML settings.
3. File traversal finds toml in parent directories.
4. Invalid values are rejected by validation.
"""

import pytest
from pydantic import ValidationError

from typify.config import RuntimeConfig
from typify.enums import Bundle, Dialect


@pytest.fixture
def toml_file(tmp_path):
  """Creates a dummy pyproject.toml in the temp dir."""
  fpath = tmp_path / "pyproject.toml"
  content = """
[project]
name = "web-app"

[tool.typify]
dialect = "tsx"
output_suffix = ".tsx"
rewrite_var = false
disabled_bundles = ["fetch", "jwt"]
unknown_key = 1
"""
  fpath.write_text(content, encoding="utf-8")
  return fpath


def test_defaults():
  config = RuntimeConfig()
  assert config.dialect == Dialect.JSX
  assert config.output_suffix == ".ts"
  assert config.annotate_parameters and config.rewrite_requires and config.rewrite_var
  assert config.disabled_bundles == []


def test_load_defaults_from_toml(tmp_path, toml_file):
  """
  Scenario: User runs CLI without args inside a configured project.
  Expect: Config matches TOML values, unknown keys are ignored.
  """
  config = RuntimeConfig.load(search_path=tmp_path)

  assert config.dialect == Dialect.TSX
  assert config.output_suffix == ".tsx"
  assert config.rewrite_var is False
  assert config.rewrite_requires is True
  assert config.disabled_bundles == [Bundle.FETCH, Bundle.JWT]


def test_cli_overrides_toml(tmp_path, toml_file):
  config = RuntimeConfig.load(dialect="jsx", rewrite_var=True, search_path=tmp_path)

  assert config.dialect == Dialect.JSX  # CLI wins
  assert config.rewrite_var is True
  assert config.output_suffix == ".tsx"  # TOML fallback


def test_parent_directory_search(tmp_path, toml_file):
  nested = tmp_path / "src" / "routes"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)
  assert config.dialect == Dialect.TSX


def test_no_toml(tmp_path):
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.dialect == Dialect.JSX


def test_malformed_toml_ignored(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.typify\n", encoding="utf-8")
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.output_suffix == ".ts"


def test_dialect_normalized():
  assert RuntimeConfig(dialect=" TSX ").dialect == Dialect.TSX


@pytest.mark.parametrize(
  "settings",
  [
    {"dialect": "coffee"},
    {"output_suffix": "ts"},
    {"disabled_bundles": ["jquery"]},
  ],
)
def test_invalid_values(settings):
  with pytest.raises(ValidationError):
    RuntimeConfig(**settings)


def test_output_path_for(tmp_path):
  config = RuntimeConfig()
  assert config.output_path_for(tmp_path / "app.js") == tmp_path / "app.ts"
  assert config.output_path_for(tmp_path / "lib.mjs") == tmp_path / "lib.ts"
