"""
Runtime Configuration Store.

Settings are resolved in three layers: model defaults, the ``[tool.typify]``
table of the nearest ``pyproject.toml``, then explicit (CLI) overrides.
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from typify.enums import Bundle, Dialect

TOOL_SECTION = "typify"


class RuntimeConfig(BaseModel):
  """
  Configuration container for the conversion engine.
  """

  dialect: Dialect = Field(Dialect.JSX, description="Input grammar: 'jsx' (JavaScript) or 'tsx'.")
  output_suffix: str = Field(".ts", description="Extension of the file written next to each input.")
  annotate_parameters: bool = Field(True, description="Attach inferred types to untyped parameters.")
  rewrite_requires: bool = Field(True, description="Turn require() declarations into import statements.")
  rewrite_var: bool = Field(True, description="Turn var declarations into const/let.")
  disabled_bundles: List[Bundle] = Field(default_factory=list, description="Bundles never emitted as imports.")

  @field_validator("dialect", mode="before")
  @classmethod
  def validate_dialect(cls, v: Any) -> Any:
    """
    Normalizes the dialect key.

    Args:
        v: Raw dialect value.

    Returns:
        The lower-cased, stripped key (or the enum unchanged).

    Raises:
        ValueError: If the dialect is unknown.
    """
    if isinstance(v, str):
      v_clean = v.lower().strip()
      known = [d.value for d in Dialect]
      if v_clean not in known:
        raise ValueError(f"Unknown dialect: '{v_clean}'. Supported dialects: {known}")
      return v_clean
    return v

  @field_validator("output_suffix")
  @classmethod
  def validate_suffix(cls, v: str) -> str:
    """
    Ensures the suffix is a file extension.

    Args:
        v (str): Raw suffix.

    Returns:
        str: The suffix.

    Raises:
        ValueError: If the suffix does not start with a dot.
    """
    v = v.strip()
    if not v.startswith(".") or len(v) < 2:
      raise ValueError(f"Output suffix must look like '.ts', got '{v}'")
    return v

  def output_path_for(self, source_path: Path) -> Path:
    """
    Computes the sibling output path of an input file.

    Args:
        source_path (Path): Input file, e.g. ``src/app.js``.

    Returns:
        Path: e.g. ``src/app.ts``.
    """
    return source_path.with_suffix(self.output_suffix)

  @classmethod
  def load(
    cls,
    dialect: Optional[str] = None,
    output_suffix: Optional[str] = None,
    annotate_parameters: Optional[bool] = None,
    rewrite_requires: Optional[bool] = None,
    rewrite_var: Optional[bool] = None,
    disabled_bundles: Optional[List[str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        dialect (Optional[str]): Override for the input dialect.
        output_suffix (Optional[str]): Override for the output extension.
        annotate_parameters (Optional[bool]): Override for parameter annotation.
        rewrite_requires (Optional[bool]): Override for require() rewriting.
        rewrite_var (Optional[bool]): Override for var rewriting.
        disabled_bundles (Optional[List[str]]): Override for disabled bundles.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    overrides = {
      "dialect": dialect,
      "output_suffix": output_suffix,
      "annotate_parameters": annotate_parameters,
      "rewrite_requires": rewrite_requires,
      "rewrite_var": rewrite_var,
      "disabled_bundles": disabled_bundles,
    }

    values: Dict[str, Any] = {k: v for k, v in toml_config.items() if k in cls.model_fields}
    for key, value in overrides.items():
      if value is not None:
        values[key] = value

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOOL_SECTION, {}), parent

  return {}, None
