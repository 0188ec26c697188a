"""
Runtime Configuration Store.

Holds the build context (working directory, file name) handed to the rewrite
pass, along with the pass options. Values are read from the
``[tool.include_bytes]`` table of the nearest ``pyproject.toml`` and overridden
by explicit arguments (usually from the CLI).
"""

import codecs
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from include_bytes.enums import MatchingMode

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

TOOL_SECTION = "include_bytes"


class BuildContext(BaseModel):
  """
  Metadata supplied by the host for one transform invocation.

  Immutable for the lifetime of the pass.
  """

  model_config = ConfigDict(frozen=True)

  cwd: Optional[str] = Field(None, description="Directory marker paths are resolved against.")
  filename: Optional[str] = Field(None, description="Name of the source unit. Informational only.")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the rewrite engine.
  """

  cwd: Optional[Path] = Field(None, description="Working directory used to resolve marker paths.")
  filename: Optional[str] = Field(None, description="Name of the file being transformed.")
  matching: MatchingMode = Field(
    MatchingMode.CALL_SITE,
    description="How a marker callee is paired with the call that gets rewritten.",
  )
  encoding: str = Field("utf-8", description="Codec used to decode included files.")

  @field_validator("encoding")
  @classmethod
  def validate_encoding(cls, v: str) -> str:
    """
    Ensures the codec is known to Python.

    Args:
        v (str): The codec name.

    Returns:
        str: The canonical codec name.

    Raises:
        ValueError: If the codec does not exist.
    """
    try:
      return codecs.lookup(v.strip()).name
    except LookupError:
      raise ValueError(f"Unknown encoding: '{v}'")

  def build_context(self) -> BuildContext:
    """
    Creates the immutable context handed to the rewriter.

    Returns:
        BuildContext: cwd and filename as plain strings.
    """
    return BuildContext(
      cwd=str(self.cwd) if self.cwd is not None else None,
      filename=self.filename,
    )

  @classmethod
  def load(
    cls,
    cwd: Optional[Path] = None,
    filename: Optional[str] = None,
    matching: Optional[str] = None,
    encoding: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    A relative ``cwd`` found in TOML is resolved against the directory holding
    the ``pyproject.toml``.

    Args:
        cwd (Optional[Path]): Override for the working directory.
        filename (Optional[str]): Name of the source unit.
        matching (Optional[str]): Override for the matching mode.
        encoding (Optional[str]): Override for the file codec.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    final_cwd = cwd
    if final_cwd is None and "cwd" in toml_config:
      final_cwd = Path(toml_config["cwd"])
      if toml_dir and not final_cwd.is_absolute():
        final_cwd = (toml_dir / final_cwd).resolve()

    final_matching = matching or toml_config.get("matching", MatchingMode.CALL_SITE)
    final_encoding = encoding or toml_config.get("encoding", "utf-8")

    return cls(
      cwd=final_cwd,
      filename=filename,
      matching=final_matching,
      encoding=final_encoding,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
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
