"""
Tests for RuntimeConfig loading and validation.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from include_bytes.config import BuildContext, RuntimeConfig
from include_bytes.enums import MatchingMode


def _write_toml(directory: Path, body: str) -> None:
  (directory / "pyproject.toml").write_text(body, encoding="utf-8")


def test_defaults():
  config = RuntimeConfig()
  assert config.cwd is None
  assert config.matching == MatchingMode.CALL_SITE
  assert config.encoding == "utf-8"


def test_encoding_normalized():
  assert RuntimeConfig(encoding="LATIN-1").encoding == "iso8859-1"


def test_unknown_encoding_rejected():
  with pytest.raises(ValidationError):
    RuntimeConfig(encoding="no-such-codec")


def test_unknown_matching_rejected():
  with pytest.raises(ValidationError):
    RuntimeConfig(matching="greedy")


def test_build_context(tmp_path):
  ctx = RuntimeConfig(cwd=tmp_path, filename="main.py").build_context()
  assert ctx == BuildContext(cwd=str(tmp_path), filename="main.py")


def test_build_context_is_frozen():
  ctx = BuildContext(cwd="/x")
  with pytest.raises(ValidationError):
    ctx.cwd = "/y"


def test_load_from_toml(tmp_path):
  _write_toml(
    tmp_path,
    '[tool.include_bytes]\ncwd = "assets"\nmatching = "sequential"\nencoding = "latin-1"\n',
  )
  nested = tmp_path / "src" / "pkg"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)

  assert config.cwd == (tmp_path / "assets").resolve()
  assert config.matching == MatchingMode.SEQUENTIAL
  assert config.encoding == "iso8859-1"


def test_explicit_arguments_override_toml(tmp_path):
  _write_toml(tmp_path, '[tool.include_bytes]\ncwd = "assets"\nmatching = "sequential"\n')

  config = RuntimeConfig.load(cwd=Path("/explicit"), matching="call_site", search_path=tmp_path)

  assert config.cwd == Path("/explicit")
  assert config.matching == MatchingMode.CALL_SITE


def test_toml_without_section(tmp_path):
  _write_toml(tmp_path, '[project]\nname = "demo"\n')
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.cwd is None
  assert config.matching == MatchingMode.CALL_SITE


def test_invalid_toml_ignored(tmp_path):
  _write_toml(tmp_path, "[tool.include_bytes\n")
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.cwd is None
