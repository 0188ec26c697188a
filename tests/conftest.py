"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A build directory fixture populated with files to include.
- Engine factory bound to that directory.
"""

import sys
import pytest
from pathlib import Path

# Add src to path so we can import 'include_bytes' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from include_bytes.config import RuntimeConfig
from include_bytes.core.engine import TransformEngine

GITIGNORE_CONTENT = "/target\n^target/\ntarget\n"


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
  """
  A working directory with a few files to include.

  Layout:
      .gitignore       -> '/target\\n^target/\\ntarget\\n'
      a.txt            -> 'A'
      b.txt            -> 'B'
      sub/nested.txt   -> 'nested\\n'
  """
  (tmp_path / ".gitignore").write_text(GITIGNORE_CONTENT, encoding="utf-8")
  (tmp_path / "a.txt").write_text("A", encoding="utf-8")
  (tmp_path / "b.txt").write_text("B", encoding="utf-8")
  (tmp_path / "sub").mkdir()
  (tmp_path / "sub" / "nested.txt").write_text("nested\n", encoding="utf-8")
  return tmp_path


@pytest.fixture
def make_engine(build_dir):
  """Factory for engines resolving against `build_dir` unless told otherwise."""

  def _make(**overrides) -> TransformEngine:
    settings = {"cwd": build_dir}
    settings.update(overrides)
    return TransformEngine(RuntimeConfig(**settings))

  return _make
