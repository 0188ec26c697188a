"""
Tests for the File Content Resolver.
"""

from pathlib import Path

import pytest

from include_bytes.core.errors import IncludeBytesError
from include_bytes.core.resolver import read_file_contents, resolve_path
from include_bytes.enums import ErrorKind


def test_resolve_relative(tmp_path):
  assert resolve_path("sub/x.txt", tmp_path) == tmp_path / "sub" / "x.txt"


def test_resolve_strips_root(tmp_path):
  assert resolve_path("/etc/hosts", str(tmp_path)) == tmp_path / "etc" / "hosts"


def test_resolve_keeps_parent_segments(tmp_path):
  assert resolve_path("../x.txt", tmp_path) == Path(tmp_path) / ".." / "x.txt"


def test_read_whole_file(build_dir):
  assert read_file_contents(".gitignore", build_dir) == "/target\n^target/\ntarget\n"


def test_read_preserves_crlf(tmp_path):
  (tmp_path / "dos.txt").write_bytes(b"one\r\ntwo\r\n")
  assert read_file_contents("dos.txt", tmp_path) == "one\r\ntwo\r\n"


def test_read_empty_file(tmp_path):
  (tmp_path / "empty.txt").write_bytes(b"")
  assert read_file_contents("empty.txt", tmp_path) == ""


def test_read_with_custom_encoding(tmp_path):
  (tmp_path / "latin.txt").write_bytes(b"caf\xe9")
  assert read_file_contents("latin.txt", tmp_path, encoding="latin-1") == "café"


def test_not_found(tmp_path):
  with pytest.raises(IncludeBytesError) as exc:
    read_file_contents("nope.txt", tmp_path)
  assert exc.value.kind == ErrorKind.FILE_NOT_FOUND


def test_directory_is_read_failure(tmp_path):
  (tmp_path / "dir").mkdir()
  with pytest.raises(IncludeBytesError) as exc:
    read_file_contents("dir", tmp_path)
  assert exc.value.kind == ErrorKind.READ_FAILURE
  assert exc.value.path == "dir"


def test_undecodable_is_read_failure(tmp_path):
  (tmp_path / "latin.txt").write_bytes(b"caf\xe9")
  with pytest.raises(IncludeBytesError) as exc:
    read_file_contents("latin.txt", tmp_path)
  assert exc.value.kind == ErrorKind.READ_FAILURE
