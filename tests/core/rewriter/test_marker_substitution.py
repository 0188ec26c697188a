"""
Tests for Marker Call Substitution.

Verifies that:
1. `includeBytes("p")` becomes `env.latin1_string_to_uint8array("<contents of p>")`.
2. Code without the marker passes through untouched.
3. Independent marker calls each receive their own file.
4. Re-running the pass on its own output is a no-op.
"""

import libcst as cst
import pytest

from include_bytes.config import BuildContext
from include_bytes.core.rewriter import IncludeBytesRewriter


@pytest.fixture
def rewrite(build_dir):
  def _rewrite(code: str, **kwargs) -> str:
    rewriter = IncludeBytesRewriter(context=BuildContext(cwd=str(build_dir)), **kwargs)
    return cst.parse_module(code).visit(rewriter).code

  return _rewrite


def _first_string(code: str) -> str:
  """Returns the evaluated value of the first string literal in `code`."""
  found = []

  class _Finder(cst.CSTVisitor):
    def visit_SimpleString(self, node: cst.SimpleString) -> None:
      found.append(node.evaluated_value)

  cst.parse_module(code).visit(_Finder())
  return found[0]


def test_gitignore_scenario(rewrite):
  """
  Input:  s = includeBytes(".gitignore")
  Expect: s = env.latin1_string_to_uint8array("/target\\n^target/\\ntarget\\n")
  """
  res = rewrite('s = includeBytes(".gitignore")\n')
  assert res == 's = env.latin1_string_to_uint8array("/target\\n^target/\\ntarget\\n")\n'


def test_no_marker_is_noop(rewrite):
  code = "import os\n\ndef f(x):\n    # keep me\n    return load('a.txt') + x\n"
  assert rewrite(code) == code


def test_structure_preserved_around_call(rewrite):
  code = "def f():\n    return [1, includeBytes('a.txt'), 3]  # trailing\n"
  res = rewrite(code)
  assert res == "def f():\n    return [1, env.latin1_string_to_uint8array('A'), 3]  # trailing\n"


def test_two_independent_calls(rewrite):
  code = 'x = includeBytes("a.txt")\ny = includeBytes("b.txt")\n'
  res = rewrite(code)
  assert res == 'x = env.latin1_string_to_uint8array("A")\ny = env.latin1_string_to_uint8array("B")\n'


def test_nested_directory_path(rewrite):
  res = rewrite('x = includeBytes("sub/nested.txt")')
  assert res == 'x = env.latin1_string_to_uint8array("nested\\n")'


def test_absolute_looking_path_stays_in_cwd(rewrite):
  res = rewrite('x = includeBytes("/a.txt")')
  assert res == 'x = env.latin1_string_to_uint8array("A")'


def test_extra_arguments_untouched(rewrite):
  res = rewrite('x = includeBytes("a.txt", mode, strict=True)')
  assert res == 'x = env.latin1_string_to_uint8array("A", mode, strict=True)'


def test_attribute_callee_not_matched(rewrite):
  code = 'x = loader.includeBytes("a.txt")'
  assert rewrite(code) == code


def test_marker_as_value_not_matched(rewrite):
  code = "fn = includeBytes\n"
  assert rewrite(code) == code


def test_idempotent_rerun(rewrite):
  once = rewrite('x = includeBytes("a.txt")\ny = includeBytes(".gitignore")\n')
  assert rewrite(once) == once


def test_special_characters_roundtrip(build_dir, rewrite):
  """The emitted literal evaluates back to the exact file contents."""
  content = 'tab\there "double" \'single\' back\\slash\r\nnul\x00 bell\x07 é ✓\n'
  (build_dir / "special.txt").write_bytes(content.encode("utf-8"))

  for quote in ('"', "'"):
    res = rewrite(f"x = includeBytes({quote}special.txt{quote})")
    assert res.startswith(f"x = env.latin1_string_to_uint8array({quote}")
    assert "\n" not in res
    assert _first_string(res) == content


def test_triple_quoted_argument_becomes_single_line(rewrite):
  res = rewrite('x = includeBytes("""sub/nested.txt""")')
  assert res == 'x = env.latin1_string_to_uint8array("nested\\n")'


def test_raw_string_prefix_dropped(rewrite):
  res = rewrite('x = includeBytes(r"a.txt")')
  assert res == 'x = env.latin1_string_to_uint8array("A")'


def test_substitutions_recorded(build_dir):
  rewriter = IncludeBytesRewriter(context=BuildContext(cwd=str(build_dir)))
  cst.parse_module('includeBytes("b.txt")\nincludeBytes("a.txt")\n').visit(rewriter)
  assert rewriter.substitutions == ["b.txt", "a.txt"]
  assert rewriter.pending_substitution is False


def test_filename_is_not_required(build_dir):
  rewriter = IncludeBytesRewriter(context=BuildContext(cwd=str(build_dir), filename=None))
  res = cst.parse_module('x = includeBytes("a.txt")').visit(rewriter).code
  assert res == 'x = env.latin1_string_to_uint8array("A")'
