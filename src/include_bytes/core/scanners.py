"""
Marker Call Scanner.

A read-only LibCST visitor that lists every ``includeBytes(...)`` call site in a
module and checks whether it would substitute cleanly. Unlike the rewriter it
does not stop at the first failure, so the ``scan`` command can report all
problems of a file at once.
"""

from pathlib import Path
from typing import List, Optional

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider
from pydantic import BaseModel, Field

from include_bytes.core import errors
from include_bytes.core.errors import IncludeBytesError
from include_bytes.core.resolver import read_file_contents, resolve_path
from include_bytes.core.rewriter.base import MARKER_NAME
from include_bytes.core.rewriter.literals import fstring_conflict, plain_string_value, quote_string
from include_bytes.enums import ErrorKind
from include_bytes.utils.node_diff import abbreviate, capture_node_source


class MarkerSite(BaseModel):
  """
  One marker call found in a module.
  """

  line: int = Field(..., description="1-based line of the call.")
  column: int = Field(..., description="0-based column of the call.")
  call: str = Field(..., description="Source of the call (abbreviated).")
  path: Optional[str] = Field(None, description="The literal path argument, if it is one.")
  resolved: Optional[str] = Field(None, description="cwd-joined path, when a cwd is known.")
  size: Optional[int] = Field(None, description="Characters that would be inlined.")
  error_kind: Optional[ErrorKind] = Field(None, description="Failure that substitution would raise.")
  error: Optional[str] = Field(None, description="Failure message.")

  @property
  def ok(self) -> bool:
    return self.error_kind is None


class MarkerScanner(cst.CSTVisitor):
  """
  Collects ``MarkerSite`` records for every marker call.

  Attributes:
      cwd (Optional[str]): Working directory for path resolution.
      encoding (str): Codec used for the read check.
      sites (List[MarkerSite]): Results, in source order.
  """

  METADATA_DEPENDENCIES = (PositionProvider,)

  def __init__(self, cwd: Optional[str], encoding: str = "utf-8") -> None:
    super().__init__()
    self.cwd = cwd
    self.encoding = encoding
    self.sites: List[MarkerSite] = []
    self._fstring_quotes: List[str] = []

  def visit_FormattedString(self, node: cst.FormattedString) -> None:
    self._fstring_quotes.append(node.end[0])

  def leave_FormattedString(self, original_node: cst.FormattedString) -> None:
    self._fstring_quotes.pop()

  def visit_Call(self, node: cst.Call) -> None:
    if not (isinstance(node.func, cst.Name) and node.func.value == MARKER_NAME):
      return

    pos = self.get_metadata(PositionProvider, node).start
    site = MarkerSite(line=pos.line, column=pos.column, call=abbreviate(capture_node_source(node)))

    try:
      self._check(node, site)
    except IncludeBytesError as e:
      site.error_kind = e.kind
      site.error = e.message

    self.sites.append(site)

  def _check(self, node: cst.Call, site: MarkerSite) -> None:
    """Runs the substitution checks in the order the rewriter applies them."""
    if not node.args:
      raise errors.missing_argument()

    value = node.args[0].value
    path = plain_string_value(value)
    if path is None:
      raise errors.invalid_argument_type(type(value).__name__)
    site.path = path

    if self.cwd is None:
      raise errors.missing_cwd()
    site.resolved = str(resolve_path(path, self.cwd))

    contents = read_file_contents(path, self.cwd, self.encoding)
    site.size = len(contents)

    if self._fstring_quotes:
      offending = fstring_conflict(quote_string(contents, value.quote[0]), self._fstring_quotes)
      if offending is not None:
        raise errors.fstring_context(path, offending)


def scan_source(code: str, cwd: Optional[str], encoding: str = "utf-8") -> List[MarkerSite]:
  """
  Parses ``code`` and reports its marker call sites.

  Args:
      code: Python source.
      cwd: Working directory for path resolution.
      encoding: Codec used for the read check.

  Returns:
      List[MarkerSite]: One entry per marker call.

  Raises:
      libcst.ParserSyntaxError: If ``code`` is not valid Python.
  """
  wrapper = MetadataWrapper(cst.parse_module(code))
  scanner = MarkerScanner(cwd, encoding)
  wrapper.visit(scanner)
  return scanner.sites


def scan_file(path: Path, cwd: Optional[str], encoding: str = "utf-8") -> List[MarkerSite]:
  """Reads a source file and scans it."""
  return scan_source(path.read_text("utf-8"), cwd, encoding)
