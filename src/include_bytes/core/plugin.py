"""
Host Plugin Entrypoint.

A build host that already owns a parsed program can run the pass directly
through ``process_transform``. The host supplies the tree together with a
metadata object exposing the build context (working directory, file name).
Failures are not converted: an ``IncludeBytesError`` propagates to the host,
which treats it as a failure of the whole build unit.
"""

from enum import Enum
from typing import Dict, Optional

import libcst as cst
from pydantic import BaseModel, Field
from rich.markup import escape

from include_bytes.config import BuildContext
from include_bytes.core.rewriter import IncludeBytesRewriter
from include_bytes.enums import MatchingMode
from include_bytes.utils.console import log_info


class ContextKind(str, Enum):
  """Keys the host can be queried for."""

  FILENAME = "filename"
  CWD = "cwd"


class TransformPluginMetadata(BaseModel):
  """
  Contextual metadata handed over by the host with each program.
  """

  context: Dict[ContextKind, str] = Field(default_factory=dict, description="Context values known to the host.")

  def get_context(self, kind: ContextKind) -> Optional[str]:
    """
    Looks up one context value.

    Args:
        kind: The value requested.

    Returns:
        Optional[str]: The value, or None if the host did not provide it.
    """
    return self.context.get(ContextKind(kind))


def process_transform(
  program: cst.Module,
  metadata: TransformPluginMetadata,
  matching: MatchingMode = MatchingMode.CALL_SITE,
) -> cst.Module:
  """
  Runs the include-bytes pass over a host-owned program.

  Args:
      program: The parsed program.
      metadata: Host context lookup.
      matching: Strategy used to pair a marker callee with a call.

  Returns:
      cst.Module: The rewritten program.

  Raises:
      IncludeBytesError: If any marker call cannot be substituted.
  """
  filename = metadata.get_context(ContextKind.FILENAME)
  cwd = metadata.get_context(ContextKind.CWD)
  log_info(f"filename: {escape(str(filename))}")

  rewriter = IncludeBytesRewriter(context=BuildContext(cwd=cwd, filename=filename), matching=matching)
  return program.visit(rewriter)
