"""
Orchestration Engine for the include-bytes Rewrite.

This module provides the ``TransformEngine``, the driver that takes Python
source text through the pipeline:

1.  **Parsing**: Source code into a LibCST ``Module``.
2.  **Rewriting**: A single ``IncludeBytesRewriter`` traversal. Any
    ``IncludeBytesError`` aborts the traversal; the partially built tree is
    discarded and the original code is returned in a failed result.
3.  **Emission**: The rewritten tree back to source.

Every phase is recorded by a ``TraceLogger`` and exported with the result.
"""

from typing import Any, Dict, List, Optional

import libcst as cst
from pydantic import BaseModel, Field

from include_bytes.config import RuntimeConfig
from include_bytes.core.errors import IncludeBytesError
from include_bytes.core.rewriter import IncludeBytesRewriter
from include_bytes.core.tracer import TraceLogger
from include_bytes.enums import ErrorKind


class TransformResult(BaseModel):
  """
  Structured result of a single file transform.
  """

  code: str = Field(default="", description="The transformed source code.")
  errors: List[str] = Field(default_factory=list, description="Error messages encountered.")
  error_kind: Optional[ErrorKind] = Field(None, description="Taxonomy kind of the fatal rewrite error, if any.")
  success: bool = Field(default=True, description="True if the pipeline completed without fatal errors.")
  substitutions: List[str] = Field(default_factory=list, description="Marker paths inlined, in traversal order.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0


class TransformEngine:
  """
  The main compilation unit.

  Encapsulates the configuration needed to transform one unit of code at a
  time. A fresh rewriter (and so a fresh marker state) is built per run.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Initializes the Engine.

    Args:
        config: The runtime configuration. Loaded from pyproject.toml if omitted.
    """
    self.config = config or RuntimeConfig.load()

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Args:
        code (str): Python source code.

    Returns:
        cst.Module: The parsed syntax tree.

    Raises:
        libcst.ParserSyntaxError: If the input code is invalid Python.
    """
    return cst.parse_module(code)

  def to_source(self, tree: cst.Module) -> str:
    """
    Converts CST back to source string.

    Args:
        tree (cst.Module): The modified syntax tree.

    Returns:
        str: Generated Python code.
    """
    return tree.code

  def create_rewriter(self, tracer: Optional[TraceLogger] = None) -> IncludeBytesRewriter:
    """
    Builds a rewriter bound to this engine's configuration.

    Args:
        tracer: Event recorder for the run.

    Returns:
        IncludeBytesRewriter: A single-use transformer.
    """
    return IncludeBytesRewriter(
      context=self.config.build_context(),
      matching=self.config.matching,
      encoding=self.config.encoding,
      tracer=tracer,
    )

  def transform_tree(self, tree: cst.Module, tracer: Optional[TraceLogger] = None) -> cst.Module:
    """
    Runs the rewrite pass over a parsed module.

    Args:
        tree: The program tree.
        tracer: Event recorder for the run.

    Returns:
        cst.Module: The rewritten tree. ``tree`` itself is not modified.

    Raises:
        IncludeBytesError: On the first marker call that cannot be substituted.
    """
    return tree.visit(self.create_rewriter(tracer))

  def run(self, code: str) -> TransformResult:
    """
    Executes the full transform pipeline.

    Args:
        code (str): The input source string.

    Returns:
        TransformResult: Object containing transformed code and error logs.
    """
    tracer = TraceLogger()
    rewriter = self.create_rewriter(tracer)
    result = TransformResult(code=code)

    with tracer.phase("Transform Pipeline", f"cwd={self.config.cwd}"):
      try:
        with tracer.phase("Parsing", "Source -> CST"):
          tree = self.parse(code)
        with tracer.phase("Rewrite Engine", "Visitor Traversal"):
          tree = tree.visit(rewriter)
        with tracer.phase("Emission", "CST -> Source"):
          result.code = self.to_source(tree)
      except cst.ParserSyntaxError as e:
        result.errors.append(f"Parse Error: {e}")
      except IncludeBytesError as e:
        tracer.log_warning(e.message)
        result.errors.append(e.message)
        result.error_kind = e.kind

    result.success = not result.errors
    result.substitutions = rewriter.substitutions
    result.trace_events = tracer.export()
    return result
