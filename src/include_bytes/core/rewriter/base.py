"""
Base Rewriter Implementation.

This module provides the ``BaseRewriter`` class, which serves as the foundation
for the ``IncludeBytesRewriter``. It handles:

1.  **State Management**: The pending-substitution flag set when a marker
    callee is seen, scoped to one rewriter instance (one program).
2.  **Build Context**: The immutable working directory / file name pair.
3.  **Tracing**: Access to the ``TraceLogger`` owned by the engine.
4.  **Node Construction**: Building the replacement callee from a dotted path.
"""

from typing import List, Optional

import libcst as cst

from include_bytes.config import BuildContext
from include_bytes.core.tracer import TraceLogger
from include_bytes.enums import MatchingMode

MARKER_NAME = "includeBytes"
RUNTIME_OBJECT = "env"
RUNTIME_METHOD = "latin1_string_to_uint8array"


class BaseRewriter(cst.CSTTransformer):
  """
  The base class for the marker rewrite traversal.

  Provides state and helpers shared by the mixins (``CallMixin``).
  """

  def __init__(
    self,
    context: Optional[BuildContext] = None,
    matching: MatchingMode = MatchingMode.CALL_SITE,
    encoding: str = "utf-8",
    tracer: Optional[TraceLogger] = None,
  ):
    """
    Initializes the rewriter.

    Args:
        context: Working directory and file name of the build unit.
        matching: Strategy used to pair a marker callee with a call.
        encoding: Codec used to decode included files.
        tracer: Event recorder. A private one is created if omitted.
    """
    super().__init__()
    self.context = context or BuildContext()
    self.matching = MatchingMode(matching)
    self.encoding = encoding
    self.tracer = tracer or TraceLogger()

    self._pending_substitution = False
    # Paths substituted so far, in traversal order.
    self.substitutions: List[str] = []
    # Quote characters of the f-strings enclosing the current node, innermost last.
    self._fstring_quotes: List[str] = []

  @property
  def pending_substitution(self) -> bool:
    """True between a marker callee being seen and a call consuming it."""
    return self._pending_substitution

  def _is_marker_callee(self, node: cst.BaseExpression) -> bool:
    """
    Checks whether a callee is exactly the bare marker identifier.

    ``includeBytes`` matches; ``mod.includeBytes``, ``includeBytes()()`` and
    ``fns[0]`` do not.

    Args:
        node: The ``func`` of a ``cst.Call``.

    Returns:
        bool: True if the callee is ``Name("includeBytes")``.
    """
    return isinstance(node, cst.Name) and node.value == MARKER_NAME

  def _create_name_node(self, api_path: str) -> cst.BaseExpression:
    """
    Creates a LibCST node structure from a dotted string.

    Args:
        api_path: Dotted path (e.g. 'env.latin1_string_to_uint8array').

    Returns:
        cst.BaseExpression: A nested Attribute (or Name) node.
    """
    parts = api_path.split(".")
    node = cst.Name(parts[0])
    for part in parts[1:]:
      node = cst.Attribute(value=node, attr=cst.Name(part))
    return node

  def _runtime_callee(self) -> cst.BaseExpression:
    return self._create_name_node(f"{RUNTIME_OBJECT}.{RUNTIME_METHOD}")
