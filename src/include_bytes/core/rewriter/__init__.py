"""
Rewriter Package.

This package provides the ``IncludeBytesRewriter`` class, composed of:
- Base: pass state, build context, node construction.
- Calls: marker recognition and literal substitution.
- Literals: string literal extraction and rendering.
"""

from include_bytes.core.rewriter.base import BaseRewriter, MARKER_NAME, RUNTIME_METHOD, RUNTIME_OBJECT
from include_bytes.core.rewriter.calls import CallMixin


class IncludeBytesRewriter(CallMixin, BaseRewriter):
  """
  The main AST transformer for include-bytes.

  One instance handles exactly one program. This class is the entry point for
  the ``TransformEngine`` and the host plugin entrypoint.
  """

  pass


__all__ = [
  "IncludeBytesRewriter",
  "MARKER_NAME",
  "RUNTIME_METHOD",
  "RUNTIME_OBJECT",
]
