"""
AST Node Serialization.

Renders detached LibCST nodes back to source text so that trace events and
scan reports can show a call before and after substitution.
"""

import libcst as cst

# Empty module providing the formatting defaults for detached nodes.
_RENDER_CTX = cst.parse_module("")

# Trace payloads embed whole files; anything longer is elided.
MAX_RENDER_LENGTH = 200


def capture_node_source(node: cst.CSTNode) -> str:
  """
  Renders a LibCST node into its Python source code string representation.

  Args:
      node: The CST node to serialise.

  Returns:
      str: The Python code string.
  """
  return _RENDER_CTX.code_for_node(node)


def abbreviate(text: str, limit: int = MAX_RENDER_LENGTH) -> str:
  """
  Shortens ``text`` to at most ``limit`` characters.

  Args:
      text: The rendered source.
      limit: Maximum length, including the ellipsis marker.

  Returns:
      str: ``text`` unchanged, or its head followed by ``...``.
  """
  if len(text) <= limit:
    return text
  return text[: max(limit - 3, 0)] + "..."
