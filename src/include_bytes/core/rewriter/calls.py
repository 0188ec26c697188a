"""
Call Rewriting Mixin.

Recognizes ``includeBytes(...)`` call sites and substitutes them with
``env.latin1_string_to_uint8array("<file contents>")``.

Two hooks cooperate during the postorder walk:

1.  ``leave_Call_func`` runs once the callee of a call has been visited and
    before its arguments are. It raises the pending-substitution flag when the
    callee is the bare marker identifier.
2.  ``leave_Call`` runs after the whole call, arguments included, has been
    visited. Which call gets rewritten depends on the matching mode:

    - ``call_site``: the call whose own callee is the marker.
    - ``sequential``: the first call to finish while the flag is raised. With
      nested calls such as ``includeBytes(load("x"))`` this is ``load("x")``,
      not the marker call.

Inside f-string replacement fields the inlined literal must also parse on
Python 3.10 and 3.11; contents that would need a backslash, ``#`` or an
enclosing quote there raise ``UnsupportedContext``.
"""

import logging

import libcst as cst

from include_bytes.core import errors
from include_bytes.core.resolver import read_file_contents
from include_bytes.core.rewriter.base import BaseRewriter, MARKER_NAME
from include_bytes.core.rewriter.literals import fstring_conflict, plain_string_value, replace_string_value
from include_bytes.enums import MatchingMode
from include_bytes.utils.node_diff import abbreviate, capture_node_source

logger = logging.getLogger(__name__)


class CallMixin(BaseRewriter):
  """
  Mixin for recognizing and substituting marker calls.
  """

  def visit_FormattedString(self, node: cst.FormattedString) -> bool:
    self._fstring_quotes.append(node.end[0])
    return True

  def leave_FormattedString(
    self, original_node: cst.FormattedString, updated_node: cst.FormattedString
  ) -> cst.BaseExpression:
    self._fstring_quotes.pop()
    return updated_node

  def leave_Call_func(self, node: cst.Call) -> None:
    """
    Flags a marker callee.

    Any other callee shape leaves the flag untouched.

    Args:
        node: The call whose ``func`` was just visited.
    """
    if self._is_marker_callee(node.func):
      self._pending_substitution = True
      self.tracer.log_match(MARKER_NAME, abbreviate(capture_node_source(node)))

  def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    """
    Consumes the flag and rewrites the selected call.

    Args:
        original_node: The call before its children were transformed.
        updated_node: The call with transformed children.

    Returns:
        cst.BaseExpression: The substituted call, or ``updated_node`` untouched.

    Raises:
        IncludeBytesError: If the selected call cannot be substituted.
    """
    if self.matching == MatchingMode.CALL_SITE:
      # Decided by the call's own callee; an enclosing marker call keeps its turn.
      if not self._is_marker_callee(original_node.func):
        return updated_node
    elif not self._pending_substitution:
      return updated_node

    self._pending_substitution = False
    new_node = self._substitute(updated_node)

    self.tracer.log_mutation(
      "Call",
      abbreviate(capture_node_source(original_node)),
      abbreviate(capture_node_source(new_node)),
    )
    return new_node

  def _substitute(self, node: cst.Call) -> cst.Call:
    """
    Swaps the callee for the runtime decoder and inlines the file contents.

    Arguments after the first are kept as they are.

    Args:
        node: The call to rewrite.

    Returns:
        cst.Call: The rewritten call.

    Raises:
        IncludeBytesError: ``MissingArgument``, ``InvalidArgumentType``,
            ``MissingCwd``, ``FileNotFound``, ``ReadFailure`` or ``UnsupportedContext``.
    """
    callee = self._runtime_callee()

    if not node.args:
      raise errors.missing_argument()

    first = node.args[0]
    path = plain_string_value(first.value)
    if path is None:
      raise errors.invalid_argument_type(type(first.value).__name__)

    cwd = self.context.cwd
    if cwd is None:
      raise errors.missing_cwd()

    contents = read_file_contents(path, cwd, self.encoding)
    self.tracer.log_file_read(path, len(contents))

    new_literal = replace_string_value(first.value, contents)
    if self._fstring_quotes:
      offending = fstring_conflict(new_literal.value, self._fstring_quotes)
      if offending is not None:
        raise errors.fstring_context(path, offending)

    logger.debug("Inlined %s (%d characters)", path, len(contents))
    self.substitutions.append(path)

    new_first = first.with_changes(value=new_literal)
    return node.with_changes(func=callee, args=[new_first, *node.args[1:]])
