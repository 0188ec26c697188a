"""
Enumerations for include-bytes.

This module defines the error taxonomy reported by the rewrite pass and the
strategies available for pairing a marker callee with the call it rewrites.
"""

from enum import Enum


class ErrorKind(str, Enum):
  """
  Fatal conditions raised while substituting a marker call.

  Every kind aborts the whole transform for the current program.
  """

  MISSING_ARGUMENT = "MissingArgument"  # includeBytes()
  INVALID_ARGUMENT_TYPE = "InvalidArgumentType"  # includeBytes(x), includeBytes(1)
  MISSING_CWD = "MissingCwd"
  FILE_NOT_FOUND = "FileNotFound"
  READ_FAILURE = "ReadFailure"  # exists, but unreadable or not valid text
  UNSUPPORTED_CONTEXT = "UnsupportedContext"  # f"{includeBytes(...)}" needing escapes


class MatchingMode(str, Enum):
  """
  How a flagged marker callee is paired with the call expression that consumes it.
  """

  # The call expression whose own callee is the marker is rewritten.
  CALL_SITE = "call_site"
  # The next call expression to finish traversal consumes the flag,
  # whichever call that happens to be.
  SEQUENTIAL = "sequential"
