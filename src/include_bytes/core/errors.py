"""
Error types for the rewrite pass.

A single exception class carries one of the ``ErrorKind`` values. Raising it
from inside a LibCST hook unwinds the traversal immediately, so one failing
marker call aborts the transform of the whole program. The ``TransformEngine``
catches it and converts it into a failed ``TransformResult``.
"""

from typing import Optional

from include_bytes.enums import ErrorKind

MESSAGE_PREFIX = "includeBytes()"


class IncludeBytesError(Exception):
  """
  Raised when a marker call cannot be substituted.

  Attributes:
      kind (ErrorKind): The condition that fired.
      detail (str): Human-readable description of the failure.
      path (Optional[str]): The offending path, when one is known.
  """

  def __init__(self, kind: ErrorKind, detail: str, path: Optional[str] = None):
    self.kind = kind
    self.detail = detail
    self.path = path
    super().__init__(self.message)

  @property
  def message(self) -> str:
    """
    Renders the full diagnostic.

    Returns:
        str: e.g. ``includeBytes(): file does not exist: 'data/blob.txt' [FileNotFound]``.
    """
    msg = f"{MESSAGE_PREFIX}: {self.detail}"
    if self.path is not None:
      msg += f": {self.path!r}"
    return f"{msg} [{self.kind.value}]"

  def __reduce__(self):
    return (type(self), (self.kind, self.detail, self.path))


def missing_argument() -> IncludeBytesError:
  return IncludeBytesError(ErrorKind.MISSING_ARGUMENT, "should have one argument")


def invalid_argument_type(node_type: str) -> IncludeBytesError:
  return IncludeBytesError(
    ErrorKind.INVALID_ARGUMENT_TYPE,
    f"should only have a string literal as an argument, got {node_type}",
  )


def missing_cwd() -> IncludeBytesError:
  return IncludeBytesError(ErrorKind.MISSING_CWD, "current working directory (cwd) is not set")


def file_not_found(path: str) -> IncludeBytesError:
  return IncludeBytesError(ErrorKind.FILE_NOT_FOUND, "file does not exist", path)


def read_failure(path: str, reason: str) -> IncludeBytesError:
  return IncludeBytesError(ErrorKind.READ_FAILURE, f"failed to read file ({reason})", path)


def fstring_context(path: str, offending: str) -> IncludeBytesError:
  return IncludeBytesError(
    ErrorKind.UNSUPPORTED_CONTEXT,
    f"contents need {offending!r}, which an f-string replacement field cannot hold",
    path,
  )
