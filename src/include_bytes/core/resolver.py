"""
File Content Resolver.

Turns a marker path plus the build-time working directory into file text.
The path is always interpreted relative to the working directory, even when it
looks absolute.
"""

import logging
from pathlib import Path, PurePath
from typing import Union

from include_bytes.core.errors import file_not_found, read_failure

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def resolve_path(path: str, cwd: Union[str, Path]) -> Path:
  """
  Joins ``path`` onto ``cwd``.

  A leading root or drive is stripped first, so ``"/etc/hosts"`` resolves to
  ``cwd / "etc/hosts"`` rather than escaping the working directory.

  Args:
      path: The marker argument.
      cwd: The working directory.

  Returns:
      Path: The joined (non-normalized) path.
  """
  relative = PurePath(path)
  if relative.anchor:
    relative = relative.relative_to(relative.anchor)
  return Path(cwd) / relative


def read_file_contents(path: str, cwd: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> str:
  """
  Reads the whole file at ``cwd / path`` as text.

  Args:
      path: Relative path taken from the string literal.
      cwd: Working directory of the build.
      encoding: Text codec used for decoding.

  Returns:
      str: The full file contents.

  Raises:
      IncludeBytesError: ``FileNotFound`` if the joined path does not exist,
          ``ReadFailure`` if it exists but cannot be read or decoded.
  """
  target = resolve_path(path, cwd)

  if not target.exists():
    raise file_not_found(path)

  try:
    # newline="" keeps \r\n sequences verbatim
    with open(target, "rt", encoding=encoding, newline="") as f:
      contents = f.read()
  except UnicodeDecodeError as e:
    raise read_failure(path, f"not valid {encoding}: {e.reason}") from e
  except OSError as e:
    raise read_failure(path, e.strerror or type(e).__name__) from e

  logger.debug("Read %d characters from %s", len(contents), target)
  return contents
