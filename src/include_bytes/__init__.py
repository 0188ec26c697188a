"""
include-bytes Package.

A compile-time "inline file contents" rewrite for Python sources. Every call
of the form ``includeBytes("relative/path")`` is replaced by
``env.latin1_string_to_uint8array("<contents of relative/path>")``, with the
path resolved against a working directory known at build time.

Usage
-----

Simple String Transform
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import include_bytes
    code = 'data = includeBytes("banner.txt")'
    print(include_bytes.transform(code, cwd="assets"))
    # data = env.latin1_string_to_uint8array("Hello\\n")

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from include_bytes import TransformEngine, RuntimeConfig

    engine = TransformEngine(RuntimeConfig(cwd="assets", matching="sequential"))
    res = engine.run(code)

    if res.success:
        print(res.code)
    else:
        print(f"{res.error_kind}: {res.errors}")
"""

from pathlib import Path
from typing import Optional, Union

from include_bytes.config import BuildContext, RuntimeConfig
from include_bytes.core.engine import TransformEngine, TransformResult
from include_bytes.core.errors import IncludeBytesError
from include_bytes.core.plugin import ContextKind, TransformPluginMetadata, process_transform
from include_bytes.enums import ErrorKind, MatchingMode

__version__ = "0.1.0"


def transform(
  code: str,
  cwd: Optional[Union[str, Path]],
  filename: Optional[str] = None,
  matching: Union[str, MatchingMode] = MatchingMode.CALL_SITE,
  encoding: str = "utf-8",
) -> str:
  """
  Inlines every marker call in a string of Python code.

  Args:
      code (str): The source code to transform.
      cwd (str | Path | None): Directory marker paths are resolved against.
      filename (str, optional): Name of the source unit, for diagnostics only.
      matching (str): ``"call_site"`` (default) or ``"sequential"``.
      encoding (str): Codec used to decode included files.

  Returns:
      str: The transformed source code.

  Raises:
      IncludeBytesError: If a marker call cannot be substituted.
      libcst.ParserSyntaxError: If ``code`` is not valid Python.
  """
  config = RuntimeConfig(
    cwd=Path(cwd) if cwd is not None else None,
    filename=filename,
    matching=matching,
    encoding=encoding,
  )
  engine = TransformEngine(config)
  tree = engine.transform_tree(engine.parse(code))
  return engine.to_source(tree)


__all__ = [
  "BuildContext",
  "ContextKind",
  "ErrorKind",
  "IncludeBytesError",
  "MatchingMode",
  "RuntimeConfig",
  "TransformEngine",
  "TransformPluginMetadata",
  "TransformResult",
  "process_transform",
  "transform",
  "__version__",
]
