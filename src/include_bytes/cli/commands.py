"""
CLI Command Handlers Facade.

Re-exports handlers from `include_bytes.cli.handlers` so the dispatcher and
tests have one stable import location.
"""

from include_bytes.cli.handlers.transform import (
  handle_transform,
  _transform_single_file,
  _print_batch_summary,
)
from include_bytes.cli.handlers.scan import handle_scan

__all__ = [
  "_print_batch_summary",
  "_transform_single_file",
  "handle_scan",
  "handle_transform",
]
