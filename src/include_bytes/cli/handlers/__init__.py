from .transform import handle_transform, _transform_single_file, _print_batch_summary
from .scan import handle_scan

__all__ = [
  "_print_batch_summary",
  "_transform_single_file",
  "handle_scan",
  "handle_transform",
]
