"""
Entry point for module execution (``python -m include_bytes``).

This module delegates execution to the CLI handler in ``include_bytes.cli.__main__``.
"""

import sys
from include_bytes.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
