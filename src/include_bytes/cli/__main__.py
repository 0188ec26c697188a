"""
Main Entry Point for include-bytes CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `include_bytes.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from include_bytes.cli import commands
from include_bytes.enums import MatchingMode
from include_bytes import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="include-bytes: Inline file contents at build time")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: TRANSFORM ---
  cmd_tr = subparsers.add_parser("transform", help="Inline includeBytes() calls in a Python file or directory")
  cmd_tr.add_argument("path", type=Path, help="Input source file or directory")
  cmd_tr.add_argument("--cwd", type=Path, default=None, help="Directory marker paths are resolved against")
  cmd_tr.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_tr.add_argument(
    "--matching",
    choices=[m.value for m in MatchingMode],
    default=None,
    help="How a marker callee is paired with the call to rewrite (default: from toml, else call_site)",
  )
  cmd_tr.add_argument("--encoding", default=None, help="Codec of included files (default: utf-8)")
  cmd_tr.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (events, diffs) to a JSON file."
  )

  # --- Command: SCAN ---
  cmd_scan = subparsers.add_parser("scan", help="List includeBytes() call sites and check they resolve")
  cmd_scan.add_argument("path", type=Path, help="Input source file or directory")
  cmd_scan.add_argument("--cwd", type=Path, default=None, help="Directory marker paths are resolved against")
  cmd_scan.add_argument("--json", action="store_true", help="Print results as JSON")

  args = parser.parse_args(argv)

  if args.command == "transform":
    return commands.handle_transform(args.path, args.out, args.cwd, args.matching, args.encoding, args.json_trace)

  elif args.command == "scan":
    return commands.handle_scan(args.path, args.cwd, args.json)

  return 0


if __name__ == "__main__":
  sys.exit(main())
