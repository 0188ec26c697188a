"""
Scan Command Handler.

Lists the marker call sites of source files and checks that each one would
substitute cleanly, without rewriting anything.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

import libcst as cst
from rich.markup import escape
from rich.table import Table

from include_bytes.config import RuntimeConfig
from include_bytes.core.scanners import MarkerSite, scan_file
from include_bytes.utils.console import console, log_error, log_info


def handle_scan(path: Path, cwd: Optional[Path], json_mode: bool = False) -> int:
  """
  Scans a file or directory for ``includeBytes`` calls.

  Args:
      path: Input source file or directory.
      cwd: Directory marker paths are resolved against. Falls back to config,
          then the process working directory.
      json_mode: If True, output JSON to stdout and suppress the table.

  Returns:
      int: Exit code (0 if every site resolves, 1 otherwise).
  """
  if not path.exists():
    log_error(f"Path not found: {escape(str(path))}")
    return 1

  try:
    config = RuntimeConfig.load(cwd=cwd, search_path=path if path.is_dir() else path.parent)
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1
  effective_cwd = str(config.cwd) if config.cwd is not None else str(Path.cwd())

  files = [path] if path.is_file() else sorted(path.rglob("*.py"))

  if not json_mode:
    log_info(f"Scanning {len(files)} files against cwd [path]{escape(effective_cwd)}[/path]...")

  results: Dict[str, List[MarkerSite]] = {}
  parse_failures = 0

  for f in files:
    try:
      results[str(f)] = scan_file(f, effective_cwd, config.encoding)
    except (OSError, UnicodeDecodeError, cst.ParserSyntaxError) as e:
      # Reported even in JSON mode; goes to the log stream
      log_error(f"Failed to parse {escape(f.name)}: {escape(str(e))}")
      parse_failures += 1

  broken = sum(1 for sites in results.values() for s in sites if not s.ok)
  exit_code = 1 if broken or parse_failures else 0

  if json_mode:
    output = [{"file": fname, **site.model_dump(mode="json")} for fname, sites in results.items() for site in sites]
    print(json.dumps(output, indent=2))
    return exit_code

  table = Table(title="includeBytes Call Sites")
  table.add_column("Location", style="cyan")
  table.add_column("Path", style="bold blue")
  table.add_column("Status", justify="center")
  table.add_column("Detail", style="dim")

  for fname, sites in results.items():
    for site in sites:
      status = "[green]ok[/green]" if site.ok else f"[red]{site.error_kind.value}[/red]"
      detail = f"{site.size} chars" if site.ok else (site.error or "")
      table.add_row(
        escape(f"{fname}:{site.line}:{site.column}"),
        escape(site.path or site.call),
        status,
        escape(detail),
      )

  total = sum(len(sites) for sites in results.values())
  if total:
    console.print(table)
  console.print(f"[bold]Scan Summary:[/bold] {total} call sites, [red]{broken}[/red] would fail.")
  return exit_code
