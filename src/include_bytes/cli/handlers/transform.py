"""
Transform Command Handler.

This module implements the logic for the `include-bytes transform` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. AST transformation via the Engine, per file.
3. Output writing and trace logging.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from rich.markup import escape
from rich.table import Table

from include_bytes.config import RuntimeConfig
from include_bytes.core.engine import TransformEngine, TransformResult
from include_bytes.utils.console import console, log_error, log_info, log_success, log_warning


def handle_transform(
  input_path: Path,
  output_path: Optional[Path],
  cwd: Optional[Path],
  matching: Optional[str],
  encoding: Optional[str],
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'transform' command execution.

  Args:
      input_path: Path to the source file or directory to transform.
      output_path: Where generated code should be saved. Stdout if omitted (files only).
      cwd: Directory marker paths are resolved against. Falls back to config, then
          the process working directory.
      matching: Override for the matching mode.
      encoding: Override for the included-file codec.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {escape(str(input_path))}")
    return 1

  try:
    config = RuntimeConfig.load(
      cwd=cwd,
      matching=matching,
      encoding=encoding,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  if config.cwd is None:
    config = config.model_copy(update={"cwd": Path.cwd()})

  batch_results: Dict[str, TransformResult] = {}

  if input_path.is_file():
    result = _transform_single_file(input_path, output_path, config, json_trace_path)
    batch_results[input_path.name] = result
    return 0 if result.success else 1

  if not output_path:
    log_error("Directory transform requires --out destination directory.")
    return 1

  py_files = sorted(input_path.rglob("*.py"))
  if not py_files:
    log_warning(f"No .py files found in {escape(str(input_path))}")
    return 0

  log_info(f"Processing {len(py_files)} files from [path]{escape(str(input_path))}[/path]...")

  for src_file in py_files:
    rel_path = src_file.relative_to(input_path)
    dest_file = output_path / rel_path

    batch_trace = None
    if json_trace_path:
      # One trace per file, next to its output
      batch_trace = dest_file.with_suffix(".trace.json")

    result = _transform_single_file(src_file, dest_file, config, batch_trace)
    batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _transform_single_file(
  input_path: Path,
  output_path: Optional[Path],
  config: RuntimeConfig,
  json_trace_path: Optional[Path] = None,
) -> TransformResult:
  """
  Helper to execute the transform on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path. The code is printed if None.
      config: Runtime configuration object.
      json_trace_path: Path to save trace event logs.

  Returns:
      TransformResult: Result object containing status and code.
  """
  try:
    code = input_path.read_text("utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {escape(str(input_path))}: {escape(str(e))}")
    return TransformResult(success=False, errors=[str(e)])

  engine = TransformEngine(config.model_copy(update={"filename": input_path.name}))
  result = engine.run(code)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{escape(str(json_trace_path))}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {escape(str(e))}")

  if not result.success:
    for err in result.errors:
      log_error(f"{escape(str(input_path))}: {escape(err)}")
    return result

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(result.code)
    log_success(f"Transformed: [path]{escape(str(input_path))}[/path] -> [path]{escape(str(output_path))}[/path]")
  else:
    print(result.code, end="")

  return result


def _print_batch_summary(results: Dict[str, TransformResult]) -> None:
  """
  Renders a summary table of transform results to the console.

  Args:
      results: Dictionary mapping filenames to transform results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if r.success)
  failures = total - successes

  if failures == 0:
    inlined = sum(len(r.substitutions) for r in results.values())
    log_success(f"Batch Complete: {successes}/{total} files transformed, {inlined} call sites inlined.")
    return

  table = Table(title="Transform Report")
  table.add_column("File", style="cyan")
  table.add_column("Kind", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success:
      continue
    kind = res.error_kind.value if res.error_kind else "Error"
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), kind, escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} Failed.")
