"""
Transform Trace Recording.

A ``TraceLogger`` collects what a single engine run did: the phases it went
through and, nested under them, each marker match, file read and call
substitution. ``export`` flattens the events into JSON-ready dictionaries for
``--json-trace``.

Events are linked by ``parent_id`` to the phase that was open when they were
recorded. Ids are sequential per logger (``evt-1``, ``evt-2``, ...), so two runs
over the same input export the same ids.
"""

import itertools
import time
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, Field


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  MARKER_MATCH = "marker_match"
  FILE_READ = "file_read"
  AST_MUTATION = "ast_mutation"
  ANALYSIS_WARNING = "analysis_warning"


class TraceEvent(BaseModel):
  id: str
  type: TraceEventType
  timestamp: float = Field(default_factory=time.time)
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = Field(default_factory=dict)


class TraceLogger:
  """
  Event recorder owned by the engine and shared with the rewriter.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._open: List[str] = []
    self._ids = itertools.count(1)

  @property
  def current_phase(self) -> Optional[str]:
    return self._open[-1] if self._open else None

  def _record(self, kind: TraceEventType, description: str, parent: Optional[str] = None, **metadata: Any) -> str:
    event = TraceEvent(
      id=f"evt-{next(self._ids)}",
      type=kind,
      description=description,
      parent_id=parent if parent is not None else self.current_phase,
      metadata=metadata,
    )
    self._events.append(event)
    return event.id

  def start_phase(self, name: str, description: str = "") -> str:
    """
    Opens a phase nested in the current one.

    Returns:
        str: The phase id; later events point at it until the phase ends.
    """
    phase_id = self._record(TraceEventType.PHASE_START, name, detail=description)
    self._open.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    """Closes the innermost open phase. Does nothing if none is open."""
    if self._open:
      phase_id = self._open.pop()
      self._record(TraceEventType.PHASE_END, "End Phase", parent=phase_id)

  @contextmanager
  def phase(self, name: str, description: str = "") -> Iterator[str]:
    """
    Runs a block as a phase, closing it however the block exits.
    """
    phase_id = self.start_phase(name, description)
    try:
      yield phase_id
    finally:
      # Inner phases left open by the block end with it.
      while self._open and self._open[-1] != phase_id:
        self.end_phase()
      self.end_phase()

  def log_match(self, marker: str, call_source: str) -> None:
    self._record(TraceEventType.MARKER_MATCH, f"Matched {marker}", marker=marker, call=call_source)

  def log_file_read(self, path: str, size: int) -> None:
    self._record(TraceEventType.FILE_READ, f"Read {path}", path=path, size=size)

  def log_mutation(self, node_type: str, before: str, after: str) -> None:
    self._record(TraceEventType.AST_MUTATION, f"Transformed {node_type}", before=before, after=after)

  def log_warning(self, message: str) -> None:
    self._record(TraceEventType.ANALYSIS_WARNING, message, level="warning")

  def export(self) -> List[Dict[str, Any]]:
    return [e.model_dump() for e in self._events]
