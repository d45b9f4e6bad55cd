"""
Conversion Trace Logger.

Records what one conversion did, step by step, for ``--json-trace`` dumps and
for tests that need to see why a parameter received its type.

Events are grouped under nested phases (Parse, Scope Analysis, Rewrite, Import
Assembly, Print). Inside a phase the rewriters log:

*   type verdicts (``name: string`` and the rule stage that decided it),
*   source mutations (``var`` keyword changes, removed declarations),
*   import actions (require rewritten or dropped, bundle raised),
*   inspections where a node was looked at but left alone.

Each engine run creates its own logger, so traces never mix between files.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  TYPE_VERDICT = "type_verdict"
  AST_MUTATION = "ast_mutation"
  ANALYSIS_WARNING = "analysis_warning"
  IMPORT_ACTION = "import_action"
  INSPECTION = "inspection"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class _OpenPhase:
  id: str
  name: str
  started: float


class TraceLogger:
  """
  Event recorder for a single conversion.

  Phases nest: an event's ``parent_id`` is the innermost open phase, and a
  phase-end event points back at the phase it closes.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._open: List[_OpenPhase] = []

  @property
  def current_phase(self) -> Optional[str]:
    """ID of the innermost open phase, if any."""
    return self._open[-1].id if self._open else None

  def _emit(
    self,
    kind: TraceEventType,
    description: str,
    metadata: Optional[Dict[str, Any]] = None,
    parent_id: Optional[str] = None,
    event_id: Optional[str] = None,
  ) -> TraceEvent:
    event = TraceEvent(
      id=event_id or uuid.uuid4().hex,
      type=kind,
      timestamp=time.time(),
      description=description,
      parent_id=parent_id if parent_id is not None else self.current_phase,
      metadata=metadata or {},
    )
    self._events.append(event)
    return event

  # --- Phases ---

  def start_phase(self, name: str, description: str = "") -> str:
    """
    Opens a phase nested in the current one.

    Args:
        name: Phase label, e.g. ``Rewrite``.
        description: Free-form detail stored in the metadata.

    Returns:
        str: The phase ID.
    """
    event = self._emit(TraceEventType.PHASE_START, name, {"detail": description})
    self._open.append(_OpenPhase(event.id, name, event.timestamp))
    return event.id

  def end_phase(self) -> None:
    """Closes the innermost phase. A no-op when none is open."""
    if not self._open:
      return
    phase = self._open.pop()
    elapsed_ms = (time.time() - phase.started) * 1000.0
    self._emit(
      TraceEventType.PHASE_END,
      f"End {phase.name}",
      {"duration_ms": round(elapsed_ms, 3)},
      parent_id=phase.id,
    )

  def close_all(self) -> None:
    """Closes every open phase, innermost first (used when a conversion aborts)."""
    while self._open:
      self.end_phase()

  # --- Domain events ---

  def log_verdict(self, parameter: str, annotation: str, source: str, line: int) -> None:
    """Records the annotation chosen for one parameter."""
    self._emit(
      TraceEventType.TYPE_VERDICT,
      f"Typed {parameter}: {annotation}",
      {"parameter": parameter, "annotation": annotation, "source": source, "line": line},
    )

  def log_mutation(self, node_type: str, before: str, after: str) -> None:
    """Records a source edit."""
    self._emit(TraceEventType.AST_MUTATION, f"Rewrote {node_type}", {"before": before, "after": after})

  def log_import(self, action: str, module: str, detail: str = "") -> None:
    """Records an import decision (rewrite, duplicate, bundle)."""
    self._emit(TraceEventType.IMPORT_ACTION, f"{action} '{module}'", {"module": module, "detail": detail})

  def log_warning(self, message: str) -> None:
    self._emit(TraceEventType.ANALYSIS_WARNING, message, {"level": "warning"})

  def log_inspection(self, subject: str, outcome: str, detail: str = "") -> None:
    """Records a node that was examined and left as written."""
    self._emit(TraceEventType.INSPECTION, f"Inspected '{subject}'", {"outcome": outcome, "detail": detail})

  # --- Output ---

  def export(self) -> List[Dict[str, Any]]:
    """
    Serializes the trace.

    Returns:
        List[Dict[str, Any]]: One dict per event, in emission order.
    """
    return [asdict(e) for e in self._events]
