"""
Tests for the Tracing System.
"""

import json

from typify.core.tracer import TraceEventType, TraceLogger


def test_phase_nesting():
  logger = TraceLogger()

  p1 = logger.start_phase("Parent")
  logger.start_phase("Child")
  logger.end_phase()  # End Child
  logger.end_phase()  # End Parent

  events = logger.export()

  # 4 events: Start P, Start C, End C, End P
  assert len(events) == 4
  assert events[0]["type"] == TraceEventType.PHASE_START
  assert events[1]["parent_id"] == p1
  assert events[2]["type"] == TraceEventType.PHASE_END


def test_close_all_ends_open_phases():
  logger = TraceLogger()
  logger.start_phase("A")
  logger.start_phase("B")
  logger.close_all()
  logger.end_phase()  # no-op when nothing is open

  types = [e["type"] for e in logger.export()]
  assert types.count(TraceEventType.PHASE_END) == 2


def test_verdict_metadata():
  logger = TraceLogger()
  phase = logger.start_phase("Rewrite")
  logger.log_verdict("name", "string", "usage", 3)

  event = logger.export()[1]
  assert event["type"] == TraceEventType.TYPE_VERDICT
  assert event["parent_id"] == phase
  assert event["metadata"] == {"parameter": "name", "annotation": "string", "source": "usage", "line": 3}


def test_export_is_json_serializable():
  logger = TraceLogger()
  logger.log_import("Rewrote require", "fs", "fs")
  logger.log_mutation("variable_declaration", "var a", "const a")
  logger.log_warning("careful")
  logger.log_inspection("x", "skipped")

  dumped = json.loads(json.dumps(logger.export()))
  assert [e["type"] for e in dumped] == ["import_action", "ast_mutation", "analysis_warning", "inspection"]
