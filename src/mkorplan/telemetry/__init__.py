"""Planning telemetry (JSONL attempt log)."""

from .jsonl import append_jsonl, tail_jsonl
from .planning_logger import PlanningTelemetryLogger

__all__ = ["append_jsonl", "tail_jsonl", "PlanningTelemetryLogger"]
