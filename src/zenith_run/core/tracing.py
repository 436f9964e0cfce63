"""Call tracing and debugging utilities."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OutputMode(Enum):
    """Controls what hosts print to console."""
    QUIET = 0   # Nothing (for tests, scripts, piped output)
    NORMAL = 1  # Results and warnings only (default)
    DEBUG = 2   # Everything + internal details


class TraceLevel(Enum):
    """Level of tracing detail."""
    NONE = 0      # No tracing
    ERRORS = 1    # Only trace failed calls
    CALLS = 2     # Trace every call
    DETAILED = 3  # Trace with full inputs/outputs


def _clip(value: Any, width: int = 80) -> str:
    text = str(value)
    return text[:width] + "..." if len(text) > width else text


@dataclass
class CallTrace:
    """Record of a single component call."""
    call_index: int
    component: str
    mode: str  # "callable" or "observable"
    timestamp: float
    duration_ms: float = 0.0

    # What went in/out
    inputs: dict[str, Any] = field(default_factory=dict)
    outputs: list[Any] = field(default_factory=list)
    output_count: int = 0

    # Diagnostics raised during the call (unhandled outlets, ...)
    notes: list[str] = field(default_factory=list)

    # Status
    success: bool = True
    error: str | None = None
    error_type: str | None = None
    handled: bool = False  # Error was delivered to an error listener

    def note(self, message: str) -> None:
        self.notes.append(message)

    def __str__(self) -> str:
        status = "✓" if self.success else "✗"
        time_str = f"{self.duration_ms:.1f}ms" if self.duration_ms > 0 else ""
        return (
            f"{status} Call {self.call_index}: {self.component} ({self.mode}) "
            f"outputs={self.output_count} {time_str}"
        ).rstrip()

    def format_detailed(self) -> str:
        """Format trace with full details."""
        lines = [str(self)]

        if self.inputs:
            lines.append("  Inputs:")
            for k, v in self.inputs.items():
                lines.append(f"    {k}: {_clip(v)}")

        if self.outputs:
            lines.append("  Outputs:")
            for i, v in enumerate(self.outputs):
                lines.append(f"    [{i}] {_clip(v)}")

        for note in self.notes:
            lines.append(f"  Note: {note}")

        if self.error:
            suffix = " (handled by error listener)" if self.handled else ""
            lines.append(f"  Error: {self.error_type}: {self.error}{suffix}")

        return "\n".join(lines)


@dataclass
class ExecutionTracer:
    """Collects call traces for components executed by the engine."""
    level: TraceLevel = TraceLevel.ERRORS
    traces: list[CallTrace] = field(default_factory=list)
    _call_counter: int = 0

    def start_call(
        self,
        component: str,
        mode: str,
        inputs: dict[str, Any] | None = None,
    ) -> CallTrace:
        """Start tracing a call."""
        trace = CallTrace(
            call_index=self._call_counter,
            component=component,
            mode=mode,
            timestamp=time.time(),
            inputs=dict(inputs or {}) if self.level == TraceLevel.DETAILED else {},
        )
        self._call_counter += 1
        return trace

    def record_output(self, trace: CallTrace, output: Any) -> None:
        trace.output_count += 1
        if self.level == TraceLevel.DETAILED:
            trace.outputs.append(output)

    def end_call(
        self,
        trace: CallTrace,
        error: BaseException | None = None,
        handled: bool = False,
    ) -> None:
        """Complete a call trace."""
        trace.duration_ms = (time.time() - trace.timestamp) * 1000

        if error is not None:
            trace.success = False
            trace.error = str(error)
            trace.error_type = type(error).__name__
            trace.handled = handled

        # Only store based on trace level
        if self.level == TraceLevel.NONE:
            return
        elif self.level == TraceLevel.ERRORS and trace.success:
            return

        self.traces.append(trace)

    def get_recent_traces(self, count: int = 10) -> list[CallTrace]:
        """Get the most recent traces."""
        return self.traces[-count:]

    def get_error_traces(self) -> list[CallTrace]:
        """Get all traces with errors."""
        return [t for t in self.traces if not t.success]

    def format_summary(self) -> str:
        """Format a summary of all traces."""
        if not self.traces:
            return "No traces recorded"

        total = len(self.traces)
        errors = len(self.get_error_traces())
        handled = len([t for t in self.traces if t.handled])

        lines = [
            "Call Trace Summary:",
            f"  Total calls traced: {total}",
            f"  Errors: {errors}",
            f"  Handled by listeners: {handled}",
        ]

        if errors > 0:
            lines.append("\nFailed calls:")
            for t in self.get_error_traces():
                lines.append(f"  {t}")

        return "\n".join(lines)
