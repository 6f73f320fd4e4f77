# src/logging/context.py - v2
"""Contextual logging support: attach run_id, algorithm and phase to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per clustering run.
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_algorithm: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "algorithm", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    algorithm: str | None = None
    phase: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        algorithm=_algorithm.get(),
        phase=_phase.get(),
    )


def set_run_context(run_id: str) -> None:
    """Set run-level context (called once per facade call)."""
    _run_id.set(run_id)


def set_algorithm_context(algorithm: str, phase: str | None = None) -> None:
    """Set algorithm-level context (called per engine execution)."""
    _algorithm.set(algorithm)
    _phase.set(phase)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _algorithm.set(None)
    _phase.set(None)
