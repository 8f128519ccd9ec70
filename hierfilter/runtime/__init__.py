"""Runtime support: persisted preferences and the command session."""

from __future__ import annotations

from .session import CommandSession, run_session

__all__ = ["CommandSession", "run_session"]
