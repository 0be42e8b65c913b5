"""Runtime wiring for the interactive session."""

from .app import run_app, run_tutorial_only
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

__all__ = [
    "run_app",
    "run_tutorial_only",
    "run_main_loop",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
]
