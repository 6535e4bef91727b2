"""
Tick loop orchestration and shutdown signalling.
"""

from .signal_handler import SignalHandler
from .tick_orchestrator import TickOrchestrator, TickState

__all__ = [
    "SignalHandler",
    "TickOrchestrator",
    "TickState",
]
