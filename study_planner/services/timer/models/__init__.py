from .timer_state import TimerPhase, TimerSnapshot

__all__ = ["TimerPhase", "TimerSnapshot"]
