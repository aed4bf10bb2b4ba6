from dataclasses import dataclass
from enum import Enum
from typing import Optional

class PauseState(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"

@dataclass
class OpenSession:
    start_time: float
    paused_time: float = 0.0  # sum of completed pause intervals
    pause_state: PauseState = PauseState.ACTIVE
    pause_start_time: Optional[float] = None

    @property
    def is_paused(self) -> bool:
        return self.pause_state is PauseState.PAUSED

    def pause(self, timestamp: float) -> bool:
        """Enter the paused state, returns False if already paused"""
        if self.is_paused:
            return False
        self.pause_state = PauseState.PAUSED
        self.pause_start_time = timestamp
        return True

    def unpause(self, timestamp: float) -> bool:
        """Close the current pause interval, returns False if not paused"""
        if not self.is_paused:
            return False
        self.paused_time += timestamp - self.pause_start_time
        self.pause_state = PauseState.ACTIVE
        self.pause_start_time = None
        return True

@dataclass(frozen=True)
class FinishedSession:
    entity_id: int
    task_id: str
    start_time: float
    end_time: float
    paused_time: float = 0.0

    @property
    def span(self) -> float:
        """Wall time between start and finish"""
        return self.end_time - self.start_time

    @property
    def active_duration(self) -> float:
        """Span net of paused time, floored at zero"""
        return max(0.0, self.span - self.paused_time)
