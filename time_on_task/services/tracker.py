"""Reconstruct task sessions from an arrival-ordered event stream"""
import logging
from typing import Dict, Optional, Tuple

from time_on_task.config.config import ActionKind, AggregationProfile
from time_on_task.models.diagnostics import AggregationDiagnostics
from time_on_task.models.session import FinishedSession, OpenSession
from time_on_task.models.student_event import StudentEvent

logger = logging.getLogger(__name__)

SessionKey = Tuple[int, str]

class SessionTracker:
    """Tracks the open session of every (entity, task) pair for one dimension.

    Events must be fed in arrival order. Inconsistent sequences (a second
    start, a pause with nothing open, a finish without a start) are absorbed
    as no-ops and only show up in the diagnostics counters.
    """

    def __init__(self, profile: AggregationProfile,
                 diagnostics: Optional[AggregationDiagnostics] = None):
        self.profile = profile
        self.diagnostics = diagnostics or AggregationDiagnostics()
        self.sessions: Dict[SessionKey, OpenSession] = {}

    def handle(self, event: StudentEvent) -> Optional[FinishedSession]:
        """Apply one event, returning the session it finished if any"""
        self.diagnostics.events_seen += 1

        entity_id = event.entity_id(self.profile.id_field)
        if entity_id is None:
            self.diagnostics.missing_entity += 1
            return None

        kind = self.profile.actions.kind_of(event.action)
        if kind is None:
            self.diagnostics.unknown_action += 1
            return None

        key = (entity_id, event.task_id)
        timestamp = event.client_time

        if kind is ActionKind.STARTED:
            self._start(key, timestamp)
        elif kind is ActionKind.PAUSED:
            self._pause(key, timestamp)
        elif kind is ActionKind.UNPAUSED:
            self._unpause(key, timestamp)
        elif kind is ActionKind.FINISHED:
            return self._finish(key, timestamp)
        return None

    def _start(self, key: SessionKey, timestamp: float) -> None:
        if key in self.sessions:
            self.diagnostics.duplicate_starts += 1
            return
        self.sessions[key] = OpenSession(start_time=timestamp)

    def _pause(self, key: SessionKey, timestamp: float) -> None:
        session = self.sessions.get(key)
        if session is None or not session.pause(timestamp):
            self.diagnostics.orphan_pauses += 1

    def _unpause(self, key: SessionKey, timestamp: float) -> None:
        session = self.sessions.get(key)
        if session is None or not session.unpause(timestamp):
            self.diagnostics.orphan_unpauses += 1

    def _finish(self, key: SessionKey, timestamp: float) -> Optional[FinishedSession]:
        session = self.sessions.pop(key, None)
        if session is None:
            self.diagnostics.orphan_finishes += 1
            return None
        entity_id, task_id = key
        return FinishedSession(
            entity_id=entity_id,
            task_id=task_id,
            start_time=session.start_time,
            end_time=timestamp,
            paused_time=session.paused_time
        )

    def close(self) -> int:
        """Record sessions still open at end of stream and return their count"""
        self.diagnostics.open_at_end = len(self.sessions)
        if self.sessions:
            logger.debug(f"{len(self.sessions)} {self.profile.name} sessions never finished")
        return self.diagnostics.open_at_end
