"""Judge finished sessions and accumulate active time per entity"""
import logging
from typing import Dict, Optional

from time_on_task.models.diagnostics import AggregationDiagnostics
from time_on_task.models.session import FinishedSession

logger = logging.getLogger(__name__)

def is_valid_session(session: FinishedSession, max_session_span: Optional[float] = None) -> bool:
    """A session counts only if it moves forward in time and stays under the span cap"""
    if session.end_time <= session.start_time:
        return False
    if max_session_span is not None and session.span >= max_session_span:
        return False
    return True

def accumulate(
    session: FinishedSession,
    totals: Dict[int, float],
    max_session_span: Optional[float] = None,
    diagnostics: Optional[AggregationDiagnostics] = None
) -> Dict[int, float]:
    """Add a finished session's active duration to its entity total.

    Invalid sessions leave ``totals`` untouched. The mapping is updated in
    place and returned.
    """
    if session.end_time <= session.start_time:
        logger.debug(
            f"Dropping session {session.entity_id}/{session.task_id}: "
            f"finish {session.end_time} not after start {session.start_time}"
        )
        if diagnostics:
            diagnostics.non_positive_spans += 1
        return totals

    if not is_valid_session(session, max_session_span):
        logger.debug(
            f"Dropping session {session.entity_id}/{session.task_id}: "
            f"span {session.span:.1f}s exceeds cap {max_session_span}s"
        )
        if diagnostics:
            diagnostics.span_cap_rejections += 1
        return totals

    if session.paused_time > session.span and diagnostics:
        diagnostics.clamped_sessions += 1

    totals[session.entity_id] = totals.get(session.entity_id, 0.0) + session.active_duration
    if diagnostics:
        diagnostics.accepted_sessions += 1
    return totals
