"""Compute time-on-task per student and per class"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from time_on_task.config.config import (
    AggregationProfile,
    CLASS_PROFILE,
    COMBINED_STUDENT_PROFILE,
    STUDENT_PROFILE
)
from time_on_task.models.diagnostics import AggregationDiagnostics
from time_on_task.models.student_event import StudentEvent
from time_on_task.services.aggregator import accumulate
from time_on_task.services.database import DatabaseManager
from time_on_task.services.formatting import TimeOnTaskRecord, format_time_on_task_result, to_records
from time_on_task.services.tracker import SessionTracker

logger = logging.getLogger(__name__)

@dataclass
class AggregationResult:
    """Totals for one dimension plus the anomalies absorbed computing them"""
    profile: AggregationProfile
    totals: Dict[int, float] = field(default_factory=dict)
    diagnostics: AggregationDiagnostics = field(default_factory=AggregationDiagnostics)

    @property
    def records(self) -> List[TimeOnTaskRecord]:
        return to_records(self.totals)

    def to_output(self) -> List[Dict]:
        return format_time_on_task_result(self.totals, self.profile.output_key)

@dataclass
class CombinedResult:
    students: AggregationResult
    classes: AggregationResult

    def to_output(self) -> Dict[str, List[Dict]]:
        return {
            "userTimeOnTask": self.students.to_output(),
            "classTimeOnTask": self.classes.to_output()
        }

def process_events(events: Iterable[StudentEvent], profile: AggregationProfile) -> AggregationResult:
    """Fold an arrival-ordered event stream into per-entity active time"""
    result = AggregationResult(profile=profile)
    tracker = SessionTracker(profile, result.diagnostics)

    for event in events:
        finished = tracker.handle(event)
        if finished is not None:
            accumulate(finished, result.totals, profile.max_session_span, result.diagnostics)
    tracker.close()

    logger.info(
        f"Computed {profile.name} time on task: {len(result.totals)} entities, "
        f"{result.diagnostics.accepted_sessions} sessions accepted, "
        f"{result.diagnostics.rejected_sessions} rejected"
    )
    return result

class TimeOnTaskCalculator:
    """Fetches events from the store and runs the aggregation for each report"""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def calculate_per_student(self, profile: AggregationProfile = STUDENT_PROFILE) -> AggregationResult:
        """Time on task for each student"""
        try:
            events = self.db.fetch_student_events(profile.actions.whitelist)
            return process_events(events, profile)
        except Exception as e:
            logger.error(f"Error calculating time on task: {e}")
            raise

    def calculate_per_class(self, profile: AggregationProfile = CLASS_PROFILE) -> AggregationResult:
        """Time on task for each class"""
        try:
            events = self.db.fetch_student_events(profile.actions.whitelist)
            return process_events(events, profile)
        except Exception as e:
            logger.error(f"Error calculating time on task per class: {e}")
            raise

    async def calculate_combined(
        self,
        student_profile: AggregationProfile = COMBINED_STUDENT_PROFILE,
        class_profile: AggregationProfile = CLASS_PROFILE
    ) -> CombinedResult:
        """Time on task for students and classes from a single fetch.

        Both dimensions read the same event list and run in worker threads,
        each with its own tracker and totals.
        """
        try:
            whitelist = sorted(set(student_profile.actions.whitelist) | set(class_profile.actions.whitelist))
            events = await asyncio.to_thread(self.db.fetch_student_events, whitelist)
            students, classes = await asyncio.gather(
                asyncio.to_thread(process_events, events, student_profile),
                asyncio.to_thread(process_events, events, class_profile)
            )
            return CombinedResult(students=students, classes=classes)
        except Exception as e:
            logger.error(f"Error calculating time on task: {e}")
            raise
