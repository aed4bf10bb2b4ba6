from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
import logging

logger = logging.getLogger(__name__)

class ActionKind(str, Enum):
    """Lifecycle step an event label maps onto"""
    STARTED = "started"
    PAUSED = "paused"
    UNPAUSED = "unpaused"
    FINISHED = "finished"

class ActionLabels(BaseModel):
    """Event labels the client emits for each lifecycle step"""
    model_config = ConfigDict(frozen=True)

    started: str = Field(default="started", min_length=1)
    paused: str = Field(default="paused", min_length=1)
    unpaused: str = Field(default="unpaused", min_length=1)
    finished: str = Field(default="finished", min_length=1)

    @property
    def whitelist(self) -> List[str]:
        """Labels passed to the event store when fetching events"""
        return [self.started, self.finished, self.paused, self.unpaused]

    def kind_of(self, label: str) -> Optional[ActionKind]:
        """Map a stored action label to its lifecycle step, None if unknown"""
        return self._lookup().get(label)

    def _lookup(self) -> Dict[str, ActionKind]:
        return {
            self.started: ActionKind.STARTED,
            self.paused: ActionKind.PAUSED,
            self.unpaused: ActionKind.UNPAUSED,
            self.finished: ActionKind.FINISHED,
        }

APPLICATION_ACTIONS = ActionLabels(
    paused="application-paused",
    unpaused="application-unpaused"
)
STUDENT_ACTIONS = ActionLabels()

class AggregationProfile(BaseModel):
    """How one aggregation dimension reads and judges the event stream"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Short name used in logs and output")
    id_field: str = Field(
        pattern="^(user_id|class_id)$",
        description="Event attribute the totals are keyed by"
    )
    output_key: str = Field(
        default="id",
        description="Key holding the entity id in projected records"
    )
    actions: ActionLabels = Field(
        default=APPLICATION_ACTIONS,
        description="Action labels accepted for this dimension"
    )
    max_session_span: Optional[float] = Field(
        default=3600.0,
        gt=0,
        description="Exclusive upper bound on a session's start-to-finish span in seconds, None for unbounded"
    )

# Per-student report: plain pause labels, no span cap
STUDENT_PROFILE = AggregationProfile(
    name="student",
    id_field="user_id",
    output_key="userId",
    actions=STUDENT_ACTIONS,
    max_session_span=None
)

# Per-class report: application pause labels, one hour cap
CLASS_PROFILE = AggregationProfile(
    name="class",
    id_field="class_id",
    actions=APPLICATION_ACTIONS,
    max_session_span=3600.0
)

# User dimension of the combined report shares the class path's rules
COMBINED_STUDENT_PROFILE = AggregationProfile(
    name="student",
    id_field="user_id",
    actions=APPLICATION_ACTIONS,
    max_session_span=3600.0
)
