from dataclasses import asdict, dataclass
from typing import Dict

@dataclass
class AggregationDiagnostics:
    """Counts of anomalies absorbed during one pass over the event stream"""
    events_seen: int = 0
    missing_entity: int = 0      # event has no id for the dimension
    unknown_action: int = 0      # label outside the profile's vocabulary
    duplicate_starts: int = 0
    orphan_pauses: int = 0       # no open session, or already paused
    orphan_unpauses: int = 0     # no open session, or not paused
    orphan_finishes: int = 0
    non_positive_spans: int = 0
    span_cap_rejections: int = 0
    clamped_sessions: int = 0    # pause time exceeded span
    accepted_sessions: int = 0
    open_at_end: int = 0

    @property
    def rejected_sessions(self) -> int:
        return self.non_positive_spans + self.span_cap_rejections

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
