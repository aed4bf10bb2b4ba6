"""Project aggregate totals into output records"""
from typing import Dict, List
from pydantic import BaseModel, Field

SECONDS_PER_DAY = 24 * 60 * 60

def format_duration(seconds: float) -> str:
    """Render seconds as a zero-padded HH:MM:SS clock string.

    Fractions are truncated and the clock wraps every 24 hours, so the
    string is for display only. Keep the raw seconds for anything else.
    """
    clock = int(seconds) % SECONDS_PER_DAY
    hours, remainder = divmod(clock, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"

class TimeOnTaskRecord(BaseModel):
    """Total active time for one student or class"""
    id: int
    total_seconds: float = Field(ge=0)

    @property
    def total_time_on_task(self) -> str:
        return format_duration(self.total_seconds)

    def to_output(self, key: str = "id") -> Dict:
        return {key: self.id, "totalTimeOnTask": self.total_time_on_task}

def to_records(totals: Dict[int, float]) -> List[TimeOnTaskRecord]:
    """Records in order of each entity's first contribution"""
    return [
        TimeOnTaskRecord(id=int(entity_id), total_seconds=seconds)
        for entity_id, seconds in totals.items()
    ]

def format_time_on_task_result(totals: Dict[int, float], key: str = "id") -> List[Dict]:
    """Format totals as ``{id, totalTimeOnTask}`` dictionaries"""
    return [record.to_output(key) for record in to_records(totals)]
