from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class StudentEvent(BaseModel):
    """One row of the student event log"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = Field(
        default=None,
        description="Arrival sequence assigned by the event store"
    )
    institution_id: Optional[int] = Field(default=None, alias="institutionId")
    user_id: Optional[int] = Field(default=None, alias="userId")
    class_id: Optional[int] = Field(default=None, alias="classId")
    task_id: Optional[str] = Field(default=None, alias="taskId")
    action: str = Field(description="Lifecycle action label")
    client_time: Optional[float] = Field(
        default=None,
        description="Client-reported timestamp in seconds"
    )

    @field_validator("task_id", mode="before")
    @classmethod
    def task_id_as_string(cls, value):
        """Task ids are stored as text even when clients send numbers"""
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def entity_id(self, id_field: str) -> Optional[int]:
        """Return the aggregation subject for the given dimension"""
        return getattr(self, id_field)
