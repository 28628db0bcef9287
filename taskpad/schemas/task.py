"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional

from taskpad.models.enums import Priority, Status, RepeatType
from taskpad.services.repeat_service import repetition_frequency as frequency_of

# JSON en camelCase, attributs Python en snake_case
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
    use_enum_values=True,
)

# borne d'une colonne Integer (PostgreSQL)
INT_MAX = 2**31 - 1


def _title_not_blank(value):
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Title required")
    return value


def _frequency_as_text(value):
    # le formulaire peut envoyer 3 au lieu de "3"
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class TaskCreate(BaseModel):
    model_config = CAMEL_CONFIG

    title: str = Field(min_length=1)
    content: str = ""
    goal: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    status: Status = Status.TODO
    estimate: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    due_date: Optional[datetime] = None
    repetition_frequency: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _title_not_blank(value)

    @field_validator("repetition_frequency", mode="before")
    @classmethod
    def frequency_as_text(cls, value):
        return _frequency_as_text(value)


class TaskUpdate(BaseModel):
    """Body of PUT and PATCH. Only the fields actually sent are applied."""

    model_config = CAMEL_CONFIG

    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    goal: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    estimate: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    due_date: Optional[datetime] = None
    repetition_frequency: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _title_not_blank(value)

    @field_validator("repetition_frequency", mode="before")
    @classmethod
    def frequency_as_text(cls, value):
        return _frequency_as_text(value)


class TaskTimeUpdate(BaseModel):
    """Seconds of a finished pomodoro session."""

    seconds: int = Field(gt=0, le=INT_MAX)


class TaskResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    user_id: int
    title: str
    content: str
    goal: Optional[str]
    completed: bool
    priority: Priority
    status: Status
    estimate: Optional[int]
    due_date: Optional[datetime]
    repeat_type: RepeatType
    repeat_interval: Optional[int]
    total_time_spent: int
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="repetitionFrequency")
    @property
    def repetition_frequency(self) -> str:
        return frequency_of(self.repeat_type, self.repeat_interval)


class DeleteResponse(BaseModel):
    success: bool = True
