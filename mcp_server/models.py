"""Pydantic models for Harvest catalog entries, time entries and tool payloads."""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = ""


class Project(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    code: Optional[str] = None
    is_active: bool = True
    client: Optional[ClientRef] = None


class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    is_active: bool = True


class EntryRef(BaseModel):
    id: int
    name: str = ""
    code: Optional[str] = None


class TimeEntry(BaseModel):
    """A time entry as returned by ``GET /time_entries``."""

    id: int
    spent_date: date
    hours: float = 0.0
    notes: Optional[str] = None
    project: EntryRef
    task: EntryRef

    @property
    def label(self) -> str:
        return self.notes or self.task.name


class TimeEntryRequest(BaseModel):
    """Body of ``POST /time_entries``."""

    project_id: int
    task_id: int
    spent_date: date
    hours: float = Field(gt=0)
    notes: str

    def harvest_body(self) -> dict:
        return {
            "project_id": self.project_id,
            "task_id": self.task_id,
            "spent_date": self.spent_date.isoformat(),
            "hours": self.hours,
            "notes": self.notes,
        }


class InterpretedHints(BaseModel):
    hours: float = Field(default=1.0, gt=0)
    spent_date: date
    project_hint: Optional[str] = None
    task_hint: Optional[str] = None


class CreatedEntry(BaseModel):
    id: int
    project_name: str
    task_name: str
    spent_date: date
    hours: float
    notes: str


class ToolResult(BaseModel):
    text: str
    is_error: bool = False


def format_hours(hours: float) -> str:
    """Render hours the way people write them: 2 rather than 2.0, 1.5, 0.25."""
    return f"{round(hours, 2):g}"
