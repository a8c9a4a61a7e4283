# =============================================================================
# Data Models for Shift Request Calendar
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.constants import (
    DEFAULT_TIME_TYPE, ROLE_ADMIN, ROLE_STAFF, SHIFT_STATUS_REQUESTED, TIME_TYPES,
)


class TimeType(str, Enum):
    """Time slot a shift request covers."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    FULLDAY = "fullday"

    @property
    def label(self) -> str:
        return TIME_TYPES[self.value]["label"]

    @property
    def start(self) -> str:
        return TIME_TYPES[self.value]["start"]

    @property
    def end(self) -> str:
        return TIME_TYPES[self.value]["end"]


class Role(str, Enum):
    STAFF = ROLE_STAFF
    ADMIN = ROLE_ADMIN


class DayKind(str, Enum):
    """Classification of a calendar day, holiday first."""
    HOLIDAY = "holiday"
    SUNDAY = "sunday"
    SATURDAY = "saturday"
    WEEKDAY = "weekday"


class StoredModel(BaseModel):
    """Base for records that live in a persistence collection.

    Records are stored with camelCase keys (``staffId``, ``timeType``) and the
    document id kept outside the body.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str

    def to_record(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dict for a backend write."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})

    @classmethod
    def from_record(cls, doc_id: str, data: Dict[str, Any]):
        return cls.model_validate({**data, "id": doc_id})


class StaffMember(StoredModel):
    name: str
    color: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class Shift(StoredModel):
    """A shift request for one staff member, day and slot."""
    staff_id: str
    date: dt.date
    time_type: TimeType
    notes: str = ""
    status: str = SHIFT_STATUS_REQUESTED
    created_by: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    restored_by: Optional[str] = None
    restored_at: Optional[dt.datetime] = None

    @property
    def key(self) -> Tuple[dt.date, str, TimeType]:
        """The (date, staff, slot) tuple that must stay unique."""
        return (self.date, self.staff_id, self.time_type)

    @property
    def time_range(self) -> str:
        return f"{self.time_type.start}-{self.time_type.end}"


class DeletedShift(StoredModel):
    """Snapshot of a removed shift, kept for manual restoration."""
    shift: Shift
    deleted_at: dt.datetime
    deleted_by: Optional[str] = None


class CustomHoliday(StoredModel):
    """User-added holiday. The document id is the ISO date."""
    date: dt.date
    name: str


class ShiftDraft(BaseModel):
    """Fields of the detailed-entry form before submission."""
    staff_id: str = "1"
    date: Optional[dt.date] = None
    time_type: TimeType = TimeType(DEFAULT_TIME_TYPE)
    notes: str = ""

    model_config = ConfigDict(frozen=True)


class Actor(BaseModel):
    """Who performs a mutation: anonymous session id plus role."""
    uid: str
    role: Role = Role.STAFF

    model_config = ConfigDict(frozen=True)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class DayCell(BaseModel):
    """One cell of the month grid."""
    date: dt.date
    is_current_month: bool
    kind: DayKind
    holiday_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class AppSettings(BaseModel):
    """Runtime settings resolved from environment and Streamlit secrets."""
    backend: str
    data_dir: str
    timezone: str
    firestore_project: Optional[str] = None
    firestore_credentials: Dict[str, Any] = Field(default_factory=dict)
