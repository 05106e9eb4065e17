"""Value objects passed between the check-in services and the API layer."""
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import List, Optional
from checkin.models.attendance import AttendanceStatus
from checkin.models.person import Gender
from checkin.services.opportunities import OpportunityCollection, OpportunitySelection
from checkin.utils.helpers import format_datetime

@dataclass
class PersonItem:
    """A person as seen by the kiosk."""

    id: int
    guid: str
    first_name: str
    nick_name: str
    last_name: str
    full_name: str
    gender: Gender = Gender.UNKNOWN
    birth_date: Optional[date] = None
    age: Optional[int] = None
    age_precise: Optional[float] = None
    grade_offset: Optional[int] = None
    photo_url: Optional[str] = None

    def to_dict(self):
        return {
            'guid': self.guid,
            'first_name': self.first_name,
            'nick_name': self.nick_name,
            'last_name': self.last_name,
            'full_name': self.full_name,
            'gender': self.gender.value if self.gender else None,
            'birth_date': format_datetime(self.birth_date),
            'age': self.age,
            'grade_offset': self.grade_offset,
            'photo_url': self.photo_url
        }

@dataclass
class FamilyMemberItem:
    """A person together with the family they are being checked in from."""

    person: PersonItem
    family_guid: str
    role_order: int

    def to_dict(self):
        return {
            'person': self.person.to_dict(),
            'family_guid': self.family_guid,
            'role_order': self.role_order
        }

@dataclass
class FamilySearchItem:
    """A family returned from a search and its members in display order."""

    guid: str
    name: str
    campus_guid: Optional[str] = None
    members: List[FamilyMemberItem] = field(default_factory=list)

    def to_dict(self):
        return {
            'guid': self.guid,
            'name': self.name,
            'campus_guid': self.campus_guid,
            'members': [m.to_dict() for m in self.members]
        }

@dataclass(frozen=True)
class RecentAttendance:
    """A past check-in, used to pick default selections."""

    attendance_id: int
    attendance_guid: str
    status: AttendanceStatus
    start_datetime: datetime
    end_datetime: Optional[datetime]
    person_guid: str
    area_guid: Optional[str]
    group_guid: Optional[str]
    location_guid: Optional[str]
    schedule_guid: Optional[str]
    schedule_start_time: Optional[time] = None

    def to_dict(self):
        return {
            'attendance_guid': self.attendance_guid,
            'status': self.status.value if self.status else None,
            'start_datetime': format_datetime(self.start_datetime),
            'end_datetime': format_datetime(self.end_datetime),
            'area_guid': self.area_guid,
            'group_guid': self.group_guid,
            'location_guid': self.location_guid,
            'schedule_guid': self.schedule_guid
        }

@dataclass
class Attendee:
    """One family member with a private copy of the opportunity graph."""

    person: FamilyMemberItem
    opportunities: OpportunityCollection
    recent_attendances: List[RecentAttendance] = field(default_factory=list)
    last_check_in: Optional[datetime] = None
    is_pre_selected: bool = False
    is_disabled: bool = False
    disabled_message: Optional[str] = None
    selected_opportunity: Optional[OpportunitySelection] = None

    def to_dict(self):
        return {
            'person': self.person.to_dict(),
            'opportunities': self.opportunities.to_dict(),
            'last_check_in': format_datetime(self.last_check_in),
            'is_pre_selected': self.is_pre_selected,
            'is_disabled': self.is_disabled,
            'disabled_message': self.disabled_message,
            'selected_opportunity': (
                self.selected_opportunity.to_dict() if self.selected_opportunity else None
            )
        }

@dataclass
class CurrentAttendanceItem:
    """An open check-in that can still be checked out."""

    attendance_guid: str
    status: AttendanceStatus
    start_datetime: datetime
    person_guid: str
    area_guid: str
    area_name: str
    group_guid: str
    group_name: str
    location_guid: str
    location_name: str
    schedule_guid: str
    schedule_name: str

    def to_dict(self):
        return {
            'attendance_guid': self.attendance_guid,
            'status': self.status.value if self.status else None,
            'start_datetime': format_datetime(self.start_datetime),
            'person_guid': self.person_guid,
            'area': {'guid': self.area_guid, 'name': self.area_name},
            'group': {'guid': self.group_guid, 'name': self.group_name},
            'location': {'guid': self.location_guid, 'name': self.location_name},
            'schedule': {'guid': self.schedule_guid, 'name': self.schedule_name}
        }
