"""Attendance model."""
from datetime import datetime, date
from enum import Enum
from typing import Optional
from checkin import db
from checkin.models.base import BaseModel

class AttendanceStatus(Enum):
    """Attendance status enumeration."""
    PENDING = 'pending'
    CHECKED_IN = 'checked_in'
    CHECKED_OUT = 'checked_out'

class AttendanceRecord(BaseModel):
    """One person attending one group occurrence."""

    __tablename__ = 'attendance_records'

    person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=True, index=True)
    group_id = db.Column(db.Integer, db.ForeignKey('checkin_groups.id'), nullable=True)
    location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=True)
    schedule_id = db.Column(db.Integer, db.ForeignKey('schedules.id'), nullable=True)
    campus_id = db.Column(db.Integer, db.ForeignKey('campuses.id'), nullable=True)

    occurrence_date = db.Column(db.Date, nullable=False, index=True)
    start_datetime = db.Column(db.DateTime, nullable=False, default=datetime.now)
    end_datetime = db.Column(db.DateTime, nullable=True)
    did_attend = db.Column(db.Boolean, default=True)
    status = db.Column(db.Enum(AttendanceStatus), nullable=False, default=AttendanceStatus.CHECKED_IN)

    # Relationships
    person = db.relationship('Person')
    group = db.relationship('CheckInGroup')
    location = db.relationship('Location')
    schedule = db.relationship('Schedule')
    campus = db.relationship('Campus')

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.occurrence_date is None and self.start_datetime is not None:
            self.occurrence_date = self.start_datetime.date()

    def is_currently_checked_in(self, now: datetime, today: Optional[date] = None) -> bool:
        """Check if this record still counts as present at ``now``."""
        if self.end_datetime is not None:
            return False

        if self.start_datetime.date() != (today or now.date()):
            return False

        if self.schedule is None:
            return True

        return self.schedule.was_schedule_or_check_in_active_for_check_out(now)

    def __repr__(self) -> str:
        return f'<AttendanceRecord {self.person_id}-{self.group_id}>'
