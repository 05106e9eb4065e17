"""Check-in areas and their date exclusions."""
from datetime import date
from enum import Enum
from checkin import db
from checkin.models.base import BaseModel

class AttendanceRule(Enum):
    """Who may check into the groups of an area."""
    NONE = 'none'
    ALREADY_BELONGS = 'already_belongs'
    ADD_ON_CHECK_IN = 'add_on_check_in'

class CheckInArea(BaseModel):
    """A program grouping such as "Kids" or "Students"."""

    __tablename__ = 'checkin_areas'

    name = db.Column(db.String(100), nullable=False)
    template_id = db.Column(db.Integer, db.ForeignKey('checkin_templates.id'), nullable=True)
    takes_attendance = db.Column(db.Boolean, default=True)
    attendance_rule = db.Column(db.Enum(AttendanceRule), nullable=False, default=AttendanceRule.NONE)
    is_active = db.Column(db.Boolean, default=True)

    schedule_exclusions = db.relationship('AreaScheduleExclusion', backref='area', lazy='subquery')
    groups = db.relationship('CheckInGroup', backref='area', lazy='dynamic')

    def is_excluded_on(self, day: date) -> bool:
        """Check if an exclusion closes this area on the given day."""
        return any(e.start_date <= day <= e.end_date for e in self.schedule_exclusions)

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'guid': self.guid,
            'name': self.name,
            'attendance_rule': self.attendance_rule.value if self.attendance_rule else None
        }

    def __repr__(self) -> str:
        return f'<CheckInArea {self.name}>'

class AreaScheduleExclusion(BaseModel):
    """A date range during which an area does not run (e.g. holidays)."""

    __tablename__ = 'area_schedule_exclusions'

    area_id = db.Column(db.Integer, db.ForeignKey('checkin_areas.id'), nullable=False)
    title = db.Column(db.String(100), nullable=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)

    def __repr__(self) -> str:
        return f'<AreaScheduleExclusion {self.start_date}..{self.end_date}>'
