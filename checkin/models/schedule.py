"""Schedule model for check-in times."""
from datetime import datetime, date, timedelta
from typing import Iterator, Optional, Tuple
from checkin import db
from checkin.models.base import BaseModel
import enum

class WeekDay(enum.Enum):
    """Days of the week."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_date(cls, value: date) -> 'WeekDay':
        # date.weekday() starts the week on Monday
        return cls((value.weekday() + 1) % 7)

class Schedule(BaseModel):
    """A weekly (or daily) time slot that check-in opens for.

    Check-in opens ``check_in_start_offset_minutes`` before the start time
    and closes ``check_in_end_offset_minutes`` after it. Without an end
    offset check-in stays open until the schedule itself ends. Without a
    start offset check-in never opens for this schedule.
    """

    __tablename__ = 'schedules'

    name = db.Column(db.String(100), nullable=False)

    # Time Info
    day_of_week = db.Column(db.Enum(WeekDay), nullable=True)  # None = every day
    start_time = db.Column(db.Time, nullable=False)
    duration_minutes = db.Column(db.Integer, nullable=False, default=60)

    # Check-in window
    check_in_start_offset_minutes = db.Column(db.Integer, nullable=True)
    check_in_end_offset_minutes = db.Column(db.Integer, nullable=True)

    # Status
    is_active = db.Column(db.Boolean, default=True)

    def get_occurrence_start(self, on_date: date) -> Optional[datetime]:
        """Start of the occurrence on the given date, if the schedule occurs that day."""
        if self.start_time is None:
            return None
        if self.day_of_week is not None and WeekDay.from_date(on_date) != self.day_of_week:
            return None
        return datetime.combine(on_date, self.start_time)

    def get_schedule_end(self, occurrence_start: datetime) -> datetime:
        return occurrence_start + timedelta(minutes=self.duration_minutes or 0)

    def get_check_in_window(self, occurrence_start: datetime) -> Tuple[datetime, datetime]:
        """Return the (start, end) of check-in for one occurrence."""
        start = occurrence_start - timedelta(minutes=self.check_in_start_offset_minutes or 0)

        if self.check_in_end_offset_minutes is not None:
            end = occurrence_start + timedelta(minutes=self.check_in_end_offset_minutes)
        else:
            end = self.get_schedule_end(occurrence_start)

        return start, end

    def _nearby_occurrences(self, now: datetime) -> Iterator[datetime]:
        # Windows may cross midnight in either direction.
        for day_offset in (-1, 0, 1):
            occurrence = self.get_occurrence_start(now.date() + timedelta(days=day_offset))
            if occurrence is not None:
                yield occurrence

    def was_check_in_active(self, now: datetime) -> bool:
        """Check if the check-in window contains ``now``.

        The window start is inclusive and the end is exclusive.
        """
        if self.check_in_start_offset_minutes is None:
            return False

        for occurrence in self._nearby_occurrences(now):
            start, end = self.get_check_in_window(occurrence)
            if start <= now < end:
                return True

        return False

    def was_schedule_or_check_in_active_for_check_out(self, now: datetime) -> bool:
        """Check if people checked in to this schedule may still check out.

        That is the case from the moment check-in opens until the later of
        the check-in window end and the schedule end.
        """
        for occurrence in self._nearby_occurrences(now):
            schedule_end = self.get_schedule_end(occurrence)

            if self.check_in_start_offset_minutes is not None:
                start, check_in_end = self.get_check_in_window(occurrence)
                end = max(check_in_end, schedule_end)
            else:
                start, end = occurrence, schedule_end

            if start <= now < end:
                return True

        return False

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'guid': self.guid,
            'name': self.name,
            'day': self.day_of_week.name if self.day_of_week else None,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'duration_minutes': self.duration_minutes,
            'check_in_start_offset_minutes': self.check_in_start_offset_minutes,
            'check_in_end_offset_minutes': self.check_in_end_offset_minutes,
            'is_active': self.is_active
        }

    def __repr__(self) -> str:
        return f'<Schedule {self.name}>'
