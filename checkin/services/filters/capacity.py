"""Location and schedule filters."""
from functools import cached_property
from typing import Set
from checkin import db
from checkin.models.attendance import AttendanceRecord
from checkin.models.schedule import Schedule
from checkin.services.filters.base import OpportunityFilter
from checkin.services.opportunities import LocationOpportunity, ScheduleOpportunity

class ThresholdFilter(OpportunityFilter):
    """Rooms at their soft threshold only stay open to people already in them."""

    def is_location_valid(self, location: LocationOpportunity) -> bool:
        if location.capacity is None:
            return True

        if location.current_count < location.capacity:
            return True

        return self.person.guid in location.current_person_guids

class DuplicateCheckInFilter(OpportunityFilter):
    """Hide schedules the person is already checked into today."""

    @cached_property
    def open_schedule_guids(self) -> Set[str]:
        session = self.session or db.session
        rows = session.query(Schedule.guid).join(
            AttendanceRecord, AttendanceRecord.schedule_id == Schedule.id
        ).filter(
            AttendanceRecord.person_id == self.person.id,
            AttendanceRecord.occurrence_date == self.today,
            AttendanceRecord.did_attend.is_(True),
            AttendanceRecord.end_datetime.is_(None)
        ).all()
        return {row.guid for row in rows}

    def is_schedule_valid(self, schedule: ScheduleOpportunity) -> bool:
        if not self.configuration.is_duplicate_check_in_prevented:
            return True

        return schedule.guid not in self.open_schedule_guids
