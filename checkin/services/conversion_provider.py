"""Converts database records into check-in items."""
from datetime import date
from typing import Iterable, List, Optional, Tuple
from checkin.models.attendance import AttendanceRecord
from checkin.models.family import Family, FamilyMember
from checkin.models.person import Gender, Person
from checkin.services.items import (
    Attendee, CurrentAttendanceItem, FamilyMemberItem, PersonItem, RecentAttendance
)
from checkin.services.opportunities import OpportunityCollection
from checkin.utils.helpers import distinct

GENDER_ORDER = {
    Gender.UNKNOWN: 0,
    Gender.MALE: 1,
    Gender.FEMALE: 2,
}

class ConversionProvider:
    """Builds people, attendees and attendance items."""

    def __init__(self, today: Optional[date] = None, grade_transition: Tuple[int, int] = (6, 1)):
        self.today = today or date.today()
        self.grade_transition = grade_transition

    def get_person_item(self, person: Person) -> PersonItem:
        return PersonItem(
            id=person.id,
            guid=person.guid,
            first_name=person.first_name,
            nick_name=person.nick_name or person.first_name,
            last_name=person.last_name,
            full_name=person.full_name,
            gender=person.gender or Gender.UNKNOWN,
            birth_date=person.birth_date,
            age=person.get_age(self.today),
            age_precise=person.get_age_precise(self.today),
            grade_offset=person.get_grade_offset(self.today, self.grade_transition),
            photo_url=person.photo_url
        )

    def get_family_search_members(self, family: Family, members: Iterable[FamilyMember]) -> List[FamilyMemberItem]:
        """Family members ordered by role, birth date, gender then nick name."""
        ordered = sorted(members, key=lambda m: (
            m.role_order,
            m.person.birth_date is not None,
            m.person.birth_date or date.min,
            GENDER_ORDER.get(m.person.gender, 0),
            m.person.nick_name or ''
        ))

        return [
            FamilyMemberItem(
                person=self.get_person_item(m.person),
                family_guid=family.guid,
                role_order=m.role_order
            )
            for m in ordered
        ]

    def get_family_member_items(self, family: Family, records) -> List[FamilyMemberItem]:
        """Convert (person, role order) records for checking in a family.

        The first record of a person wins, so immediate family members must
        come before people reached through a "can check in" relationship.
        People whose primary family is this family are listed first.
        """
        def family_guid_of(person: Person) -> str:
            return person.primary_family.guid if person.primary_family else family.guid

        unique = distinct(records, key=lambda r: r.person.guid)
        ordered = sorted(unique, key=lambda r: (family_guid_of(r.person) != family.guid, r.role_order))

        return [
            FamilyMemberItem(
                person=self.get_person_item(record.person),
                family_guid=family_guid_of(record.person),
                role_order=record.role_order
            )
            for record in ordered
        ]

    @staticmethod
    def get_recent_attendance(record: AttendanceRecord) -> RecentAttendance:
        group = record.group
        return RecentAttendance(
            attendance_id=record.id,
            attendance_guid=record.guid,
            status=record.status,
            start_datetime=record.start_datetime,
            end_datetime=record.end_datetime,
            person_guid=record.person.guid,
            area_guid=group.area.guid if group and group.area else None,
            group_guid=group.guid if group else None,
            location_guid=record.location.guid if record.location else None,
            schedule_guid=record.schedule.guid if record.schedule else None,
            schedule_start_time=record.schedule.start_time if record.schedule else None
        )

    @staticmethod
    def get_attendees(
        members: List[FamilyMemberItem],
        base_opportunities: OpportunityCollection,
        recent_attendances: List[RecentAttendance]
    ) -> List[Attendee]:
        """Wrap every member with a private clone of the base graph."""
        attendees = []

        for member in members:
            history = [a for a in recent_attendances if a.person_guid == member.person.guid]
            attendees.append(Attendee(
                person=member,
                opportunities=base_opportunities.clone(),
                recent_attendances=history,
                last_check_in=max((a.start_datetime for a in history), default=None)
            ))

        return attendees

    @staticmethod
    def get_current_attendance_item(record: AttendanceRecord, area, group, location, schedule) -> CurrentAttendanceItem:
        return CurrentAttendanceItem(
            attendance_guid=record.guid,
            status=record.status,
            start_datetime=record.start_datetime,
            person_guid=record.person.guid,
            area_guid=area.guid,
            area_name=area.name,
            group_guid=group.guid,
            group_name=group.name,
            location_guid=location.guid,
            location_name=location.name,
            schedule_guid=schedule.guid,
            schedule_name=schedule.name
        )
