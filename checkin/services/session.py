"""Check-in session coordinating search, attendees and current attendance."""
import logging
from datetime import datetime, time, timedelta
from typing import Iterable, List, Optional
from checkin.models.area import CheckInArea
from checkin.models.attendance import AttendanceRecord
from checkin.models.campus import Campus, Kiosk
from checkin.models.family import Family
from checkin.models.location import Location
from checkin.models.person import Person
from checkin.models.template import FamilySearchMode
from checkin.services.configuration import ConfigurationData
from checkin.services.conversion_provider import ConversionProvider
from checkin.services.director import CheckInDirector
from checkin.services.filter_provider import FilterProvider
from checkin.services.items import Attendee, CurrentAttendanceItem, FamilyMemberItem, FamilySearchItem
from checkin.services.opportunities import OpportunityCollection
from checkin.services.search_provider import SearchProvider
from checkin.services.selection_provider import SelectionProvider
from checkin.utils.validators import ValidationError

logger = logging.getLogger(__name__)

NO_OPTIONS_MESSAGE = 'There are no classes available for this person.'

class CheckInSession:
    """Runs the family and single person check-in flows for one request."""

    def __init__(self, director: CheckInDirector, configuration: ConfigurationData):
        self.director = director
        self.configuration = configuration
        self.attendees: List[Attendee] = []
        self._set_today(director.now())

    def _set_today(self, now: datetime) -> None:
        self.today = now.date()
        self.conversion = ConversionProvider(self.today, self.director.grade_transition)
        self.search_provider = SearchProvider(
            self.configuration,
            self.director.session,
            self.director.default_max_results,
            self.conversion
        )
        self.filter_provider = FilterProvider(self.configuration, self.director.session, self.today)
        self.selection_provider = SelectionProvider(self.configuration)

    def _use_kiosk_clock(self, kiosk: Optional[Kiosk]) -> None:
        if kiosk is None:
            return
        campus_id = kiosk.get_campus_id()
        campus = self.director.session.get(Campus, campus_id) if campus_id else None
        self._set_today(self.director.now(campus))

    # =================== SEARCH ===================

    def search_for_families(
        self,
        search_term: str,
        search_type: Optional[FamilySearchMode] = None,
        sort_by_campus: Optional[Campus] = None
    ) -> List[FamilySearchItem]:
        """Find families matching the term.

        Raises:
            ValidationError: the term is empty or not valid for the search type.
        """
        if not search_term or not search_term.strip():
            raise ValidationError('Search term must not be empty.')

        search_type = search_type or self.configuration.family_search_type

        try:
            family_ids = self.search_provider.get_family_ids(search_term, search_type, sort_by_campus)
        except ValidationError as e:
            logger.info('Family search rejected: %s', e)
            raise

        return self.search_provider.get_family_search_items(family_ids)

    # =================== ATTENDEES ===================

    def load_attendees(
        self,
        members: List[FamilyMemberItem],
        base_opportunities: OpportunityCollection
    ) -> List[Attendee]:
        """Give each member a clone of the base graph and their recent attendance."""
        cutoff = self.today - timedelta(days=max(1, self.configuration.auto_select_days_back))
        person_ids = [member.person.id for member in members]

        records = []
        if person_ids:
            records = self.director.session.query(AttendanceRecord).filter(
                AttendanceRecord.person_id.in_(person_ids),
                AttendanceRecord.start_datetime >= datetime.combine(cutoff, time.min),
                AttendanceRecord.did_attend.is_(True),
                AttendanceRecord.group_id.isnot(None),
                AttendanceRecord.schedule_id.isnot(None)
            ).order_by(AttendanceRecord.start_datetime).all()

        recent_attendances = [self.conversion.get_recent_attendance(r) for r in records]
        self.attendees = self.conversion.get_attendees(members, base_opportunities, recent_attendances)

        return self.attendees

    def prepare_attendee(self, attendee: Attendee) -> Attendee:
        """Filter the attendee's graph and pick default selections."""
        self.filter_provider.filter_opportunities(attendee)
        self.filter_provider.remove_empty_opportunities(attendee)

        attendee.is_pre_selected = (
            self.configuration.auto_select_days_back > 0 and bool(attendee.recent_attendances)
        )

        if not attendee.opportunities.groups:
            attendee.is_disabled = True
            attendee.disabled_message = NO_OPTIONS_MESSAGE
        else:
            attendee.is_disabled = False
            attendee.disabled_message = None

        if self.configuration.is_slot_auto_selected:
            attendee.selected_opportunity = self.selection_provider.get_default_selection(attendee)

        return attendee

    def load_and_prepare_attendees_for_family(
        self,
        family_guid: str,
        areas: Iterable[CheckInArea],
        kiosk: Optional[Kiosk] = None,
        locations: Optional[Iterable[Location]] = None
    ) -> List[Attendee]:
        family = self.director.session.query(Family).filter_by(guid=family_guid).first()
        if family is None:
            raise ValidationError('Family was not found.')

        self._use_kiosk_clock(kiosk)

        records = self.search_provider.get_family_members_for_family(family)
        members = self.conversion.get_family_member_items(family, records)
        opportunities = self.director.get_all_opportunities(areas, kiosk=kiosk, locations=locations)

        attendees = self.load_attendees(members, opportunities)
        for attendee in attendees:
            self.prepare_attendee(attendee)

        return attendees

    def load_and_prepare_attendees_for_person(
        self,
        person_guid: str,
        family_guid: Optional[str],
        areas: Iterable[CheckInArea],
        kiosk: Optional[Kiosk] = None,
        locations: Optional[Iterable[Location]] = None
    ) -> List[Attendee]:
        session = self.director.session
        person = session.query(Person).filter_by(guid=person_guid).first()
        if person is None:
            raise ValidationError('Person was not found.')

        family = None
        if family_guid:
            family = session.query(Family).filter_by(guid=family_guid).first()
            if family is None:
                raise ValidationError('Family was not found.')

        self._use_kiosk_clock(kiosk)

        membership = self.search_provider.get_person_for_family(person, family)
        if membership is None:
            raise ValidationError('Person was not found in the family.')

        members = [FamilyMemberItem(
            person=self.conversion.get_person_item(person),
            family_guid=membership.family.guid,
            role_order=membership.role_order
        )]
        opportunities = self.director.get_all_opportunities(areas, kiosk=kiosk, locations=locations)

        attendees = self.load_attendees(members, opportunities)
        for attendee in attendees:
            self.prepare_attendee(attendee)

        return attendees

    # =================== CURRENT ATTENDANCE ===================

    def get_current_attendance(self, attendees: Optional[List[Attendee]] = None) -> List[CurrentAttendanceItem]:
        """Today's open check-ins of the attendees that can still be checked out."""
        attendees = self.attendees if attendees is None else attendees
        person_ids = [attendee.person.person.id for attendee in attendees]
        if not person_ids:
            return []

        records = self.director.session.query(AttendanceRecord).filter(
            AttendanceRecord.person_id.in_(person_ids),
            AttendanceRecord.start_datetime >= datetime.combine(self.today, time.min),
            AttendanceRecord.end_datetime.is_(None),
            AttendanceRecord.did_attend.is_(True)
        ).order_by(AttendanceRecord.start_datetime).all()

        items = []
        for record in records:
            group = record.group
            area = group.area if group else None
            location = record.location
            schedule = record.schedule
            if area is None or location is None or schedule is None:
                continue

            campus_id = location.get_campus_id()
            campus = self.director.session.get(Campus, campus_id) if campus_id else None
            if not record.is_currently_checked_in(self.director.now(campus)):
                continue

            items.append(self.conversion.get_current_attendance_item(record, area, group, location, schedule))

        return items

    def get_attendee_bags(self) -> List[dict]:
        return [attendee.to_dict() for attendee in self.attendees]
