"""Builds the opportunity graph that is valid for anyone at a kiosk right now."""
import logging
from datetime import datetime, date
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple
from checkin.models.area import CheckInArea
from checkin.models.attendance import AttendanceRecord
from checkin.models.campus import Campus, Kiosk
from checkin.models.group import AbilityLevel, CheckInGroup, GroupLocation
from checkin.models.location import Location
from checkin.models.person import Person
from checkin.models.schedule import Schedule
from checkin.services.group_data import CheckInAreaData, CheckInGroupData
from checkin.services.opportunities import (
    AbilityLevelOpportunity, AreaOpportunity, GroupOpportunity,
    LocationOpportunity, OpportunityCollection, ScheduleOpportunity
)
from checkin.utils.validators import ConfigurationError

logger = logging.getLogger(__name__)

Clock = Callable[[Optional[Campus]], datetime]

def campus_now(campus: Optional[Campus] = None) -> datetime:
    """Wall-clock time at the campus, or server local time without one."""
    if campus is None:
        return datetime.now()
    return campus.current_datetime()

class OpportunityBuilder:
    """Resolves areas, groups, locations and schedules into one graph."""

    def __init__(self, session, clock: Clock = campus_now):
        self.session = session
        self.clock = clock
        self._campus_cache: Dict[int, Optional[Campus]] = {}

    def build(
        self,
        areas: Iterable[CheckInArea],
        kiosk: Optional[Kiosk] = None,
        locations: Optional[Iterable[Location]] = None
    ) -> OpportunityCollection:
        """Build every opportunity open right now at the kiosk or locations.

        Raises:
            ConfigurationError: neither a kiosk nor locations were given.
        """
        if kiosk is None and locations is None:
            raise ConfigurationError('Either a kiosk or a set of locations is required.')

        now = self.clock(self._get_campus(kiosk.get_campus_id()) if kiosk else None)
        today = now.date()

        active_areas = [a for a in areas if a.is_active and not a.is_excluded_on(today)]
        active_locations = self._get_active_locations(kiosk, locations)

        group_locations = self._get_group_locations(active_areas, active_locations)
        active_schedules = self._get_active_schedules(group_locations, now)
        active_schedule_ids = {s.id for s in active_schedules}

        # Group location id -> ids of its schedules that are open now
        open_schedule_ids: Dict[int, Set[int]] = {}
        for group_location in group_locations:
            schedule_ids = {s.id for s in group_location.schedules if s.id in active_schedule_ids}
            if schedule_ids:
                open_schedule_ids[group_location.id] = schedule_ids
        group_locations = [gl for gl in group_locations if gl.id in open_schedule_ids]

        used_location_ids = {gl.location_id for gl in group_locations}
        active_locations = [l for l in active_locations if l.id in used_location_ids]

        present_people = self._get_present_people([l.id for l in active_locations], today)

        location_nodes = []
        for location in active_locations:
            person_guids = present_people.get(location.id, set())
            if location.firm_room_threshold is not None and len(person_guids) > location.firm_room_threshold:
                logger.debug('Location %s is over its firm threshold', location.name)
                continue

            schedule_ids = set()
            for group_location in group_locations:
                if group_location.location_id == location.id:
                    schedule_ids |= open_schedule_ids[group_location.id]

            location_nodes.append(LocationOpportunity(
                guid=location.guid,
                name=location.name,
                current_count=len(person_guids),
                capacity=location.soft_room_threshold,
                current_person_guids=set(person_guids),
                schedule_guids=[s.guid for s in active_schedules if s.id in schedule_ids]
            ))

        collection = OpportunityCollection(
            ability_levels=self._get_ability_levels(),
            areas=[AreaOpportunity(guid=a.guid, name=a.name) for a in active_areas],
            groups=self._get_group_nodes(active_areas, group_locations, {l.guid for l in location_nodes}),
            locations=location_nodes,
            schedules=[
                ScheduleOpportunity(
                    guid=s.guid,
                    name=s.name,
                    start_time=s.start_time,
                    check_in_start_offset_minutes=s.check_in_start_offset_minutes,
                    check_in_end_offset_minutes=s.check_in_end_offset_minutes
                )
                for s in active_schedules
            ]
        )
        collection.remove_empty_opportunities()

        return collection

    def _get_campus(self, campus_id: Optional[int]) -> Optional[Campus]:
        if campus_id is None:
            return None
        if campus_id not in self._campus_cache:
            self._campus_cache[campus_id] = self.session.get(Campus, campus_id)
        return self._campus_cache[campus_id]

    def _get_active_locations(
        self,
        kiosk: Optional[Kiosk],
        locations: Optional[Iterable[Location]]
    ) -> List[Location]:
        if locations is not None:
            return [l for l in locations if l.is_active]

        location_ids = kiosk.get_all_location_ids()
        if not location_ids:
            return []

        return self.session.query(Location).filter(
            Location.id.in_(location_ids),
            Location.is_active.is_(True)
        ).order_by(Location.name, Location.id).all()

    def _get_group_locations(
        self,
        areas: List[CheckInArea],
        locations: List[Location]
    ) -> List[GroupLocation]:
        if not areas or not locations:
            return []

        return self.session.query(GroupLocation).join(
            CheckInGroup, GroupLocation.group_id == CheckInGroup.id
        ).filter(
            GroupLocation.location_id.in_([l.id for l in locations]),
            CheckInGroup.area_id.in_([a.id for a in areas]),
            CheckInGroup.is_active.is_(True)
        ).order_by(GroupLocation.order, GroupLocation.id).distinct().all()

    @staticmethod
    def _get_active_schedules(group_locations: List[GroupLocation], now: datetime) -> List[Schedule]:
        schedules: Dict[int, Schedule] = {}
        for group_location in group_locations:
            for schedule in group_location.schedules:
                schedules[schedule.id] = schedule

        active = [s for s in schedules.values() if s.is_active and s.was_check_in_active(now)]
        return sorted(active, key=lambda s: (s.start_time, s.name))

    def _get_present_people(self, location_ids: List[int], today: date) -> Dict[int, Set[str]]:
        """Distinct guids of the people still checked in, per location id."""
        if not location_ids:
            return {}

        rows = self.session.query(
            AttendanceRecord.location_id,
            AttendanceRecord.schedule_id,
            AttendanceRecord.campus_id,
            AttendanceRecord.start_datetime,
            Person.guid
        ).join(Person, AttendanceRecord.person_id == Person.id).filter(
            AttendanceRecord.occurrence_date == today,
            AttendanceRecord.location_id.in_(location_ids),
            AttendanceRecord.did_attend.is_(True),
            AttendanceRecord.end_datetime.is_(None),
            AttendanceRecord.group_id.isnot(None),
            AttendanceRecord.schedule_id.isnot(None)
        ).all()

        # The check-out window only depends on the schedule and the campus clock
        batches: Dict[Tuple[int, Optional[int]], list] = {}
        for row in rows:
            batches.setdefault((row.schedule_id, row.campus_id), []).append(row)

        present: Dict[int, Set[str]] = {}
        for (schedule_id, campus_id), batch in batches.items():
            campus_time = self.clock(self._get_campus(campus_id))
            schedule = self.session.get(Schedule, schedule_id)
            if schedule is not None and not schedule.was_schedule_or_check_in_active_for_check_out(campus_time):
                continue

            for row in batch:
                if row.start_datetime.date() != campus_time.date():
                    continue
                present.setdefault(row.location_id, set()).add(row.guid)

        return present

    def _get_ability_levels(self) -> List[AbilityLevelOpportunity]:
        levels = self.session.query(AbilityLevel).order_by(AbilityLevel.order, AbilityLevel.name).all()
        return [AbilityLevelOpportunity(guid=l.guid, name=l.name) for l in levels]

    @staticmethod
    def _get_group_nodes(
        areas: List[CheckInArea],
        group_locations: List[GroupLocation],
        location_guids: Set[str]
    ) -> List[GroupOpportunity]:
        area_order = {area.id: index for index, area in enumerate(areas)}

        groups: Dict[int, CheckInGroup] = {}
        for group_location in group_locations:
            groups.setdefault(group_location.group_id, group_location.group)

        nodes = []
        for group in sorted(groups.values(), key=lambda g: (area_order[g.area_id], g.name, g.id)):
            group_location_guids = [
                gl.location.guid for gl in group_locations
                if gl.group_id == group.id and gl.location.guid in location_guids
            ]
            nodes.append(GroupOpportunity(
                guid=group.guid,
                name=group.name,
                area_guid=group.area.guid,
                check_in_data=CheckInGroupData.from_group(group),
                check_in_area_data=CheckInAreaData.from_area(group.area),
                ability_level_guid=group.ability_level.guid if group.ability_level else None,
                location_guids=group_location_guids
            ))

        return nodes
