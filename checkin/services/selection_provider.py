"""Default selections based on what an attendee checked into last time."""
import logging
from datetime import time
from typing import List, Optional
from checkin.services.configuration import ConfigurationData
from checkin.services.items import Attendee, RecentAttendance
from checkin.services.opportunities import (
    GroupOpportunity, OpportunityCollection, OpportunitySelection
)
from checkin.utils.helpers import distinct

logger = logging.getLogger(__name__)

class SelectionProvider:
    """Picks a default area, group, location and schedule for an attendee.

    The first tier that finds something wins:

    1. the exact group, location and schedule of a previous check-in;
    2. any location and schedule of a previously attended group;
    3. the first location and schedule of the first group available.
    """

    def __init__(self, configuration: ConfigurationData):
        self.configuration = configuration

    def get_default_selection(self, attendee: Attendee) -> Optional[OpportunitySelection]:
        opportunities = attendee.opportunities
        if not opportunities.groups:
            return None

        previous_check_ins = self.get_previous_check_ins(attendee.recent_attendances)

        selection = self._get_exact_match(opportunities, previous_check_ins)
        if selection is None:
            selection = self._get_best_matching_group(opportunities, previous_check_ins)
        if selection is None:
            selection = self._get_any_valid_selection(opportunities)

        return selection

    @staticmethod
    def get_previous_check_ins(recent_attendances: List[RecentAttendance]) -> List[RecentAttendance]:
        """Check-ins from the most recent day, one per schedule.

        Ordered by schedule start time and then newest first, so the
        newest check-in of each schedule is the one kept.
        """
        if not recent_attendances:
            return []

        last_check_in = max(a.start_datetime for a in recent_attendances)
        records = [a for a in recent_attendances if a.start_datetime.date() == last_check_in.date()]

        records.sort(key=lambda a: a.start_datetime, reverse=True)
        records.sort(key=lambda a: (a.schedule_start_time is not None, a.schedule_start_time or time.min))

        return distinct(records, key=lambda a: a.schedule_guid)

    @staticmethod
    def _get_exact_match(
        opportunities: OpportunityCollection,
        previous_check_ins: List[RecentAttendance]
    ) -> Optional[OpportunitySelection]:
        for check_in in previous_check_ins:
            group = opportunities.get_group(check_in.group_guid)
            if group is None or check_in.location_guid not in group.location_guids:
                continue

            area = opportunities.get_area(check_in.area_guid or group.area_guid)
            location = opportunities.get_location(check_in.location_guid)
            if area is None or location is None or check_in.schedule_guid not in location.schedule_guids:
                continue

            schedule = opportunities.get_schedule(check_in.schedule_guid)
            if schedule is None:
                continue

            logger.debug('Selected the exact previous check-in for group %s', group.name)
            return OpportunitySelection(area=area, group=group, location=location, schedule=schedule)

        return None

    @classmethod
    def _get_best_matching_group(
        cls,
        opportunities: OpportunityCollection,
        previous_check_ins: List[RecentAttendance]
    ) -> Optional[OpportunitySelection]:
        for check_in in previous_check_ins:
            group = opportunities.get_group(check_in.group_guid)
            if group is None:
                continue

            selection = cls._get_first_selection_for_group(opportunities, group)
            if selection is not None:
                return selection

        return None

    @classmethod
    def _get_any_valid_selection(cls, opportunities: OpportunityCollection) -> Optional[OpportunitySelection]:
        for group in opportunities.groups:
            selection = cls._get_first_selection_for_group(opportunities, group)
            if selection is not None:
                return selection

        return None

    @staticmethod
    def _get_first_selection_for_group(
        opportunities: OpportunityCollection,
        group: GroupOpportunity
    ) -> Optional[OpportunitySelection]:
        area = opportunities.get_area(group.area_guid)
        if area is None:
            return None

        for location_guid in group.location_guids:
            location = opportunities.get_location(location_guid)
            if location is None:
                continue

            for schedule_guid in location.schedule_guids:
                schedule = opportunities.get_schedule(schedule_guid)
                if schedule is not None:
                    return OpportunitySelection(area=area, group=group, location=location, schedule=schedule)

        return None
