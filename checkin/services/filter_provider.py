"""Runs the opportunity filters over an attendee's graph."""
import logging
from datetime import date
from typing import List, Optional, Type
from checkin.services.configuration import ConfigurationData
from checkin.services.filters import (
    OpportunityFilter, AgeFilter, GradeFilter, GenderFilter, MembershipFilter,
    DataViewFilter, ThresholdFilter, DuplicateCheckInFilter
)
from checkin.services.items import Attendee

logger = logging.getLogger(__name__)

GROUP_FILTERS: List[Type[OpportunityFilter]] = [
    AgeFilter,
    GradeFilter,
    GenderFilter,
    MembershipFilter,
    DataViewFilter,
]

LOCATION_FILTERS: List[Type[OpportunityFilter]] = [
    ThresholdFilter,
]

SCHEDULE_FILTERS: List[Type[OpportunityFilter]] = [
    DuplicateCheckInFilter,
]

class FilterProvider:
    """Removes the opportunities an attendee is not allowed to select."""

    def __init__(
        self,
        configuration: ConfigurationData,
        session=None,
        today: Optional[date] = None,
        group_filters: List[Type[OpportunityFilter]] = None,
        location_filters: List[Type[OpportunityFilter]] = None,
        schedule_filters: List[Type[OpportunityFilter]] = None
    ):
        self.configuration = configuration
        self.session = session
        self.today = today
        self.group_filters = GROUP_FILTERS if group_filters is None else group_filters
        self.location_filters = LOCATION_FILTERS if location_filters is None else location_filters
        self.schedule_filters = SCHEDULE_FILTERS if schedule_filters is None else schedule_filters

    def _create(self, filter_types: List[Type[OpportunityFilter]], attendee: Attendee) -> List[OpportunityFilter]:
        return [f(self.configuration, attendee, self.session, self.today) for f in filter_types]

    def filter_opportunities(self, attendee: Attendee) -> None:
        """Filter the attendee's own graph in place."""
        opportunities = attendee.opportunities

        filters = self._create(self.group_filters, attendee)
        opportunities.groups = [
            group for group in opportunities.groups
            if all(f.is_group_valid(group) for f in filters)
        ]

        filters = self._create(self.location_filters, attendee)
        opportunities.locations = [
            location for location in opportunities.locations
            if all(f.is_location_valid(location) for f in filters)
        ]

        filters = self._create(self.schedule_filters, attendee)
        opportunities.schedules = [
            schedule for schedule in opportunities.schedules
            if all(f.is_schedule_valid(schedule) for f in filters)
        ]

        logger.debug(
            '%s has %d groups after filtering',
            attendee.person.person.full_name, len(opportunities.groups)
        )

    def remove_empty_opportunities(self, attendee: Attendee) -> None:
        attendee.opportunities.remove_empty_opportunities()
