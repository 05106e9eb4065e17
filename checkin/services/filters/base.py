"""Base class for attendee opportunity filters."""
from datetime import date
from typing import Optional
from checkin.services.configuration import ConfigurationData
from checkin.services.items import Attendee, PersonItem
from checkin.services.opportunities import (
    GroupOpportunity, LocationOpportunity, ScheduleOpportunity
)

class OpportunityFilter:
    """Decides which opportunities one attendee may keep.

    Subclasses override only the checks they care about; anything not
    overridden is valid.
    """

    def __init__(
        self,
        configuration: ConfigurationData,
        attendee: Attendee,
        session=None,
        today: Optional[date] = None
    ):
        self.configuration = configuration
        self.attendee = attendee
        self.session = session
        self.today = today or date.today()

    @property
    def person(self) -> PersonItem:
        return self.attendee.person.person

    def is_group_valid(self, group: GroupOpportunity) -> bool:
        return True

    def is_location_valid(self, location: LocationOpportunity) -> bool:
        return True

    def is_schedule_valid(self, schedule: ScheduleOpportunity) -> bool:
        return True
