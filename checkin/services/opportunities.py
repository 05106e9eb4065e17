"""In-memory opportunity graph.

Nodes reference each other by guid only. Groups list the locations they
may use and locations list the schedules open there, so the graph can be
pruned and cloned without chasing object references.
"""
import logging
from dataclasses import dataclass, field
from datetime import time
from typing import List, Optional, Set
from checkin.services.group_data import CheckInAreaData, CheckInGroupData

logger = logging.getLogger(__name__)

@dataclass
class AbilityLevelOpportunity:
    guid: str
    name: str

    def clone(self) -> 'AbilityLevelOpportunity':
        return AbilityLevelOpportunity(guid=self.guid, name=self.name)

    def to_dict(self):
        return {'guid': self.guid, 'name': self.name}

@dataclass
class AreaOpportunity:
    guid: str
    name: str

    def clone(self) -> 'AreaOpportunity':
        return AreaOpportunity(guid=self.guid, name=self.name)

    def to_dict(self):
        return {'guid': self.guid, 'name': self.name}

@dataclass
class GroupOpportunity:
    """A group and the locations it may be checked into."""

    guid: str
    name: str
    area_guid: str
    check_in_data: CheckInGroupData
    check_in_area_data: CheckInAreaData
    ability_level_guid: Optional[str] = None
    location_guids: List[str] = field(default_factory=list)

    def clone(self) -> 'GroupOpportunity':
        return GroupOpportunity(
            guid=self.guid,
            name=self.name,
            area_guid=self.area_guid,
            check_in_data=self.check_in_data,
            check_in_area_data=self.check_in_area_data,
            ability_level_guid=self.ability_level_guid,
            location_guids=list(self.location_guids)
        )

    def to_dict(self):
        return {
            'guid': self.guid,
            'name': self.name,
            'area_guid': self.area_guid,
            'ability_level_guid': self.ability_level_guid,
            'location_guids': list(self.location_guids)
        }

@dataclass
class LocationOpportunity:
    """A room with its live head count and the schedules open there."""

    guid: str
    name: str
    current_count: int = 0
    capacity: Optional[int] = None
    current_person_guids: Set[str] = field(default_factory=set)
    schedule_guids: List[str] = field(default_factory=list)

    def clone(self) -> 'LocationOpportunity':
        return LocationOpportunity(
            guid=self.guid,
            name=self.name,
            current_count=self.current_count,
            capacity=self.capacity,
            current_person_guids=set(self.current_person_guids),
            schedule_guids=list(self.schedule_guids)
        )

    def to_dict(self):
        return {
            'guid': self.guid,
            'name': self.name,
            'current_count': self.current_count,
            'capacity': self.capacity,
            'schedule_guids': list(self.schedule_guids)
        }

@dataclass
class ScheduleOpportunity:
    guid: str
    name: str
    start_time: Optional[time] = None
    check_in_start_offset_minutes: Optional[int] = None
    check_in_end_offset_minutes: Optional[int] = None

    def clone(self) -> 'ScheduleOpportunity':
        return ScheduleOpportunity(
            guid=self.guid,
            name=self.name,
            start_time=self.start_time,
            check_in_start_offset_minutes=self.check_in_start_offset_minutes,
            check_in_end_offset_minutes=self.check_in_end_offset_minutes
        )

    def to_dict(self):
        return {
            'guid': self.guid,
            'name': self.name,
            'start_time': self.start_time.isoformat() if self.start_time else None
        }

@dataclass
class OpportunitySelection:
    """One concrete choice of area, group, location and schedule."""

    area: AreaOpportunity
    group: GroupOpportunity
    location: LocationOpportunity
    schedule: ScheduleOpportunity

    def to_dict(self):
        return {
            'area': self.area.to_dict(),
            'group': self.group.to_dict(),
            'location': self.location.to_dict(),
            'schedule': self.schedule.to_dict()
        }

@dataclass
class OpportunityCollection:
    """Everything that can be checked into, for anyone or for one attendee."""

    ability_levels: List[AbilityLevelOpportunity] = field(default_factory=list)
    areas: List[AreaOpportunity] = field(default_factory=list)
    groups: List[GroupOpportunity] = field(default_factory=list)
    locations: List[LocationOpportunity] = field(default_factory=list)
    schedules: List[ScheduleOpportunity] = field(default_factory=list)

    def clone(self) -> 'OpportunityCollection':
        """Deep copy that shares no mutable list or set with this one."""
        return OpportunityCollection(
            ability_levels=[a.clone() for a in self.ability_levels],
            areas=[a.clone() for a in self.areas],
            groups=[g.clone() for g in self.groups],
            locations=[l.clone() for l in self.locations],
            schedules=[s.clone() for s in self.schedules]
        )

    def get_area(self, guid: Optional[str]) -> Optional[AreaOpportunity]:
        return _find(self.areas, guid)

    def get_group(self, guid: Optional[str]) -> Optional[GroupOpportunity]:
        return _find(self.groups, guid)

    def get_location(self, guid: Optional[str]) -> Optional[LocationOpportunity]:
        return _find(self.locations, guid)

    def get_schedule(self, guid: Optional[str]) -> Optional[ScheduleOpportunity]:
        return _find(self.schedules, guid)

    def remove_empty_opportunities(self) -> None:
        """Remove nodes left without anything to check into.

        Runs bottom-up: schedules of locations, locations, schedules,
        locations of groups, groups, then areas. Every "referenced by" set
        is derived again from the current state, so calling this twice
        changes nothing the second time.
        """
        schedule_guids = {s.guid for s in self.schedules}
        for location in self.locations:
            location.schedule_guids = [g for g in location.schedule_guids if g in schedule_guids]

        referenced_location_guids = {g for group in self.groups for g in group.location_guids}
        self.locations = [
            l for l in self.locations
            if l.schedule_guids and l.guid in referenced_location_guids
        ]

        referenced_schedule_guids = {g for location in self.locations for g in location.schedule_guids}
        self.schedules = [s for s in self.schedules if s.guid in referenced_schedule_guids]

        location_guids = {l.guid for l in self.locations}
        for group in self.groups:
            group.location_guids = [g for g in group.location_guids if g in location_guids]
        self.groups = [g for g in self.groups if g.location_guids]

        referenced_area_guids = {g.area_guid for g in self.groups}
        self.areas = [a for a in self.areas if a.guid in referenced_area_guids]

        logger.debug(
            'Pruned opportunities to %d areas, %d groups, %d locations, %d schedules',
            len(self.areas), len(self.groups), len(self.locations), len(self.schedules)
        )

    def to_dict(self):
        return {
            'ability_levels': [a.to_dict() for a in self.ability_levels],
            'areas': [a.to_dict() for a in self.areas],
            'groups': [g.to_dict() for g in self.groups],
            'locations': [l.to_dict() for l in self.locations],
            'schedules': [s.to_dict() for s in self.schedules]
        }

def _find(items: list, guid: Optional[str]):
    if guid is None:
        return None
    return next((item for item in items if item.guid == guid), None)
