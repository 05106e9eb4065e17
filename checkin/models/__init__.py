"""Models package with all models."""
from .base import BaseModel
from .campus import Campus, Kiosk
from .location import Location
from .schedule import Schedule, WeekDay
from .person import Person, PhoneNumber, PersonSearchKey, Gender, RecordStatus, SearchKeyType
from .family import Family, FamilyMember, FamilyRole, RelationshipRole, KnownRelationship
from .template import CheckInTemplate, FamilySearchMode, PhoneSearchMode, AutoSelectMode
from .area import CheckInArea, AreaScheduleExclusion, AttendanceRule
from .group import (
    AbilityLevel, GradeDefinition, CheckInGroup, GroupLocation,
    GroupMember, GroupMemberStatus
)
from .data_view import DataView, DataViewPersistedValue
from .attendance import AttendanceRecord, AttendanceStatus

__all__ = [
    'BaseModel', 'Campus', 'Kiosk', 'Location', 'Schedule', 'WeekDay',
    'Person', 'PhoneNumber', 'PersonSearchKey', 'Gender', 'RecordStatus',
    'SearchKeyType', 'Family', 'FamilyMember', 'FamilyRole',
    'RelationshipRole', 'KnownRelationship', 'CheckInTemplate',
    'FamilySearchMode', 'PhoneSearchMode', 'AutoSelectMode', 'CheckInArea',
    'AreaScheduleExclusion', 'AttendanceRule', 'AbilityLevel',
    'GradeDefinition', 'CheckInGroup', 'GroupLocation', 'GroupMember',
    'GroupMemberStatus', 'DataView', 'DataViewPersistedValue',
    'AttendanceRecord', 'AttendanceStatus'
]
