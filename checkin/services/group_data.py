"""Eligibility rules captured from groups and areas when the graph is built.

These snapshots are frozen so every attendee clone can share them.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple
from checkin.models.area import CheckInArea, AttendanceRule
from checkin.models.group import CheckInGroup
from checkin.models.person import Gender

@dataclass(frozen=True)
class CheckInAreaData:
    """Rules that apply to every group of an area."""

    area_guid: str
    attendance_rule: AttendanceRule = AttendanceRule.NONE

    @classmethod
    def from_area(cls, area: CheckInArea) -> 'CheckInAreaData':
        return cls(
            area_guid=area.guid,
            attendance_rule=area.attendance_rule or AttendanceRule.NONE
        )

@dataclass(frozen=True)
class CheckInGroupData:
    """Age, grade, gender and data view rules of one group.

    Grade offsets count the years until graduation, so they shrink as the
    grade grows. The minimum offset therefore comes from the maximum grade
    and the maximum offset from the minimum grade.
    """

    group_guid: str
    minimum_age: Optional[float] = None
    maximum_age: Optional[float] = None
    minimum_birth_date: Optional[date] = None
    maximum_birth_date: Optional[date] = None
    minimum_grade_offset: Optional[int] = None
    maximum_grade_offset: Optional[int] = None
    gender: Optional[Gender] = None
    is_age_required: bool = False
    is_grade_required: bool = False
    data_view_guids: Tuple[str, ...] = ()

    @property
    def has_age_range(self) -> bool:
        return self.minimum_age is not None or self.maximum_age is not None

    @property
    def has_birth_date_range(self) -> bool:
        return self.minimum_birth_date is not None or self.maximum_birth_date is not None

    @property
    def has_grade_range(self) -> bool:
        return self.minimum_grade_offset is not None or self.maximum_grade_offset is not None

    @classmethod
    def from_group(cls, group: CheckInGroup) -> 'CheckInGroupData':
        minimum_grade_offset, maximum_grade_offset = grade_offset_range(
            group.min_grade.grade_offset if group.min_grade else None,
            group.max_grade.grade_offset if group.max_grade else None
        )

        return cls(
            group_guid=group.guid,
            minimum_age=float(group.min_age) if group.min_age is not None else None,
            maximum_age=float(group.max_age) if group.max_age is not None else None,
            minimum_birth_date=group.min_birth_date,
            maximum_birth_date=group.max_birth_date,
            minimum_grade_offset=minimum_grade_offset,
            maximum_grade_offset=maximum_grade_offset,
            gender=group.gender if group.gender != Gender.UNKNOWN else None,
            is_age_required=bool(group.is_age_required),
            is_grade_required=bool(group.is_grade_required),
            data_view_guids=tuple(data_view.guid for data_view in group.data_views)
        )

def grade_offset_range(
    minimum_grade_offset_value: Optional[int],
    maximum_grade_offset_value: Optional[int]
) -> Tuple[Optional[int], Optional[int]]:
    """Turn the (minimum grade, maximum grade) offsets into an offset range.

    >>> grade_offset_range(8, 6)
    (6, 8)
    """
    return maximum_grade_offset_value, minimum_grade_offset_value
