"""Group filters that need to look people up in the database."""
from functools import cached_property
from typing import Dict, Optional, Set
from checkin import db
from checkin.models.area import AttendanceRule
from checkin.models.data_view import DataView
from checkin.models.group import CheckInGroup, GroupMember, GroupMemberStatus
from checkin.services.filters.base import OpportunityFilter
from checkin.services.opportunities import GroupOpportunity

class MembershipFilter(OpportunityFilter):
    """Areas that require membership only offer groups the person belongs to."""

    @cached_property
    def member_group_guids(self) -> Set[str]:
        session = self.session or db.session
        rows = session.query(CheckInGroup.guid).join(
            GroupMember, GroupMember.group_id == CheckInGroup.id
        ).filter(
            GroupMember.person_id == self.person.id,
            GroupMember.status == GroupMemberStatus.ACTIVE
        ).all()
        return {row.guid for row in rows}

    def is_group_valid(self, group: GroupOpportunity) -> bool:
        if group.check_in_area_data.attendance_rule != AttendanceRule.ALREADY_BELONGS:
            return True

        return group.guid in self.member_group_guids

class DataViewFilter(OpportunityFilter):
    """The person must be in every data view the group is limited to."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._data_view_person_ids: Dict[str, Optional[Set[int]]] = {}

    def is_group_valid(self, group: GroupOpportunity) -> bool:
        for data_view_guid in group.check_in_data.data_view_guids:
            person_ids = self._get_person_ids(data_view_guid)
            if person_ids is not None and self.person.id not in person_ids:
                return False

        return True

    def _get_person_ids(self, data_view_guid: str) -> Optional[Set[int]]:
        """Person ids in the data view, None when it can't restrict anyone."""
        if data_view_guid not in self._data_view_person_ids:
            session = self.session or db.session
            data_view = session.query(DataView).filter_by(guid=data_view_guid).first()
            self._data_view_person_ids[data_view_guid] = (
                data_view.get_person_ids() if data_view is not None else None
            )

        return self._data_view_person_ids[data_view_guid]
