"""Immutable snapshot of a check-in template's rules."""
from dataclasses import dataclass, field
from typing import FrozenSet, Optional
from checkin.models.template import (
    CheckInTemplate, FamilySearchMode, PhoneSearchMode, AutoSelectMode
)

@dataclass(frozen=True)
class ConfigurationData:
    """The settings that drive searching, filtering and default selection."""

    template_guid: Optional[str] = None
    family_search_type: FamilySearchMode = FamilySearchMode.NAME_AND_PHONE
    phone_search_type: PhoneSearchMode = PhoneSearchMode.ENDS_WITH
    minimum_phone_number_length: Optional[int] = 4
    maximum_phone_number_length: Optional[int] = 10
    maximum_number_of_results: Optional[int] = None
    is_inactive_person_excluded: bool = False
    auto_select: AutoSelectMode = AutoSelectMode.PEOPLE_ONLY
    auto_select_days_back: int = 10
    can_check_in_known_relationship_role_guids: FrozenSet[str] = field(default_factory=frozenset)
    is_duplicate_check_in_prevented: bool = True

    @property
    def is_slot_auto_selected(self) -> bool:
        return self.auto_select == AutoSelectMode.PEOPLE_AND_AREA_GROUP_LOCATION

    @classmethod
    def from_template(cls, template: CheckInTemplate) -> 'ConfigurationData':
        """Build the snapshot from a persisted template."""
        return cls(
            template_guid=template.guid,
            family_search_type=template.family_search_type or FamilySearchMode.NAME_AND_PHONE,
            phone_search_type=template.phone_search_type or PhoneSearchMode.ENDS_WITH,
            minimum_phone_number_length=template.minimum_phone_number_length,
            maximum_phone_number_length=template.maximum_phone_number_length,
            maximum_number_of_results=template.maximum_number_of_results,
            is_inactive_person_excluded=bool(template.prevent_inactive_people),
            auto_select=template.auto_select or AutoSelectMode.OFF,
            auto_select_days_back=template.auto_select_days_back or 0,
            can_check_in_known_relationship_role_guids=frozenset(
                role.guid for role in template.can_check_in_roles
            ),
            is_duplicate_check_in_prevented=bool(template.prevent_duplicate_check_in)
        )

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'template_guid': self.template_guid,
            'family_search_type': self.family_search_type.value,
            'phone_search_type': self.phone_search_type.value,
            'minimum_phone_number_length': self.minimum_phone_number_length,
            'maximum_phone_number_length': self.maximum_phone_number_length,
            'maximum_number_of_results': self.maximum_number_of_results,
            'is_inactive_person_excluded': self.is_inactive_person_excluded,
            'auto_select': self.auto_select.value,
            'auto_select_days_back': self.auto_select_days_back,
            'is_duplicate_check_in_prevented': self.is_duplicate_check_in_prevented
        }
