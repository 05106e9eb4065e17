"""Group filters driven by the attendee's age, grade and gender."""
from checkin.services.filters.base import OpportunityFilter
from checkin.services.opportunities import GroupOpportunity

class AgeFilter(OpportunityFilter):
    """Birth date range if the group has one, otherwise age in [min, max)."""

    def is_group_valid(self, group: GroupOpportunity) -> bool:
        data = group.check_in_data

        if data.has_birth_date_range:
            return self._is_birth_date_valid(data)

        if not data.has_age_range:
            return True

        age = self.person.age_precise
        if age is None:
            return not data.is_age_required

        if data.minimum_age is not None and age < data.minimum_age:
            return False

        if data.maximum_age is not None and age >= data.maximum_age:
            return False

        return True

    def _is_birth_date_valid(self, data) -> bool:
        birth_date = self.person.birth_date
        if birth_date is None:
            return not data.is_age_required

        if data.minimum_birth_date is not None and birth_date < data.minimum_birth_date:
            return False

        if data.maximum_birth_date is not None and birth_date > data.maximum_birth_date:
            return False

        return True

class GradeFilter(OpportunityFilter):
    """Grade offset within the group's inclusive offset range."""

    def is_group_valid(self, group: GroupOpportunity) -> bool:
        data = group.check_in_data
        if not data.has_grade_range:
            return True

        offset = self.person.grade_offset
        if offset is None:
            return not data.is_grade_required

        if data.minimum_grade_offset is not None and offset < data.minimum_grade_offset:
            return False

        if data.maximum_grade_offset is not None and offset > data.maximum_grade_offset:
            return False

        return True

class GenderFilter(OpportunityFilter):

    def is_group_valid(self, group: GroupOpportunity) -> bool:
        required = group.check_in_data.gender
        return required is None or self.person.gender == required
