"""Opportunity filters applied to each attendee's graph."""
from .base import OpportunityFilter
from .person import AgeFilter, GradeFilter, GenderFilter
from .membership import MembershipFilter, DataViewFilter
from .capacity import ThresholdFilter, DuplicateCheckInFilter

__all__ = [
    'OpportunityFilter', 'AgeFilter', 'GradeFilter', 'GenderFilter',
    'MembershipFilter', 'DataViewFilter', 'ThresholdFilter',
    'DuplicateCheckInFilter'
]
