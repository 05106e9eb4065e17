"""Test group and area rule snapshots."""
from datetime import date
from checkin import db
from checkin.models import (
    AttendanceRule, CheckInArea, CheckInGroup, DataView, Gender, GradeDefinition
)
from checkin.services.group_data import CheckInAreaData, CheckInGroupData, grade_offset_range

def test_grade_offset_range_is_inverted():
    assert grade_offset_range(8, 6) == (6, 8)
    assert grade_offset_range(None, 6) == (6, None)

def test_group_data_from_group(app):
    fourth = GradeDefinition(name='4th Grade', abbreviation='4th', grade_offset=8)
    sixth = GradeDefinition(name='6th Grade', abbreviation='6th', grade_offset=6)
    view = DataView(name='Background checked')
    area = CheckInArea(name='Kids', attendance_rule=AttendanceRule.ALREADY_BELONGS)
    group = CheckInGroup(
        name='Upper Elementary',
        area=area,
        min_age=9.5,
        max_age=12,
        min_birth_date=date(2012, 1, 1),
        min_grade=fourth,
        max_grade=sixth,
        gender=Gender.FEMALE,
        is_grade_required=True
    )
    group.data_views.append(view)
    db.session.add_all([fourth, sixth, view, area, group])
    db.session.commit()

    data = CheckInGroupData.from_group(group)

    assert data.group_guid == group.guid
    assert data.minimum_grade_offset == 6
    assert data.maximum_grade_offset == 8
    assert data.minimum_age == 9.5
    assert data.maximum_age == 12.0
    assert data.minimum_birth_date == date(2012, 1, 1)
    assert data.maximum_birth_date is None
    assert data.gender == Gender.FEMALE
    assert data.is_grade_required
    assert not data.is_age_required
    assert data.data_view_guids == (view.guid,)
    assert data.has_age_range and data.has_birth_date_range and data.has_grade_range

    area_data = CheckInAreaData.from_area(area)
    assert area_data.area_guid == area.guid
    assert area_data.attendance_rule == AttendanceRule.ALREADY_BELONGS

def test_group_without_rules(app):
    area = CheckInArea(name='Adults')
    group = CheckInGroup(name='Everyone', area=area, gender=Gender.UNKNOWN)
    db.session.add_all([area, group])
    db.session.commit()

    data = CheckInGroupData.from_group(group)

    assert not data.has_age_range
    assert not data.has_birth_date_range
    assert not data.has_grade_range
    assert data.gender is None
    assert data.data_view_guids == ()
