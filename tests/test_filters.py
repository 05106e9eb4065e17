"""Test the attendee opportunity filters."""
from datetime import date, datetime, timedelta
from checkin import db
from checkin.models import (
    AttendanceRecord, AttendanceRule, DataView, DataViewPersistedValue,
    Gender, GroupMember, GroupMemberStatus
)
from checkin.services.configuration import ConfigurationData
from checkin.services.filter_provider import FilterProvider
from checkin.services.filters import (
    AgeFilter, DataViewFilter, DuplicateCheckInFilter, GenderFilter,
    GradeFilter, MembershipFilter, ThresholdFilter
)
from checkin.services.group_data import CheckInAreaData, CheckInGroupData
from checkin.services.items import Attendee, FamilyMemberItem, PersonItem
from checkin.services.opportunities import (
    AreaOpportunity, GroupOpportunity, LocationOpportunity,
    OpportunityCollection, ScheduleOpportunity
)
from tests.conftest import NOW, TODAY

def make_attendee(person_id=1, guid='emma', age=6.4, birth_date=date(2018, 1, 15),
                  grade_offset=None, gender=Gender.FEMALE, opportunities=None):
    person = PersonItem(
        id=person_id, guid=guid, first_name='Emma', nick_name='Emma', last_name='Smith',
        full_name='Emma Smith', gender=gender, birth_date=birth_date,
        age=int(age) if age is not None else None, age_precise=age, grade_offset=grade_offset
    )
    return Attendee(
        person=FamilyMemberItem(person=person, family_guid='smith', role_order=1),
        opportunities=opportunities or OpportunityCollection()
    )

def make_group(guid='group', area_guid='kids', attendance_rule=AttendanceRule.NONE, **rules):
    return GroupOpportunity(
        guid=guid,
        name=guid,
        area_guid=area_guid,
        check_in_data=CheckInGroupData(group_guid=guid, **rules),
        check_in_area_data=CheckInAreaData(area_guid=area_guid, attendance_rule=attendance_rule),
        location_guids=['room']
    )

CONFIGURATION = ConfigurationData()

def test_age_filter_half_open_range():
    group = make_group(minimum_age=5, maximum_age=7)

    assert AgeFilter(CONFIGURATION, make_attendee(age=6.4)).is_group_valid(group)
    assert AgeFilter(CONFIGURATION, make_attendee(age=5.0)).is_group_valid(group)
    assert not AgeFilter(CONFIGURATION, make_attendee(age=7.0)).is_group_valid(group)
    assert not AgeFilter(CONFIGURATION, make_attendee(age=4.9)).is_group_valid(group)

def test_age_filter_without_range():
    assert AgeFilter(CONFIGURATION, make_attendee(age=None, birth_date=None)).is_group_valid(make_group())

def test_age_filter_missing_birth_date():
    optional = make_group(minimum_age=5, maximum_age=7)
    required = make_group(minimum_age=5, maximum_age=7, is_age_required=True)
    attendee = make_attendee(age=None, birth_date=None)

    assert AgeFilter(CONFIGURATION, attendee).is_group_valid(optional)
    assert not AgeFilter(CONFIGURATION, attendee).is_group_valid(required)

def test_age_filter_prefers_birth_date_range():
    # The age range would reject a six year old
    group = make_group(minimum_age=8, maximum_age=10,
                       minimum_birth_date=date(2018, 1, 1), maximum_birth_date=date(2018, 12, 31))

    assert AgeFilter(CONFIGURATION, make_attendee(birth_date=date(2018, 1, 15))).is_group_valid(group)
    assert AgeFilter(CONFIGURATION, make_attendee(birth_date=date(2018, 12, 31))).is_group_valid(group)
    assert not AgeFilter(CONFIGURATION, make_attendee(birth_date=date(2019, 1, 1))).is_group_valid(group)

def test_grade_filter_inclusive_range():
    group = make_group(minimum_grade_offset=6, maximum_grade_offset=8)

    for offset, expected in [(5, False), (6, True), (7, True), (8, True), (9, False)]:
        attendee = make_attendee(grade_offset=offset)
        assert GradeFilter(CONFIGURATION, attendee).is_group_valid(group) is expected

def test_grade_filter_missing_grade():
    optional = make_group(minimum_grade_offset=6, maximum_grade_offset=8)
    required = make_group(minimum_grade_offset=6, maximum_grade_offset=8, is_grade_required=True)
    attendee = make_attendee(grade_offset=None)

    assert GradeFilter(CONFIGURATION, attendee).is_group_valid(optional)
    assert not GradeFilter(CONFIGURATION, attendee).is_group_valid(required)
    assert GradeFilter(CONFIGURATION, attendee).is_group_valid(make_group())

def test_gender_filter():
    girls = make_group(gender=Gender.FEMALE)

    assert GenderFilter(CONFIGURATION, make_attendee(gender=Gender.FEMALE)).is_group_valid(girls)
    assert not GenderFilter(CONFIGURATION, make_attendee(gender=Gender.MALE)).is_group_valid(girls)
    assert GenderFilter(CONFIGURATION, make_attendee(gender=Gender.MALE)).is_group_valid(make_group())

def test_threshold_filter():
    attendee = make_attendee(guid='emma')
    threshold = ThresholdFilter(CONFIGURATION, attendee)

    assert threshold.is_location_valid(LocationOpportunity('room', 'Room', current_count=50))
    assert threshold.is_location_valid(LocationOpportunity('room', 'Room', current_count=9, capacity=10))
    assert not threshold.is_location_valid(
        LocationOpportunity('room', 'Room', current_count=10, capacity=10, current_person_guids={'other'})
    )
    assert threshold.is_location_valid(
        LocationOpportunity('room', 'Room', current_count=10, capacity=10, current_person_guids={'emma'})
    )

def test_filter_provider_removes_failing_nodes(assert_closed):
    opportunities = OpportunityCollection(
        areas=[AreaOpportunity('kids', 'Kids')],
        groups=[
            make_group('group-a', minimum_age=5, maximum_age=7),
            make_group('group-b', minimum_age=8, maximum_age=10),
        ],
        locations=[LocationOpportunity('room', 'Room', schedule_guids=['nine'])],
        schedules=[ScheduleOpportunity('nine', 'Nine')]
    )
    attendee = make_attendee(opportunities=opportunities)
    provider = FilterProvider(CONFIGURATION, today=TODAY, group_filters=[AgeFilter],
                              location_filters=[ThresholdFilter], schedule_filters=[])

    provider.filter_opportunities(attendee)
    provider.remove_empty_opportunities(attendee)

    assert [g.guid for g in attendee.opportunities.groups] == ['group-a']
    assert_closed(attendee.opportunities)

def test_membership_filter(checkin_data):
    emma = checkin_data.emma
    attendee = make_attendee(person_id=emma.id, guid=emma.guid)
    group_a = make_group(checkin_data.group_a.guid, attendance_rule=AttendanceRule.ALREADY_BELONGS)
    group_b = make_group(checkin_data.group_b.guid, attendance_rule=AttendanceRule.ALREADY_BELONGS)
    open_group = make_group('anyone', attendance_rule=AttendanceRule.ADD_ON_CHECK_IN)

    db.session.add(GroupMember(group=checkin_data.group_a, person=emma))
    db.session.add(GroupMember(group=checkin_data.group_b, person=emma, status=GroupMemberStatus.INACTIVE))
    db.session.commit()

    membership = MembershipFilter(CONFIGURATION, attendee, db.session, TODAY)

    assert membership.is_group_valid(group_a)
    assert not membership.is_group_valid(group_b)
    assert membership.is_group_valid(open_group)

def test_data_view_filter(checkin_data):
    emma = checkin_data.emma
    attendee = make_attendee(person_id=emma.id, guid=emma.guid)

    persisted = DataView(name='Cleared', is_persisted=True, persisted_last_refresh=NOW)
    by_group = DataView(name='Group B members', source_group=checkin_data.group_b)
    unknown = DataView(name='Cannot evaluate')
    db.session.add_all([persisted, by_group, unknown])
    db.session.flush()
    db.session.add(DataViewPersistedValue(data_view=persisted, person_id=emma.id))
    db.session.commit()

    data_views = DataViewFilter(CONFIGURATION, attendee, db.session, TODAY)

    assert data_views.is_group_valid(make_group(data_view_guids=(persisted.guid,)))
    assert not data_views.is_group_valid(make_group(data_view_guids=(persisted.guid, by_group.guid)))
    assert data_views.is_group_valid(make_group(data_view_guids=(unknown.guid, 'deleted-view')))

    db.session.add(GroupMember(group=checkin_data.group_b, person=emma))
    db.session.commit()

    fresh = DataViewFilter(CONFIGURATION, attendee, db.session, TODAY)
    assert fresh.is_group_valid(make_group(data_view_guids=(persisted.guid, by_group.guid)))

def test_duplicate_check_in_filter(checkin_data):
    emma = checkin_data.emma
    attendee = make_attendee(person_id=emma.id, guid=emma.guid)
    service = ScheduleOpportunity(checkin_data.service.guid, 'Service')
    evening = ScheduleOpportunity(checkin_data.evening.guid, 'Evening')

    db.session.add(AttendanceRecord(
        person=emma, group=checkin_data.group_a, location=checkin_data.room_a,
        schedule=checkin_data.service, campus=checkin_data.campus,
        start_datetime=NOW - timedelta(minutes=10)
    ))
    db.session.commit()

    duplicates = DuplicateCheckInFilter(CONFIGURATION, attendee, db.session, TODAY)
    assert not duplicates.is_schedule_valid(service)
    assert duplicates.is_schedule_valid(evening)

    allowed = ConfigurationData(is_duplicate_check_in_prevented=False)
    assert DuplicateCheckInFilter(allowed, attendee, db.session, TODAY).is_schedule_valid(service)

def test_duplicate_check_in_ignores_checked_out(checkin_data):
    emma = checkin_data.emma
    attendee = make_attendee(person_id=emma.id, guid=emma.guid)

    db.session.add(AttendanceRecord(
        person=emma, group=checkin_data.group_a, location=checkin_data.room_a,
        schedule=checkin_data.service, start_datetime=NOW - timedelta(minutes=30),
        end_datetime=NOW - timedelta(minutes=5)
    ))
    db.session.commit()

    duplicates = DuplicateCheckInFilter(CONFIGURATION, attendee, db.session, TODAY)
    assert duplicates.is_schedule_valid(ScheduleOpportunity(checkin_data.service.guid, 'Service'))
