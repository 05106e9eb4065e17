"""Shared fixtures for the check-in tests."""
from datetime import date, datetime, time
from types import SimpleNamespace
import pytest
from checkin import create_app, db
from checkin.models import (
    Campus, Kiosk, Location, Schedule, CheckInTemplate, CheckInArea,
    CheckInGroup, GroupLocation, Family, FamilyMember, FamilyRole, Person,
    PhoneNumber, PersonSearchKey, Gender, FamilySearchMode, PhoneSearchMode,
    AutoSelectMode
)
from checkin.services.director import CheckInDirector

# A Sunday morning, half an hour before the 9:30 service
NOW = datetime(2024, 6, 2, 9, 0)
TODAY = NOW.date()

def fixed_clock(campus=None):
    return NOW

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def director(app):
    return CheckInDirector(db.session, clock=fixed_clock)

@pytest.fixture
def checkin_data(app):
    """A campus with two rooms, two kids groups and the Smith family.

    Group A (ages 5-7) meets in Room A and Group B (ages 8-10) in Room B.
    Emma Smith is 6, her father John is an adult.
    """
    campus = Campus(name='Main Campus', time_zone='America/Phoenix')
    building = Location(name='Building', campus=campus)
    room_a = Location(name='Room A', parent=building, soft_room_threshold=10, firm_room_threshold=20)
    room_b = Location(name='Room B', parent=building, soft_room_threshold=10, firm_room_threshold=20)

    kiosk = Kiosk(name='Lobby Kiosk', campus=campus)
    kiosk.locations.append(building)

    service = Schedule(name='Service', start_time=time(9, 30), duration_minutes=60,
                       check_in_start_offset_minutes=60)
    evening = Schedule(name='Evening', start_time=time(18, 0), duration_minutes=60,
                       check_in_start_offset_minutes=30)

    template = CheckInTemplate(
        name='Weekend',
        family_search_type=FamilySearchMode.NAME_AND_PHONE,
        phone_search_type=PhoneSearchMode.ENDS_WITH,
        minimum_phone_number_length=4,
        maximum_phone_number_length=10,
        auto_select=AutoSelectMode.PEOPLE_AND_AREA_GROUP_LOCATION,
        auto_select_days_back=10,
        prevent_duplicate_check_in=True
    )
    area = CheckInArea(name='Kids', template=template)

    group_a = CheckInGroup(name='Group A', area=area, min_age=5, max_age=7)
    group_b = CheckInGroup(name='Group B', area=area, min_age=8, max_age=10)

    location_a = GroupLocation(group=group_a, location=room_a, order=0)
    location_a.schedules.extend([service, evening])
    location_b = GroupLocation(group=group_b, location=room_b, order=0)
    location_b.schedules.append(service)

    family = Family(name='Smith Family', campus=campus)
    john = Person(first_name='John', last_name='Smith', gender=Gender.MALE, birth_date=date(1989, 3, 14))
    emma = Person(first_name='Emma', last_name='Smith', gender=Gender.FEMALE, birth_date=date(2018, 1, 15))
    john.primary_family = family
    emma.primary_family = family

    db.session.add_all([
        campus, building, room_a, room_b, kiosk, service, evening, template, area,
        group_a, group_b, location_a, location_b, family, john, emma,
        FamilyMember(family=family, person=john, role=FamilyRole.ADULT),
        FamilyMember(family=family, person=emma, role=FamilyRole.CHILD),
        PhoneNumber(person=john, number='6025551234'),
        PersonSearchKey(person=john, search_value='SMITH-0001'),
    ])
    db.session.commit()

    return SimpleNamespace(
        campus=campus, building=building, room_a=room_a, room_b=room_b,
        kiosk=kiosk, service=service, evening=evening, template=template,
        area=area, group_a=group_a, group_b=group_b, family=family,
        john=john, emma=emma
    )

@pytest.fixture
def assert_closed():
    """Check that every reference in an opportunity graph resolves."""
    def check(opportunities):
        location_guids = {l.guid for l in opportunities.locations}
        schedule_guids = {s.guid for s in opportunities.schedules}
        group_area_guids = {g.area_guid for g in opportunities.groups}

        for group in opportunities.groups:
            assert group.location_guids
            assert set(group.location_guids) <= location_guids

        for location in opportunities.locations:
            assert location.schedule_guids
            assert set(location.schedule_guids) <= schedule_guids
            assert any(location.guid in g.location_guids for g in opportunities.groups)

        for schedule in opportunities.schedules:
            assert any(schedule.guid in l.schedule_guids for l in opportunities.locations)

        assert {a.guid for a in opportunities.areas} == group_area_guids

    return check
