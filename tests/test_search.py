"""Test family search and family member lookups."""
from dataclasses import replace
from datetime import date
import pytest
from checkin import db
from checkin.models import (
    Campus, Family, FamilyMember, FamilyRole, FamilySearchMode, KnownRelationship,
    Person, PhoneNumber, PhoneSearchMode, RecordStatus, RelationshipRole
)
from checkin.services.session import CheckInSession
from checkin.utils.validators import ValidationError

@pytest.fixture
def session(director, checkin_data):
    configuration = director.get_configuration_data(checkin_data.template)
    return CheckInSession(director, configuration)

def with_configuration(session, **changes):
    return CheckInSession(session.director, replace(session.configuration, **changes))

def add_family(name, last_name, phone=None, campus=None):
    family = Family(name=name, campus=campus)
    person = Person(first_name='Pat', last_name=last_name)
    person.primary_family = family
    db.session.add_all([family, person, FamilyMember(family=family, person=person, role=FamilyRole.ADULT)])
    if phone:
        db.session.add(PhoneNumber(person=person, number=phone))
    db.session.commit()
    return family

def test_empty_search_term(session):
    with pytest.raises(ValidationError):
        session.search_for_families('   ')

def test_phone_too_short(session):
    with pytest.raises(ValidationError) as error:
        session.search_for_families('555', FamilySearchMode.PHONE_NUMBER)

    assert str(error.value) == 'Search term must be at least 4 digits.'

def test_phone_too_long(session):
    with pytest.raises(ValidationError):
        session.search_for_families('602-555-1234-99', FamilySearchMode.PHONE_NUMBER)

def test_phone_ends_with(session, checkin_data):
    families = session.search_for_families('1234', FamilySearchMode.PHONE_NUMBER)

    assert [f.guid for f in families] == [checkin_data.family.guid]
    assert session.search_for_families('5551', FamilySearchMode.PHONE_NUMBER) == []

def test_phone_contains(session, checkin_data):
    contains = with_configuration(session, phone_search_type=PhoneSearchMode.CONTAINS)

    families = contains.search_for_families('(555) 1', FamilySearchMode.PHONE_NUMBER)

    assert [f.guid for f in families] == [checkin_data.family.guid]

def test_name_or_phone_dispatch(session, checkin_data):
    assert [f.guid for f in session.search_for_families('Smith')] == [checkin_data.family.guid]
    assert [f.guid for f in session.search_for_families('602 555 1234')] == [checkin_data.family.guid]

@pytest.mark.parametrize('term', ['Smith', 'smi', 'Smith, Em', 'Emma Smith', 'jo smith'])
def test_name_search(session, checkin_data, term):
    families = session.search_for_families(term, FamilySearchMode.NAME)

    assert [f.guid for f in families] == [checkin_data.family.guid]

def test_name_search_without_match(session):
    assert session.search_for_families('Bob Jones', FamilySearchMode.NAME) == []

def test_search_mode_not_allowed(session):
    phone_only = with_configuration(session, family_search_type=FamilySearchMode.PHONE_NUMBER)

    with pytest.raises(ValidationError):
        phone_only.search_for_families('Smith', FamilySearchMode.NAME)

    with pytest.raises(ValidationError):
        phone_only.search_for_families('Smith')

def test_scanned_id(session, checkin_data):
    families = session.search_for_families('SMITH-0001', FamilySearchMode.SCANNED_ID)

    assert [f.guid for f in families] == [checkin_data.family.guid]
    assert session.search_for_families('SMITH-0002', FamilySearchMode.SCANNED_ID) == []

def test_family_id(session, checkin_data):
    other = add_family('Jones Family', 'Jones')

    families = session.search_for_families(f'{other.id}, {checkin_data.family.id}', FamilySearchMode.FAMILY_ID)

    assert {f.guid for f in families} == {other.guid, checkin_data.family.guid}

def test_family_members_order(session, checkin_data):
    family = session.search_for_families('Smith')[0]

    assert family.name == 'Smith Family'
    assert family.campus_guid == checkin_data.campus.guid
    assert [m.person.first_name for m in family.members] == ['John', 'Emma']
    assert family.members[1].person.age == 6

def test_family_members_exclude_deceased_and_inactive(session, checkin_data):
    checkin_data.emma.record_status = RecordStatus.INACTIVE
    grandpa = Person(first_name='Walter', last_name='Smith', is_deceased=True)
    db.session.add_all([grandpa, FamilyMember(family=checkin_data.family, person=grandpa, role=FamilyRole.ADULT)])
    db.session.commit()

    family = session.search_for_families('Smith')[0]
    assert [m.person.first_name for m in family.members] == ['John', 'Emma']

    excluded = with_configuration(session, is_inactive_person_excluded=True)
    family = excluded.search_for_families('Smith')[0]
    assert [m.person.first_name for m in family.members] == ['John']

def test_maximum_results(session):
    for index in range(3):
        add_family(f'Smithson {index}', 'Smithson')

    assert len(session.search_for_families('Smith')) == 4
    assert len(with_configuration(session, maximum_number_of_results=2).search_for_families('Smith')) == 2
    assert len(with_configuration(session, maximum_number_of_results=0).search_for_families('Smith')) == 4

def test_default_maximum_results(session):
    session.director.default_max_results = 1
    limited = with_configuration(session, maximum_number_of_results=None)

    assert len(limited.search_for_families('Smith')) == 1

def test_preferred_campus_first(session, checkin_data):
    north = Campus(name='North')
    db.session.add(north)
    db.session.commit()
    first = add_family('Smithers', 'Smithers', campus=north)

    families = session.search_for_families('Smith', sort_by_campus=north)

    assert families[0].guid == first.guid
    assert families[1].guid == checkin_data.family.guid

def test_family_members_for_check_in(session, checkin_data):
    can_check_in = RelationshipRole(name='Can check in')
    neighbor_family = Family(name='Jones Family')
    neighbor = Person(first_name='Liam', last_name='Jones', birth_date=date(2017, 9, 1))
    neighbor.primary_family = neighbor_family
    db.session.add_all([
        can_check_in, neighbor_family, neighbor,
        FamilyMember(family=neighbor_family, person=neighbor, role=FamilyRole.CHILD),
        KnownRelationship(owner=checkin_data.john, related_person=neighbor, role=can_check_in),
    ])
    db.session.commit()

    provider = session.search_provider
    records = provider.get_family_members_for_family(checkin_data.family)
    assert [r.person.first_name for r in records] == ['John', 'Emma']

    allowed = with_configuration(
        session, can_check_in_known_relationship_role_guids=frozenset([can_check_in.guid])
    )
    records = allowed.search_provider.get_family_members_for_family(checkin_data.family)
    members = allowed.conversion.get_family_member_items(checkin_data.family, records)

    assert [m.person.first_name for m in members] == ['John', 'Emma', 'Liam']
    assert members[2].family_guid == neighbor_family.guid
    assert members[0].family_guid == checkin_data.family.guid

def test_relationship_to_family_member_is_not_duplicated(session, checkin_data):
    can_check_in = RelationshipRole(name='Can check in')
    db.session.add_all([
        can_check_in,
        KnownRelationship(owner=checkin_data.john, related_person=checkin_data.emma, role=can_check_in),
    ])
    db.session.commit()

    allowed = with_configuration(
        session, can_check_in_known_relationship_role_guids=frozenset([can_check_in.guid])
    )
    records = allowed.search_provider.get_family_members_for_family(checkin_data.family)
    members = allowed.conversion.get_family_member_items(checkin_data.family, records)

    assert len(records) == 3
    assert [m.person.first_name for m in members] == ['John', 'Emma']
    assert members[1].role_order == 1

@pytest.mark.parametrize('term', ['555/1234', '555#1234', '555*1234', '555_1234'])
def test_punctuated_phone_searches_by_phone(session, checkin_data, term):
    families = session.search_for_families(term)

    assert [f.guid for f in families] == [checkin_data.family.guid]
