"""Test the in-memory opportunity graph."""
from datetime import time
from checkin.services.group_data import CheckInAreaData, CheckInGroupData
from checkin.services.opportunities import (
    AreaOpportunity, GroupOpportunity, LocationOpportunity,
    OpportunityCollection, ScheduleOpportunity
)

def make_group(guid, area_guid, location_guids):
    return GroupOpportunity(
        guid=guid,
        name=guid,
        area_guid=area_guid,
        check_in_data=CheckInGroupData(group_guid=guid),
        check_in_area_data=CheckInAreaData(area_guid=area_guid),
        location_guids=list(location_guids)
    )

def make_collection():
    return OpportunityCollection(
        areas=[AreaOpportunity('kids', 'Kids'), AreaOpportunity('adults', 'Adults')],
        groups=[
            make_group('group-a', 'kids', ['room-a']),
            make_group('group-b', 'kids', ['room-b', 'room-c']),
            make_group('group-c', 'adults', ['room-c']),
        ],
        locations=[
            LocationOpportunity('room-a', 'Room A', schedule_guids=['nine']),
            LocationOpportunity('room-b', 'Room B', current_person_guids={'p1'}, schedule_guids=['nine', 'eleven']),
            LocationOpportunity('room-c', 'Room C', schedule_guids=['eleven']),
        ],
        schedules=[
            ScheduleOpportunity('nine', '9:00', start_time=time(9, 0)),
            ScheduleOpportunity('eleven', '11:00', start_time=time(11, 0)),
        ]
    )

def snapshot(collection):
    return collection.to_dict()

def test_clone_is_independent():
    """Mutating a clone never changes the original or other clones."""
    base = make_collection()
    before = snapshot(base)

    first = base.clone()
    second = base.clone()

    first.groups.pop(0)
    first.locations[1].schedule_guids.remove('nine')
    first.locations[1].current_person_guids.add('p2')
    first.groups[0].location_guids.append('room-z')

    assert snapshot(base) == before
    assert snapshot(second) == before
    assert base.locations[1].current_person_guids == {'p1'}

def test_clone_shares_group_rules():
    base = make_collection()
    clone = base.clone()

    assert clone.groups[0].check_in_data is base.groups[0].check_in_data

def test_prune_keeps_closed_graph(assert_closed):
    collection = make_collection()
    collection.remove_empty_opportunities()

    assert_closed(collection)
    assert [g.guid for g in collection.groups] == ['group-a', 'group-b', 'group-c']

def test_prune_removes_location_without_schedules(assert_closed):
    collection = make_collection()
    collection.schedules = [s for s in collection.schedules if s.guid != 'eleven']

    collection.remove_empty_opportunities()

    assert_closed(collection)
    assert collection.get_location('room-c') is None
    assert collection.get_location('room-b').schedule_guids == ['nine']
    assert collection.get_group('group-b').location_guids == ['room-b']
    assert collection.get_group('group-c') is None
    assert collection.get_area('adults') is None

def test_prune_removes_unreferenced_nodes(assert_closed):
    collection = make_collection()
    collection.groups = [g for g in collection.groups if g.guid == 'group-a']

    collection.remove_empty_opportunities()

    assert_closed(collection)
    assert [l.guid for l in collection.locations] == ['room-a']
    assert [s.guid for s in collection.schedules] == ['nine']
    assert [a.guid for a in collection.areas] == ['kids']

def test_prune_is_idempotent():
    collection = make_collection()
    collection.locations = [l for l in collection.locations if l.guid != 'room-a']

    collection.remove_empty_opportunities()
    once = snapshot(collection)
    collection.remove_empty_opportunities()

    assert snapshot(collection) == once

def test_prune_empty_graph():
    collection = make_collection()
    collection.schedules = []

    collection.remove_empty_opportunities()

    assert collection.areas == []
    assert collection.groups == []
    assert collection.locations == []
