"""Database seeding service for demo data."""
from datetime import date, time
from checkin import db
from checkin.models.area import CheckInArea, AttendanceRule
from checkin.models.campus import Campus, Kiosk
from checkin.models.family import Family, FamilyMember, FamilyRole, RelationshipRole
from checkin.models.group import AbilityLevel, CheckInGroup, GradeDefinition, GroupLocation
from checkin.models.location import Location
from checkin.models.person import Gender, Person, PersonSearchKey, PhoneNumber
from checkin.models.schedule import Schedule
from checkin.models.template import CheckInTemplate, FamilySearchMode, AutoSelectMode

class SeedService:
    """Service to seed the database with a small check-in installation."""

    @staticmethod
    def seed_all():
        """Seed all demo data."""
        campus, kiosk = SeedService.seed_campus()
        schedules = SeedService.seed_schedules()
        SeedService.seed_reference_data()
        SeedService.seed_areas(campus, schedules)
        SeedService.seed_families(campus)

    @staticmethod
    def seed_campus():
        """Seed a campus, its rooms and a kiosk serving the building."""
        campus = Campus(name='Main Campus', time_zone='America/Phoenix')
        db.session.add(campus)
        db.session.flush()

        building = Location(name='Children\'s Building', campus_id=campus.id)
        db.session.add(building)
        db.session.flush()

        for name, soft, firm in [('Nursery', 8, 12), ('Room 101', 15, 20), ('Room 102', 15, 20)]:
            db.session.add(Location(
                name=name,
                parent_location_id=building.id,
                soft_room_threshold=soft,
                firm_room_threshold=firm
            ))

        kiosk = Kiosk(name='Lobby Kiosk', campus_id=campus.id)
        kiosk.locations.append(building)
        db.session.add(kiosk)

        db.session.commit()
        print(f"✅ Created {Location.query.count()} locations")

        return campus, kiosk

    @staticmethod
    def seed_schedules():
        """Seed two daily services."""
        schedules = [
            Schedule(name='Morning Service', day_of_week=None, start_time=time(9, 0),
                     duration_minutes=75, check_in_start_offset_minutes=30,
                     check_in_end_offset_minutes=30),
            Schedule(name='Late Service', day_of_week=None, start_time=time(11, 0),
                     duration_minutes=75, check_in_start_offset_minutes=30,
                     check_in_end_offset_minutes=30),
        ]
        db.session.add_all(schedules)
        db.session.commit()
        print(f"✅ Created {len(schedules)} schedules")

        return schedules

    @staticmethod
    def seed_reference_data():
        """Seed ability levels, grades and relationship roles."""
        for order, name in enumerate(['Infant', 'Crawling', 'Walking']):
            db.session.add(AbilityLevel(name=name, order=order))

        grades = ['12th', '11th', '10th', '9th', '8th', '7th', '6th', '5th', '4th', '3rd', '2nd', '1st', 'K']
        for offset, name in enumerate(grades):
            db.session.add(GradeDefinition(name=f'{name} Grade' if name != 'K' else 'Kindergarten',
                                           abbreviation=name, grade_offset=offset))

        db.session.add(RelationshipRole(name='Can check in', order=0))
        db.session.add(RelationshipRole(name='Grandparent', order=1))
        db.session.commit()

    @staticmethod
    def seed_areas(campus, schedules):
        """Seed a template with a Kids area and its groups."""
        can_check_in = RelationshipRole.query.filter_by(name='Can check in').first()

        template = CheckInTemplate(
            name='Weekend Check-in',
            family_search_type=FamilySearchMode.NAME_AND_PHONE,
            auto_select=AutoSelectMode.PEOPLE_AND_AREA_GROUP_LOCATION
        )
        template.can_check_in_roles.append(can_check_in)
        db.session.add(template)
        db.session.flush()

        area = CheckInArea(name='Kids', template_id=template.id, attendance_rule=AttendanceRule.NONE)
        db.session.add(area)
        db.session.flush()

        rooms = Location.query.filter(Location.parent_location_id.isnot(None)).order_by(Location.id).all()
        groups = [
            ('Nursery', 0, 3),
            ('Preschool', 3, 6),
            ('Elementary', 6, 11),
        ]

        for (name, min_age, max_age), room in zip(groups, rooms):
            group = CheckInGroup(name=name, area_id=area.id, min_age=min_age, max_age=max_age)
            db.session.add(group)
            db.session.flush()

            group_location = GroupLocation(group_id=group.id, location_id=room.id)
            group_location.schedules.extend(schedules)
            db.session.add(group_location)

        db.session.commit()
        print(f"✅ Created {CheckInGroup.query.count()} groups")

    @staticmethod
    def seed_families(campus):
        """Seed the Smith family."""
        family = Family(name='Smith Family', campus_id=campus.id)
        db.session.add(family)
        db.session.flush()

        today = date.today()
        people = [
            (Person(first_name='John', last_name='Smith', gender=Gender.MALE,
                    birth_date=date(today.year - 38, 3, 14)), FamilyRole.ADULT),
            (Person(first_name='Jane', last_name='Smith', gender=Gender.FEMALE,
                    birth_date=date(today.year - 36, 7, 2)), FamilyRole.ADULT),
            (Person(first_name='Emma', last_name='Smith', gender=Gender.FEMALE,
                    birth_date=date(today.year - 6, 1, 20)), FamilyRole.CHILD),
        ]

        for person, role in people:
            person.primary_family_id = family.id
            db.session.add(person)
            db.session.flush()
            db.session.add(FamilyMember(family_id=family.id, person_id=person.id, role=role))

        father = people[0][0]
        db.session.add(PhoneNumber(person_id=father.id, number='6025551234'))
        db.session.add(PersonSearchKey(person_id=father.id, search_value='SMITH-0001'))

        db.session.commit()
        print(f"✅ Created family {family.name} with {len(people)} members")
