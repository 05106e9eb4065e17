"""Check-in groups, where they meet and who belongs to them."""
from enum import Enum
from checkin import db
from checkin.models.base import BaseModel
from checkin.models.person import Gender

group_location_schedules = db.Table(
    'group_location_schedules',
    db.Column('group_location_id', db.Integer, db.ForeignKey('group_locations.id'), primary_key=True),
    db.Column('schedule_id', db.Integer, db.ForeignKey('schedules.id'), primary_key=True)
)

group_data_views = db.Table(
    'group_data_views',
    db.Column('group_id', db.Integer, db.ForeignKey('checkin_groups.id'), primary_key=True),
    db.Column('data_view_id', db.Integer, db.ForeignKey('data_views.id'), primary_key=True)
)

class GroupMemberStatus(Enum):
    """Group member status enumeration."""
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    PENDING = 'pending'

class AbilityLevel(BaseModel):
    """A developmental level such as "Infant" or "Walking"."""

    __tablename__ = 'ability_levels'

    name = db.Column(db.String(100), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f'<AbilityLevel {self.name}>'

class GradeDefinition(BaseModel):
    """A school grade, identified by years until graduation."""

    __tablename__ = 'grade_definitions'

    name = db.Column(db.String(50), nullable=False)
    abbreviation = db.Column(db.String(10), nullable=True)
    grade_offset = db.Column(db.Integer, nullable=False, unique=True)

    def __repr__(self) -> str:
        return f'<GradeDefinition {self.name}>'

class CheckInGroup(BaseModel):
    """A class or room people are checked into."""

    __tablename__ = 'checkin_groups'

    name = db.Column(db.String(100), nullable=False)
    area_id = db.Column(db.Integer, db.ForeignKey('checkin_areas.id'), nullable=False)
    ability_level_id = db.Column(db.Integer, db.ForeignKey('ability_levels.id'), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    # Eligibility
    min_age = db.Column(db.Numeric(5, 2), nullable=True)
    max_age = db.Column(db.Numeric(5, 2), nullable=True)
    min_birth_date = db.Column(db.Date, nullable=True)
    max_birth_date = db.Column(db.Date, nullable=True)
    min_grade_id = db.Column(db.Integer, db.ForeignKey('grade_definitions.id'), nullable=True)
    max_grade_id = db.Column(db.Integer, db.ForeignKey('grade_definitions.id'), nullable=True)
    gender = db.Column(db.Enum(Gender), nullable=True)
    is_age_required = db.Column(db.Boolean, default=False)
    is_grade_required = db.Column(db.Boolean, default=False)

    # Relationships
    ability_level = db.relationship('AbilityLevel')
    min_grade = db.relationship('GradeDefinition', foreign_keys=[min_grade_id])
    max_grade = db.relationship('GradeDefinition', foreign_keys=[max_grade_id])
    data_views = db.relationship('DataView', secondary=group_data_views, lazy='subquery')
    group_locations = db.relationship('GroupLocation', backref='group', lazy='dynamic')
    members = db.relationship('GroupMember', backref='group', lazy='dynamic')

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'guid': self.guid,
            'name': self.name,
            'area_guid': self.area.guid if self.area else None,
            'is_active': self.is_active
        }

    def __repr__(self) -> str:
        return f'<CheckInGroup {self.name}>'

class GroupLocation(BaseModel):
    """A location a group meets at, and the schedules it meets on there."""

    __tablename__ = 'group_locations'
    __table_args__ = (db.UniqueConstraint('group_id', 'location_id'),)

    group_id = db.Column(db.Integer, db.ForeignKey('checkin_groups.id'), nullable=False)
    location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)

    location = db.relationship('Location', backref=db.backref('group_locations', lazy='dynamic'))
    schedules = db.relationship('Schedule', secondary=group_location_schedules, lazy='subquery')

    def __repr__(self) -> str:
        return f'<GroupLocation {self.group_id}-{self.location_id}>'

class GroupMember(BaseModel):
    """A person's membership in a group."""

    __tablename__ = 'group_members'
    __table_args__ = (db.UniqueConstraint('group_id', 'person_id'),)

    group_id = db.Column(db.Integer, db.ForeignKey('checkin_groups.id'), nullable=False)
    person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False)
    status = db.Column(db.Enum(GroupMemberStatus), nullable=False, default=GroupMemberStatus.ACTIVE)

    person = db.relationship('Person')

    def __repr__(self) -> str:
        return f'<GroupMember {self.group_id}-{self.person_id}>'
