"""Family and relationship models."""
from enum import Enum
from checkin import db
from checkin.models.base import BaseModel

class FamilyRole(Enum):
    """Family roles enumeration."""
    ADULT = 'adult'
    CHILD = 'child'

FAMILY_ROLE_ORDER = {
    FamilyRole.ADULT: 0,
    FamilyRole.CHILD: 1,
}

class Family(BaseModel):
    """A household."""

    __tablename__ = 'families'

    name = db.Column(db.String(150), nullable=False)
    campus_id = db.Column(db.Integer, db.ForeignKey('campuses.id'), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    campus = db.relationship('Campus')
    members = db.relationship('FamilyMember', backref='family', lazy='dynamic')

    def __repr__(self) -> str:
        return f'<Family {self.name}>'

class FamilyMember(BaseModel):
    """Membership of a person in a family."""

    __tablename__ = 'family_members'
    __table_args__ = (db.UniqueConstraint('family_id', 'person_id'),)

    family_id = db.Column(db.Integer, db.ForeignKey('families.id'), nullable=False)
    person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False)
    role = db.Column(db.Enum(FamilyRole), nullable=False, default=FamilyRole.CHILD)

    person = db.relationship('Person', backref=db.backref('family_memberships', lazy='dynamic'))

    @property
    def role_order(self) -> int:
        return FAMILY_ROLE_ORDER.get(self.role, len(FAMILY_ROLE_ORDER))

    def __repr__(self) -> str:
        return f'<FamilyMember {self.family_id}-{self.person_id}>'

class RelationshipRole(BaseModel):
    """A known relationship role, e.g. "Grandparent" or "Can check in"."""

    __tablename__ = 'relationship_roles'

    name = db.Column(db.String(100), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f'<RelationshipRole {self.name}>'

class KnownRelationship(BaseModel):
    """A relationship from an owner to another person."""

    __tablename__ = 'known_relationships'

    owner_person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False)
    related_person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False)
    role_id = db.Column(db.Integer, db.ForeignKey('relationship_roles.id'), nullable=False)

    owner = db.relationship('Person', foreign_keys=[owner_person_id])
    related_person = db.relationship('Person', foreign_keys=[related_person_id])
    role = db.relationship('RelationshipRole')

    def __repr__(self) -> str:
        return f'<KnownRelationship {self.owner_person_id}->{self.related_person_id}>'
