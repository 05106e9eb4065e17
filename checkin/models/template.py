"""Check-in template (configuration) model."""
from enum import Enum
from checkin import db
from checkin.models.base import BaseModel

class FamilySearchMode(Enum):
    """How a kiosk looks up families."""
    PHONE_NUMBER = 'phone_number'
    NAME = 'name'
    NAME_AND_PHONE = 'name_and_phone'
    SCANNED_ID = 'scanned_id'
    FAMILY_ID = 'family_id'

class PhoneSearchMode(Enum):
    """How a numeric search term is matched against phone numbers."""
    CONTAINS = 'contains'
    ENDS_WITH = 'ends_with'

class AutoSelectMode(Enum):
    """What the kiosk pre-selects for returning attendees."""
    OFF = 'off'
    PEOPLE_ONLY = 'people_only'
    PEOPLE_AND_AREA_GROUP_LOCATION = 'people_and_area_group_location'

template_can_check_in_roles = db.Table(
    'template_can_check_in_roles',
    db.Column('template_id', db.Integer, db.ForeignKey('checkin_templates.id'), primary_key=True),
    db.Column('role_id', db.Integer, db.ForeignKey('relationship_roles.id'), primary_key=True)
)

class CheckInTemplate(BaseModel):
    """The rules a set of kiosks follows."""

    __tablename__ = 'checkin_templates'

    name = db.Column(db.String(100), nullable=False)
    icon_css_class = db.Column(db.String(100), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    # Search
    family_search_type = db.Column(db.Enum(FamilySearchMode), nullable=False,
                                   default=FamilySearchMode.NAME_AND_PHONE)
    phone_search_type = db.Column(db.Enum(PhoneSearchMode), nullable=False,
                                  default=PhoneSearchMode.ENDS_WITH)
    minimum_phone_number_length = db.Column(db.Integer, nullable=True, default=4)
    maximum_phone_number_length = db.Column(db.Integer, nullable=True, default=10)
    maximum_number_of_results = db.Column(db.Integer, nullable=True)
    prevent_inactive_people = db.Column(db.Boolean, default=False)

    # Selection
    auto_select = db.Column(db.Enum(AutoSelectMode), nullable=False, default=AutoSelectMode.PEOPLE_ONLY)
    auto_select_days_back = db.Column(db.Integer, nullable=False, default=10)
    prevent_duplicate_check_in = db.Column(db.Boolean, default=True)

    # Relationships
    can_check_in_roles = db.relationship('RelationshipRole', secondary=template_can_check_in_roles, lazy='subquery')
    areas = db.relationship('CheckInArea', backref='template', lazy='dynamic')

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'guid': self.guid,
            'name': self.name,
            'icon_css_class': self.icon_css_class
        }

    def __repr__(self) -> str:
        return f'<CheckInTemplate {self.name}>'
