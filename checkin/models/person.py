"""Person model and the lookup records used to find people."""
from datetime import date
from enum import Enum
from typing import Optional, Tuple
from checkin import db
from checkin.models.base import BaseModel

class Gender(Enum):
    """Gender enumeration."""
    UNKNOWN = 'unknown'
    MALE = 'male'
    FEMALE = 'female'

class RecordStatus(Enum):
    """Person record status enumeration."""
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    PENDING = 'pending'

class SearchKeyType(Enum):
    """Kinds of alternate search keys."""
    ALTERNATE_ID = 'alternate_id'

class Person(BaseModel):
    """A person that may be checked in."""

    __tablename__ = 'people'

    # Basic Information
    first_name = db.Column(db.String(100), nullable=False)
    nick_name = db.Column(db.String(100), nullable=True)
    last_name = db.Column(db.String(100), nullable=False, index=True)
    birth_date = db.Column(db.Date, nullable=True)
    gender = db.Column(db.Enum(Gender), nullable=False, default=Gender.UNKNOWN)
    graduation_year = db.Column(db.Integer, nullable=True)
    photo_url = db.Column(db.String(255), nullable=True)

    # Status
    record_status = db.Column(db.Enum(RecordStatus), nullable=False, default=RecordStatus.ACTIVE)
    is_deceased = db.Column(db.Boolean, default=False, nullable=False)

    primary_family_id = db.Column(db.Integer, db.ForeignKey('families.id'), nullable=True)

    # Relationships
    primary_family = db.relationship('Family', foreign_keys=[primary_family_id])
    phone_numbers = db.relationship('PhoneNumber', backref='person', lazy='dynamic')
    search_keys = db.relationship('PersonSearchKey', backref='person', lazy='dynamic')

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.nick_name:
            self.nick_name = self.first_name

    @property
    def full_name(self) -> str:
        return f'{self.nick_name or self.first_name} {self.last_name}'

    def get_age(self, today: date) -> Optional[int]:
        """Age in whole years."""
        if not self.birth_date:
            return None
        before_birthday = (today.month, today.day) < (self.birth_date.month, self.birth_date.day)
        return today.year - self.birth_date.year - (1 if before_birthday else 0)

    def get_age_precise(self, today: date) -> Optional[float]:
        """Age in years including the fraction of the current year."""
        age = self.get_age(today)
        if age is None:
            return None

        last_birthday = _safe_anniversary(self.birth_date, self.birth_date.year + age)
        next_birthday = _safe_anniversary(self.birth_date, self.birth_date.year + age + 1)
        span = (next_birthday - last_birthday).days or 365

        return age + (today - last_birthday).days / span

    def get_grade_offset(self, today: date, transition: Tuple[int, int] = (6, 1)) -> Optional[int]:
        """Number of school years until graduation (0 = senior year)."""
        if self.graduation_year is None:
            return None

        transition_month, transition_day = transition
        if (today.month, today.day) < (transition_month, transition_day):
            current_graduation_year = today.year
        else:
            current_graduation_year = today.year + 1

        return self.graduation_year - current_graduation_year

    def to_dict(self, exclude: list = None) -> dict:
        result = super().to_dict(exclude=exclude)
        result['full_name'] = self.full_name
        return result

    def __repr__(self) -> str:
        return f'<Person {self.full_name}>'

def _safe_anniversary(born: date, year: int) -> date:
    try:
        return born.replace(year=year)
    except ValueError:
        # Feb 29 in a non leap year
        return born.replace(year=year, day=28)

class PhoneNumber(BaseModel):
    """A phone number stored as digits only."""

    __tablename__ = 'phone_numbers'

    person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False)
    number = db.Column(db.String(20), nullable=False, index=True)

    def __repr__(self) -> str:
        return f'<PhoneNumber {self.number}>'

class PersonSearchKey(BaseModel):
    """Alternate identifiers such as a scanned barcode."""

    __tablename__ = 'person_search_keys'

    person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False)
    search_type = db.Column(db.Enum(SearchKeyType), nullable=False, default=SearchKeyType.ALTERNATE_ID)
    search_value = db.Column(db.String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f'<PersonSearchKey {self.search_value}>'
