"""Location model for check-in rooms."""
from typing import Dict, Optional
from checkin import db
from checkin.models.base import BaseModel

class Location(BaseModel):
    """A named room (or building) attendees can be checked into."""

    __tablename__ = 'locations'

    # =================== BASIC INFO ===================
    name = db.Column(db.String(100), nullable=False)
    parent_location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=True)
    campus_id = db.Column(db.Integer, db.ForeignKey('campuses.id'), nullable=True)

    # =================== CAPACITY ===================
    # Soft threshold is advisory, staff may override it at the kiosk.
    soft_room_threshold = db.Column(db.Integer, nullable=True)
    # Firm threshold can never be exceeded.
    firm_room_threshold = db.Column(db.Integer, nullable=True)

    # =================== STATUS ===================
    is_active = db.Column(db.Boolean, default=True)

    # =================== RELATIONSHIPS ===================
    parent = db.relationship('Location', remote_side='Location.id', backref='children')
    campus = db.relationship('Campus', backref='locations')

    def get_campus_id(self) -> Optional[int]:
        """Campus of this location or of the nearest ancestor that has one."""
        location = self
        seen = set()

        while location is not None and location.id not in seen:
            if location.campus_id:
                return location.campus_id
            seen.add(location.id)
            location = location.parent

        return None

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            'guid': self.guid,
            'name': self.name,
            'soft_room_threshold': self.soft_room_threshold,
            'firm_room_threshold': self.firm_room_threshold,
            'is_active': self.is_active
        }

    def __repr__(self) -> str:
        return f'<Location {self.name}>'
