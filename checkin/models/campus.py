"""Campus and kiosk device models."""
from datetime import datetime
from typing import List, Optional
from dateutil import tz
from checkin import db
from checkin.models.base import BaseModel

kiosk_locations = db.Table(
    'kiosk_locations',
    db.Column('kiosk_id', db.Integer, db.ForeignKey('kiosks.id'), primary_key=True),
    db.Column('location_id', db.Integer, db.ForeignKey('locations.id'), primary_key=True)
)

class Campus(BaseModel):
    """A physical campus with its own time zone."""

    __tablename__ = 'campuses'

    name = db.Column(db.String(100), nullable=False)
    time_zone = db.Column(db.String(64), nullable=True)  # IANA name, e.g. America/Phoenix
    is_active = db.Column(db.Boolean, default=True)

    def current_datetime(self) -> datetime:
        """Current wall-clock time at this campus (naive)."""
        zone = tz.gettz(self.time_zone) if self.time_zone else None
        if zone is None:
            return datetime.now()
        return datetime.now(zone).replace(tzinfo=None)

    def __repr__(self) -> str:
        return f'<Campus {self.name}>'

class Kiosk(BaseModel):
    """A check-in device and the rooms it serves."""

    __tablename__ = 'kiosks'

    name = db.Column(db.String(100), nullable=False)
    campus_id = db.Column(db.Integer, db.ForeignKey('campuses.id'), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    campus = db.relationship('Campus', backref='kiosks')
    locations = db.relationship('Location', secondary=kiosk_locations, lazy='subquery',
                                backref=db.backref('kiosks', lazy=True))

    def get_all_location_ids(self) -> List[int]:
        """Kiosk locations plus every descendant location."""
        location_ids = []
        seen = set()
        pending = list(self.locations)

        while pending:
            location = pending.pop(0)
            if location.id in seen:
                continue
            seen.add(location.id)
            location_ids.append(location.id)
            pending.extend(location.children)

        return location_ids

    def get_campus_id(self) -> Optional[int]:
        """Campus of the kiosk, falling back to the campus of its locations."""
        if self.campus_id:
            return self.campus_id

        for location in self.locations:
            campus_id = location.get_campus_id()
            if campus_id:
                return campus_id

        return None

    def __repr__(self) -> str:
        return f'<Kiosk {self.name}>'
