"""Base model class with common functionality."""
import uuid
from datetime import datetime, date, time
from typing import Dict, Any, Optional
from checkin import db

def new_guid() -> str:
    """Generate a new stable external identifier."""
    return str(uuid.uuid4())

class BaseModel(db.Model):
    """Base model class with common fields and methods."""

    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    guid = db.Column(db.String(36), unique=True, nullable=False, index=True, default=new_guid)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self, exclude: list = None) -> Dict[str, Any]:
        """Convert instance to dictionary."""
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            key = column.name
            if key not in exclude:
                value = getattr(self, key)
                if isinstance(value, (datetime, date, time)):
                    value = value.isoformat()
                elif hasattr(value, 'value'):
                    value = value.value
                result[key] = value

        return result

    @classmethod
    def get_by_guid(cls, guid: str) -> Optional['BaseModel']:
        """Get instance by its external identifier."""
        if not guid:
            return None
        return cls.query.filter_by(guid=str(guid)).first()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.id}>'
