"""Saved person filters used to restrict group eligibility."""
from typing import Optional, Set
from checkin import db
from checkin.models.base import BaseModel

class DataView(BaseModel):
    """A named set of people.

    A persisted data view keeps a snapshot of matching person ids. Otherwise
    membership is evaluated from the active members of its source group.
    """

    __tablename__ = 'data_views'

    name = db.Column(db.String(100), nullable=False)
    is_persisted = db.Column(db.Boolean, default=False)
    persisted_last_refresh = db.Column(db.DateTime, nullable=True)
    source_group_id = db.Column(db.Integer, db.ForeignKey('checkin_groups.id'), nullable=True)

    source_group = db.relationship('CheckInGroup', foreign_keys=[source_group_id])
    persisted_values = db.relationship('DataViewPersistedValue', backref='data_view', lazy='dynamic')

    @property
    def uses_persisted_values(self) -> bool:
        return bool(self.is_persisted and self.persisted_last_refresh)

    def get_person_ids(self) -> Optional[Set[int]]:
        """Person ids in this view, or None when the view cannot be evaluated."""
        from checkin.models.group import GroupMember, GroupMemberStatus

        if self.uses_persisted_values:
            return {value.person_id for value in self.persisted_values}

        if self.source_group_id is None:
            return None

        rows = db.session.query(GroupMember.person_id).filter(
            GroupMember.group_id == self.source_group_id,
            GroupMember.status == GroupMemberStatus.ACTIVE
        ).all()
        return {row.person_id for row in rows}

    def __repr__(self) -> str:
        return f'<DataView {self.name}>'

class DataViewPersistedValue(BaseModel):
    """One person in a persisted data view snapshot."""

    __tablename__ = 'data_view_persisted_values'
    __table_args__ = (db.UniqueConstraint('data_view_id', 'person_id'),)

    data_view_id = db.Column(db.Integer, db.ForeignKey('data_views.id'), nullable=False)
    person_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False)
