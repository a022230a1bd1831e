"""
FamilyRecord and MemberRecord models.
A FamilyRecord is one registered household; its MemberRecords are the
household members in the order the family declared them.
"""
from datetime import datetime, timezone
from extensions import db


STATUS_PENDING = 'pending'
STATUS_APPROVED = 'approved'
STATUS_REJECTED = 'rejected'

STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class FamilyRecord(db.Model):
    """A household registration, reviewed by an administrator before login is allowed."""
    __tablename__ = 'families'

    id = db.Column(db.Integer, primary_key=True)

    # Head of family
    family_head = db.Column(db.String(150))
    gender = db.Column(db.String(20))
    dob = db.Column(db.DateTime, nullable=False)
    phone = db.Column(db.String(30))
    # Not unique: repeat submissions stay pending until an admin picks one
    email = db.Column(db.String(120), nullable=False, index=True)
    city = db.Column(db.String(100))
    locality = db.Column(db.String(100))
    occupation = db.Column(db.String(100))
    gotra = db.Column(db.String(100))
    native_place = db.Column(db.String(100))
    blood_group = db.Column(db.String(10))
    address = db.Column(db.Text)
    profile_image = db.Column(db.String(255), nullable=False, default='')

    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)

    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    members = db.relationship(
        'MemberRecord',
        back_populates='family',
        order_by='MemberRecord.position',
        cascade='all, delete-orphan',
    )

    @property
    def is_approved(self):
        return self.status == STATUS_APPROVED

    def __repr__(self):
        return f'<FamilyRecord {self.id} {self.email} {self.status}>'


class MemberRecord(db.Model):
    """One household member belonging to a FamilyRecord."""
    __tablename__ = 'family_members'

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id'), nullable=False, index=True)
    # Declared order within the household, starting at 0
    position = db.Column(db.Integer, nullable=False, default=0)

    name = db.Column(db.String(150))
    relation = db.Column(db.String(50))
    age = db.Column(db.Integer)  # NULL when the submitted age was not a number
    marital_status = db.Column(db.String(30))
    blood_group = db.Column(db.String(10))
    qualification = db.Column(db.String(100))
    occupation = db.Column(db.String(100))

    family = db.relationship('FamilyRecord', back_populates='members')

    def __repr__(self):
        return f'<MemberRecord {self.name} ({self.relation})>'
