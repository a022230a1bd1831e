"""
SessionUser - the authenticated projection of an approved FamilyRecord.
Lives only in the signed session cookie; never written to the database.
"""
from flask_login import UserMixin


class SessionUser(UserMixin):
    """Minimal user object handed to Flask-Login for a logged-in family."""

    def __init__(self, id, email, display_name):
        self.id = id
        self.email = email
        self.display_name = display_name

    @classmethod
    def from_record(cls, record):
        """Project a FamilyRecord onto the session payload."""
        return cls(id=record.id, email=record.email, display_name=record.family_head)

    @classmethod
    def from_payload(cls, payload):
        """Rebuild from the dict stored in the session, or ``None`` if it is malformed."""
        if not isinstance(payload, dict) or payload.get('id') is None:
            return None
        return cls(
            id=payload['id'],
            email=payload.get('email'),
            display_name=payload.get('displayName'),
        )

    def to_payload(self):
        return {'id': self.id, 'email': self.email, 'displayName': self.display_name}

    def get_id(self):
        return str(self.id)

    def __eq__(self, other):
        if not isinstance(other, SessionUser):
            return NotImplemented
        return self.to_payload() == other.to_payload()

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f'<SessionUser {self.email}>'
