# Models package - Import all models for Flask-SQLAlchemy

from models.family import FamilyRecord, MemberRecord
from models.session_user import SessionUser

__all__ = [
    'FamilyRecord',
    'MemberRecord',
    'SessionUser',
]
