from flask import current_app, session
from flask_login import login_user, logout_user
from sqlalchemy import func

from models.family import FamilyRecord, STATUS_APPROVED
from models.session_user import SessionUser
from services.errors import LoginError
from utils.form_helpers import normalize_email, to_calendar_date


SESSION_USER_KEY = 'user'


class AuthService:
    """Email + date-of-birth login for approved families.

    There is no password: the pair (email, dob) is the credential.  Dates are
    compared as calendar dates so a stored midnight timestamp matches a
    submitted ``YYYY-MM-DD`` or a timestamp later the same day.
    """

    @staticmethod
    def find_approved(email):
        """Return the approved FamilyRecord for *email* (lowest id first), or None."""
        return (
            FamilyRecord.query
            .filter(func.lower(FamilyRecord.email) == normalize_email(email))
            .filter_by(status=STATUS_APPROVED)
            .order_by(FamilyRecord.id)
            .first()
        )

    @staticmethod
    def authenticate(email, dob):
        """Check the credential pair and return a SessionUser.

        Raises LoginError with one of MISSING_CREDENTIALS,
        NOT_FOUND_OR_NOT_APPROVED or WRONG_DOB.  Read-only.
        """
        email = normalize_email(email)
        dob = dob.strip() if isinstance(dob, str) else dob
        if not email or not dob:
            raise LoginError(LoginError.MISSING_CREDENTIALS)

        record = AuthService.find_approved(email)
        if record is None:
            raise LoginError(LoginError.NOT_FOUND_OR_NOT_APPROVED)

        try:
            supplied = to_calendar_date(dob)
        except ValueError:
            raise LoginError(LoginError.WRONG_DOB)

        if supplied != to_calendar_date(record.dob):
            raise LoginError(LoginError.WRONG_DOB)

        return SessionUser.from_record(record)

    @staticmethod
    def start_session(user):
        """Bind *user* to the current browser session."""
        session[SESSION_USER_KEY] = user.to_payload()
        login_user(user)
        current_app.logger.info(f'Family {user.id} ({user.email}) logged in')

    @staticmethod
    def login(email, dob):
        """authenticate() then start_session(); returns the SessionUser."""
        user = AuthService.authenticate(email, dob)
        AuthService.start_session(user)
        return user

    @staticmethod
    def load_session_user(user_id):
        """Flask-Login user loader: rebuild the SessionUser from the session payload."""
        user = SessionUser.from_payload(session.get(SESSION_USER_KEY))
        if user is None or user.get_id() != str(user_id):
            return None
        return user

    @staticmethod
    def end_session():
        """Forget whoever is bound to this session. Safe to call when nobody is."""
        logout_user()
        session.pop(SESSION_USER_KEY, None)
