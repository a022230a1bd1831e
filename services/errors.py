"""
Exceptions raised by the registry services.
Blueprint routes catch these at the request boundary and turn them into responses.
"""


class RegistryError(Exception):
    """Base class for every error the registry services raise."""


class InvalidSubmission(RegistryError):
    """A registration could not be shaped into a record (e.g. unparseable date of birth)."""


class PersistenceFailure(RegistryError):
    """Reading from or writing to the record store (or upload folder) failed."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause


class RecordNotFound(RegistryError):
    """No FamilyRecord exists for the requested id or email."""


class LoginError(RegistryError):
    """Login rejected. ``code`` says why; ``message`` is safe to show on the login page."""

    MISSING_CREDENTIALS = 'missing_credentials'
    NOT_FOUND_OR_NOT_APPROVED = 'not_found_or_not_approved'
    WRONG_DOB = 'wrong_dob'

    MESSAGES = {
        MISSING_CREDENTIALS: 'Email and DOB are required',
        NOT_FOUND_OR_NOT_APPROVED: 'User not found or not approved',
        WRONG_DOB: 'Incorrect Date of Birth',
    }

    def __init__(self, code):
        if code not in self.MESSAGES:
            raise ValueError(f'Unknown login error code: {code}')
        self.code = code
        self.message = self.MESSAGES[code]
        super().__init__(self.message)
