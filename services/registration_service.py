from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.family import FamilyRecord, MemberRecord, STATUS_PENDING
from services.errors import InvalidSubmission, PersistenceFailure
from services.upload_service import UploadService
from utils.form_helpers import clean, normalize_email, parse_dob
from utils.member_fields import parse_members


ACK_MESSAGE = 'Registered! Please wait for admin approval.'

# FamilyRecord attribute -> form field name(s), first one posted wins
HEAD_FIELDS = (
    ('family_head', ('value', 'familyHead')),
    ('gender', ('gender',)),
    ('phone', ('phone',)),
    ('city', ('city',)),
    ('locality', ('locality',)),
    ('occupation', ('occupation',)),
    ('gotra', ('gotra',)),
    ('native_place', ('nativePlace',)),
    ('blood_group', ('bloodGroup',)),
    ('address', ('address',)),
)


class RegistrationService:
    """Turns a submitted registration form into a pending FamilyRecord.

    Workflow:
    1. Head-of-family scalars are read and trimmed; ``dob`` must parse.
    2. Member fields are normalised (single scalar or parallel lists) by
       ``utils.member_fields.parse_members``.
    3. The optional profile photo is stored and its path recorded.
    4. The record and its members are inserted in one transaction with
       status ``pending``.
    """

    @staticmethod
    def _head_value(form, names):
        for name in names:
            if name in form:
                return clean(form.get(name))
        return None

    @staticmethod
    def build_record(form, profile_image=''):
        """Build (but do not persist) a pending FamilyRecord from *form*."""
        try:
            dob = parse_dob(form.get('dob'))
        except ValueError as exc:
            raise InvalidSubmission(str(exc)) from exc

        email = normalize_email(form.get('email'))
        if not email:
            raise InvalidSubmission('Email is required')

        record = FamilyRecord(
            dob=dob,
            email=email,
            profile_image=profile_image or '',
            status=STATUS_PENDING,
        )
        for attr, names in HEAD_FIELDS:
            setattr(record, attr, RegistrationService._head_value(form, names))

        for position, member in enumerate(parse_members(form)):
            record.members.append(MemberRecord(position=position, **member))

        return record

    @staticmethod
    def submit(form, uploaded_file=None):
        """Validate, store the photo, and insert a pending FamilyRecord.

        Returns the persisted record.  Raises InvalidSubmission when the form
        cannot be shaped into a record and PersistenceFailure when storing the
        photo or the record fails; nothing is left half-written either way.
        """
        # Shape first so a bad dob never leaves an orphaned upload behind
        record = RegistrationService.build_record(form)

        try:
            record.profile_image = UploadService.save(uploaded_file)
        except OSError as exc:
            raise PersistenceFailure(f'Could not store uploaded file: {exc}', cause=exc) from exc

        try:
            db.session.add(record)
            db.session.commit()
        except (SQLAlchemyError, OverflowError, ValueError) as exc:
            # The DB-API driver raises OverflowError/ValueError for values it cannot bind
            db.session.rollback()
            UploadService.delete(record.profile_image)
            raise PersistenceFailure(str(exc.orig if getattr(exc, 'orig', None) else exc), cause=exc) from exc

        current_app.logger.info(
            f'Registration {record.id} stored for {record.email} '
            f'with {len(record.members)} member(s), status={record.status}'
        )
        return record
