from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.family import FamilyRecord, STATUSES, STATUS_APPROVED, STATUS_REJECTED
from services.errors import PersistenceFailure, RecordNotFound
from utils.form_helpers import normalize_email


class ApprovalService:
    """Administrative status transitions for FamilyRecords (pending / approved / rejected)."""

    @staticmethod
    def _check_status(status):
        if status not in STATUSES:
            raise ValueError(f"Unknown status {status!r}; expected one of {', '.join(STATUSES)}")

    @staticmethod
    def _get_or_raise(record_id):
        record = db.session.get(FamilyRecord, record_id)
        if record is None:
            raise RecordNotFound(f'No registration with id {record_id}')
        return record

    @staticmethod
    def _commit():
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceFailure(str(exc), cause=exc) from exc

    @staticmethod
    def set_status(record_id, status):
        """Move record *record_id* to *status* and commit. Returns the record."""
        ApprovalService._check_status(status)
        record = ApprovalService._get_or_raise(record_id)

        previous = record.status
        record.status = status
        ApprovalService._commit()

        current_app.logger.info(f'Registration {record.id} ({record.email}): {previous} -> {status}')
        return record

    @staticmethod
    def approve(record_id):
        return ApprovalService.set_status(record_id, STATUS_APPROVED)

    @staticmethod
    def reject(record_id):
        return ApprovalService.set_status(record_id, STATUS_REJECTED)

    @staticmethod
    def set_status_many(record_ids, status):
        """Move every id in *record_ids* to *status* in one transaction.

        All ids are resolved before anything changes, so an unknown id leaves
        every record as it was. Returns how many records changed.
        """
        ApprovalService._check_status(status)
        records = [ApprovalService._get_or_raise(int(record_id)) for record_id in record_ids]

        for record in records:
            record.status = status
        ApprovalService._commit()

        current_app.logger.info(
            f"Registrations {', '.join(str(r.id) for r in records)} -> {status}"
        )
        return len(records)

    @staticmethod
    def records_for_email(email):
        """All registrations for *email*, newest first."""
        return (
            FamilyRecord.query
            .filter(func.lower(FamilyRecord.email) == normalize_email(email))
            .order_by(FamilyRecord.created_at.desc(), FamilyRecord.id.desc())
            .all()
        )

    @staticmethod
    def latest_for_email(email):
        """Newest registration for *email*; raises RecordNotFound if there is none."""
        records = ApprovalService.records_for_email(email)
        if not records:
            raise RecordNotFound(f'No registration found for {email}')
        return records[0]
