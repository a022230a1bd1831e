"""
Tests for administrative status transitions.
"""
import pytest

from extensions import db
from models.family import FamilyRecord
from services.approval_service import ApprovalService
from services.auth_service import AuthService
from services.errors import LoginError, RecordNotFound


class TestSetStatus:
    def test_approve(self, app, pending_family):
        ApprovalService.approve(pending_family.id)

        db.session.expire_all()
        assert db.session.get(FamilyRecord, pending_family.id).status == 'approved'

    def test_reject(self, app, pending_family):
        ApprovalService.reject(pending_family.id)

        assert pending_family.status == 'rejected'

    def test_back_to_pending(self, app, approved_family):
        ApprovalService.set_status(approved_family.id, 'pending')

        assert approved_family.status == 'pending'

    def test_unknown_status(self, app, pending_family):
        with pytest.raises(ValueError):
            ApprovalService.set_status(pending_family.id, 'archived')

        assert pending_family.status == 'pending'

    def test_unknown_record(self, app):
        with pytest.raises(RecordNotFound):
            ApprovalService.approve(999)

    def test_many(self, app, family_factory):
        ids = [family_factory(email=f'f{i}@example.com').id for i in range(3)]

        count = ApprovalService.set_status_many([str(i) for i in ids], 'approved')

        assert count == 3
        assert {r.status for r in FamilyRecord.query.all()} == {'approved'}

    def test_many_is_all_or_nothing(self, app, family_factory):
        first = family_factory(email='one@example.com')
        second = family_factory(email='two@example.com')

        with pytest.raises(RecordNotFound):
            ApprovalService.set_status_many([first.id, second.id, 999], 'approved')

        db.session.expire_all()
        assert {r.status for r in FamilyRecord.query.all()} == {'pending'}

    def test_many_unknown_status(self, app, pending_family):
        with pytest.raises(ValueError):
            ApprovalService.set_status_many([pending_family.id], 'archived')

        assert pending_family.status == 'pending'


class TestLookup:
    def test_latest_for_email(self, app, family_factory):
        family_factory(email='shah@example.com')
        newest = family_factory(email='SHAH@example.com')

        assert ApprovalService.latest_for_email('shah@example.com').id == newest.id

    def test_latest_for_unknown_email(self, app):
        with pytest.raises(RecordNotFound):
            ApprovalService.latest_for_email('nobody@example.com')


class TestApprovalGatesLogin:
    def test_login_only_after_approval(self, app, pending_family):
        with pytest.raises(LoginError):
            AuthService.authenticate('shah@example.com', '1990-01-01')

        ApprovalService.approve(pending_family.id)

        assert AuthService.authenticate('shah@example.com', '1990-01-01').id == pending_family.id

    def test_rejection_blocks_login(self, app, approved_family):
        ApprovalService.reject(approved_family.id)

        with pytest.raises(LoginError) as excinfo:
            AuthService.authenticate('shah@example.com', '1990-01-01')

        assert excinfo.value.code == LoginError.NOT_FOUND_OR_NOT_APPROVED
