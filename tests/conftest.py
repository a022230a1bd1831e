"""
Shared pytest fixtures for the Family Registry test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  After each test, clean_db wipes all
rows so tests are fully independent.
"""
from datetime import datetime

import pytest
from flask import g
from werkzeug.datastructures import MultiDict

from app import create_app
from extensions import db as _db


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Wipe every table after each test so tests never share state."""
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


@pytest.fixture(autouse=True)
def upload_dir(app, tmp_path, monkeypatch):
    """Point UPLOAD_FOLDER at a per-test temporary directory."""
    folder = tmp_path / 'uploads'
    monkeypatch.setitem(app.config, 'UPLOAD_FOLDER', str(folder))
    return folder


@pytest.fixture
def client(app):
    """Flask test client.

    Requests reuse the session-wide app context, so Flask-Login's cached
    ``g._login_user`` is dropped before and after each test.
    """
    g.pop('_login_user', None)
    yield app.test_client()
    g.pop('_login_user', None)


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

def make_family(status='pending', email='shah@example.com', dob=datetime(1990, 1, 1),
                family_head='Shah Family', members=()):
    from models.family import FamilyRecord, MemberRecord
    record = FamilyRecord(
        family_head=family_head,
        email=email,
        dob=dob,
        city='Ahmedabad',
        gotra='Kashyap',
        status=status,
    )
    for position, name in enumerate(members):
        record.members.append(MemberRecord(position=position, name=name, relation='child', age=10))
    _db.session.add(record)
    _db.session.commit()
    return record


@pytest.fixture
def family_factory(app):
    """Return make_family so tests can create records with custom fields."""
    return make_family


@pytest.fixture
def pending_family(app):
    return make_family(status='pending')


@pytest.fixture
def approved_family(app):
    return make_family(status='approved')


@pytest.fixture
def registration_form():
    """Head-of-family fields for a submission, without members."""
    return MultiDict([
        ('value', 'Shah Family'),
        ('gender', 'Male'),
        ('dob', '1990-01-01'),
        ('phone', '9876543210'),
        ('email', 'a@x.com'),
        ('city', 'Ahmedabad'),
        ('locality', 'Navrangpura'),
        ('occupation', 'Engineer'),
        ('gotra', 'Kashyap'),
        ('nativePlace', 'Surat'),
        ('bloodGroup', 'O+'),
        ('address', '12 Lake Road'),
    ])
