"""
Prepare storage for the family registry and report what is in it.

    python init_db.py [config_name]

Creates the database tables and the upload folder, then prints how many
registrations are pending, approved and rejected. Safe to run repeatedly.
"""
import os
import sys

from app import create_app
from extensions import db
from models.family import FamilyRecord, STATUSES


def prepare_storage(app):
    """Create tables and the upload folder; return registration counts by status."""
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
    db.create_all()
    return {status: FamilyRecord.query.filter_by(status=status).count() for status in STATUSES}


def init_db(config_name='development'):
    app = create_app(config_name)

    with app.app_context():
        counts = prepare_storage(app)
        print(f"Database: {app.config['SQLALCHEMY_DATABASE_URI']}")
        print(f"Uploads folder: {app.config['UPLOAD_FOLDER']}")
        print("\nRegistrations:")
        for status, count in counts.items():
            print(f"  {status:<9} {count}")


if __name__ == '__main__':
    init_db(sys.argv[1] if len(sys.argv) > 1 else 'development')
