import os
import logging
import click
from logging.handlers import RotatingFileHandler
from flask import Flask
from flask_wtf.csrf import CSRFError
from werkzeug.security import generate_password_hash
from config import config
from extensions import db, migrate, login_manager, csrf


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        # Create logs directory if it doesn't exist
        if not os.path.exists('logs'):
            os.mkdir('logs')

        # File handler for errors
        file_handler = RotatingFileHandler(
            'logs/family_registry.log',
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Family Registry startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        app.logger.info('Family Registry startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Configure logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    # Configure Flask-Login
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'info'

    # The logged-in family lives in the session payload, not in a users table
    @login_manager.user_loader
    def load_user(user_id):
        from services.auth_service import AuthService
        return AuthService.load_session_user(user_id)

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models  # noqa: F401

    # Register blueprints
    from blueprints.registration import registration_bp
    from blueprints.auth import auth_bp
    from blueprints.dashboard import dashboard_bp

    app.register_blueprint(registration_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)

    # Add context processors
    @app.context_processor
    def utility_processor():
        from utils.permissions import admin_signed_in
        return dict(admin_signed_in=admin_signed_in)

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and \
                ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
            os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()

    # Register Flask-Admin (must come after db.init_app and all models are loaded)
    from admin_panel import init_admin
    init_admin(app, db)
    # Flask-Admin blueprints are exempt from the global CSRF check; their
    # forms (and the admin sign-in FlaskForm) validate their own tokens.
    for name, blueprint in app.blueprints.items():
        if name == 'admin' or name.startswith('admin_'):
            csrf.exempt(blueprint)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(404)
    def not_found_error(error):
        from flask import render_template
        return render_template('errors/404.html'), 404

    @app.errorhandler(413)
    def too_large_error(error):
        limit_mb = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return f'Error: upload is larger than {limit_mb}MB', 413, {'Content-Type': 'text/plain; charset=utf-8'}

    @app.errorhandler(500)
    def internal_error(error):
        from flask import render_template
        db.session.rollback()
        app.logger.error(f'Internal Server Error: {error}')
        return render_template('errors/500.html'), 500

    @app.errorhandler(403)
    def forbidden_error(error):
        from flask import render_template
        return render_template('errors/403.html'), 403

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        from flask import render_template
        return render_template('errors/csrf.html', reason=error.description), 400


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.group()
    def registry():
        """Review family registrations from the command line."""
        pass

    def _set_status(email, status):
        from services.approval_service import ApprovalService
        from services.errors import RegistryError
        try:
            record = ApprovalService.latest_for_email(email)
            ApprovalService.set_status(record.id, status)
        except RegistryError as e:
            click.echo(f'ERROR: {e}', err=True)
            return
        click.echo(f'SUCCESS: "{record.family_head}" ({record.email}) is now {status}.')

    @registry.command('approve')
    @click.argument('email')
    def approve(email):
        """Approve the newest registration for EMAIL."""
        from models.family import STATUS_APPROVED
        _set_status(email, STATUS_APPROVED)

    @registry.command('reject')
    @click.argument('email')
    def reject(email):
        """Reject the newest registration for EMAIL."""
        from models.family import STATUS_REJECTED
        _set_status(email, STATUS_REJECTED)

    @registry.command('list')
    @click.option('--status', type=click.Choice(['pending', 'approved', 'rejected']),
                  default=None, help='Only show registrations in this status.')
    def list_registrations(status):
        """List registrations, newest first."""
        from models.family import FamilyRecord
        query = FamilyRecord.query
        if status:
            query = query.filter_by(status=status)
        records = query.order_by(FamilyRecord.created_at.desc()).all()
        if not records:
            click.echo('No registrations found.')
            return
        click.echo(f'{"ID":<5} {"Family Head":<25} {"Email":<35} {"DOB":<11} {"Members":<8} {"Status":<9}')
        click.echo('-' * 98)
        for r in records:
            click.echo(
                f'{r.id:<5} {(r.family_head or "")[:25]:<25} {r.email[:35]:<35} '
                f'{r.dob.strftime("%Y-%m-%d"):<11} {len(r.members):<8} {r.status:<9}'
            )

    @registry.command('hash-password')
    @click.password_option()
    def hash_password(password):
        """Print an ADMIN_PASSWORD_HASH value for the /admin panel."""
        click.echo(generate_password_hash(password))


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost in development
    # Never use 0.0.0.0 with debug mode - it exposes the debugger to the network
    app.run(host='127.0.0.1', port=app.config['PORT'], debug=True)
