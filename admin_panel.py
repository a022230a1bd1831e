"""
Flask-Admin panel for the family registry
Accessible at /admin - restricted to the configured administrator.
Approving or rejecting a registration here is what lets a family log in.
"""
from flask import current_app, flash, redirect, request, session, url_for
from flask_admin import Admin, AdminIndexView, expose
from flask_admin.actions import action
from flask_admin.contrib.sqla import ModelView
from flask_admin.form import SecureForm
from flask_admin.theme import Bootstrap4Theme
from flask_wtf import FlaskForm
from werkzeug.security import check_password_hash
from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired

from models.family import (
    FamilyRecord, MemberRecord, STATUSES, STATUS_APPROVED, STATUS_PENDING, STATUS_REJECTED,
)
from services.approval_service import ApprovalService
from services.errors import RegistryError
from utils.permissions import ADMIN_SESSION_KEY, admin_signed_in


class AdminLoginForm(FlaskForm):
    username = StringField('Username', validators=[DataRequired()])
    password = PasswordField('Password', validators=[DataRequired()])


class AdminModelForm(SecureForm):
    """Flask-Admin form with session CSRF, switched off with WTF_CSRF_ENABLED like the rest of the app."""

    class Meta(SecureForm.Meta):
        @property
        def csrf(self):
            return current_app.config.get('WTF_CSRF_ENABLED', True)


def check_admin_credentials(username, password):
    """True if *username*/*password* match ADMIN_USERNAME / ADMIN_PASSWORD_HASH."""
    expected_user = current_app.config.get('ADMIN_USERNAME')
    password_hash = current_app.config.get('ADMIN_PASSWORD_HASH')
    if not expected_user or not password_hash:
        return False
    return username == expected_user and check_password_hash(password_hash, password)


# ---------------------------------------------------------------------------
# Base secure views
# ---------------------------------------------------------------------------

class SecureAdminIndexView(AdminIndexView):
    """Admin home page plus the admin sign-in/sign-out pages."""

    @expose('/')
    def index(self):
        if not admin_signed_in():
            return redirect(url_for('.login_view'))
        counts = {status: FamilyRecord.query.filter_by(status=status).count() for status in STATUSES}
        return self.render('admin/index.html', counts=counts)

    @expose('/login/', methods=('GET', 'POST'))
    def login_view(self):
        form = AdminLoginForm()
        if form.validate_on_submit():
            if check_admin_credentials(form.username.data, form.password.data):
                session[ADMIN_SESSION_KEY] = True
                current_app.logger.info(f'Admin {form.username.data!r} signed in from {request.remote_addr}')
                return redirect(url_for('.index'))
            current_app.logger.warning(f'Failed admin sign-in for {form.username.data!r}')
            flash('Invalid username or password.', 'error')
        return self.render('admin/login.html', form=form)

    @expose('/logout/')
    def logout_view(self):
        session.pop(ADMIN_SESSION_KEY, None)
        return redirect(url_for('.login_view'))


class SecureModelView(ModelView):
    """Full CRUD model view - admin only."""

    page_size = 50
    column_display_pk = True
    form_base_class = AdminModelForm

    def __init__(self, model, session, **kwargs):
        if 'endpoint' not in kwargs:
            kwargs['endpoint'] = f'admin_{model.__name__.lower()}'
        super().__init__(model, session, **kwargs)

    def is_accessible(self):
        return admin_signed_in()

    def inaccessible_callback(self, name, **kwargs):
        flash('Admin access required.', 'error')
        return redirect(url_for('admin.login_view'))


# ---------------------------------------------------------------------------
# Customised model views
# ---------------------------------------------------------------------------

class FamilyRecordAdminView(SecureModelView):
    """Registrations - review, approve or reject."""
    can_export = True
    column_list = [
        'id', 'family_head', 'email', 'dob', 'phone', 'city', 'gotra',
        'status', 'created_at',
    ]
    column_searchable_list = ['family_head', 'email', 'city', 'gotra']
    column_filters = ['status', 'city', 'gotra', 'created_at']
    named_filter_urls = True
    column_default_sort = ('created_at', True)
    form_choices = {'status': [(s, s.title()) for s in STATUSES]}
    form_excluded_columns = ['created_at', 'updated_at']
    inline_models = [(MemberRecord, {'form_excluded_columns': ['family']})]

    def _apply_status(self, ids, status):
        try:
            count = ApprovalService.set_status_many(ids, status)
        except RegistryError as e:
            flash(f'Could not update registrations, none were changed: {e}', 'error')
            return
        flash(f'{count} registration(s) marked {status}.', 'success')

    @action('approve', 'Approve', 'Approve the selected registrations?')
    def action_approve(self, ids):
        self._apply_status(ids, STATUS_APPROVED)

    @action('reject', 'Reject', 'Reject the selected registrations?')
    def action_reject(self, ids):
        self._apply_status(ids, STATUS_REJECTED)

    @action('reset', 'Back to pending', 'Return the selected registrations to pending?')
    def action_reset(self, ids):
        self._apply_status(ids, STATUS_PENDING)


class MemberRecordAdminView(SecureModelView):
    column_list = ['id', 'family', 'position', 'name', 'relation', 'age', 'marital_status']
    column_searchable_list = ['name', 'relation']
    column_filters = ['relation', 'marital_status', 'family_id']


# ---------------------------------------------------------------------------
# Admin factory
# ---------------------------------------------------------------------------

def init_admin(app, db):
    """Create the Flask-Admin instance and register the registry views."""

    admin = Admin(
        app,
        name='Family Registry Admin',
        theme=Bootstrap4Theme(),
        index_view=SecureAdminIndexView(),
        url='/admin',
    )

    admin.add_view(FamilyRecordAdminView(FamilyRecord, db.session, name='Registrations', category='Registry'))
    admin.add_view(MemberRecordAdminView(MemberRecord, db.session, name='Members', category='Registry'))

    return admin
