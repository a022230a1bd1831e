"""
Authentication Routes
Login with email + date of birth, and logout
"""
from flask import render_template, redirect, url_for, flash, current_app
from sqlalchemy.exc import SQLAlchemyError
from . import auth_bp
from .forms import LoginForm
from extensions import db
from services.auth_service import AuthService
from services.errors import LoginError
from utils.permissions import redirect_if_authenticated

LOGIN_FAILED_MESSAGE = 'Login failed. Please try again.'


@auth_bp.route('/login', methods=['GET'])
@redirect_if_authenticated
def login():
    """Login prompt"""
    return render_template('auth/login.html', form=LoginForm(), error=None)


@auth_bp.route('/login', methods=['POST'])
def login_submit():
    """Check email + DOB against approved registrations"""
    form = LoginForm()
    
    if not form.validate_on_submit():
        # Only CSRF can fail here - the fields carry no validators
        return render_template('auth/login.html', form=form,
                               error='Your session expired. Please try again.'), 400
    
    try:
        AuthService.login(form.email.data, form.dob.data)
    except LoginError as e:
        current_app.logger.info(f'Login refused for {form.email.data!r}: {e.code}')
        return render_template('auth/login.html', form=form, error=e.message)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Login lookup failed')
        return render_template('auth/login.html', form=form, error=LOGIN_FAILED_MESSAGE)
    
    return redirect(url_for('dashboard.index'))


@auth_bp.route('/logout')
def logout():
    """Destroy the session and return to the login page"""
    AuthService.end_session()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
