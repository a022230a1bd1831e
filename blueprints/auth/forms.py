"""
Authentication Forms
CSRF-protected login form for email + date-of-birth sign in
"""
from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField


class LoginForm(FlaskForm):
    """Login form with CSRF protection.

    Fields are deliberately unvalidated here: AuthService decides which of
    its fixed error messages applies, including for blank fields.
    """
    email = StringField('Email')
    dob = StringField('Date of Birth')
    submit = SubmitField('Sign In')
