"""
Registration Form
Head-of-family fields and the profile photo.  Member rows are posted as
parallel fields and parsed separately by utils.member_fields.
"""
from flask_wtf import FlaskForm
from flask_wtf.file import FileField
from wtforms import StringField, TextAreaField, SubmitField
from wtforms.validators import Optional


class RegistrationForm(FlaskForm):
    """Family registration form with CSRF protection"""
    value = StringField('Family Head', validators=[Optional()])
    gender = StringField('Gender', validators=[Optional()])
    dob = StringField('Date of Birth', validators=[Optional()])
    phone = StringField('Phone', validators=[Optional()])
    email = StringField('Email', validators=[Optional()])
    city = StringField('City', validators=[Optional()])
    locality = StringField('Locality', validators=[Optional()])
    occupation = StringField('Occupation', validators=[Optional()])
    gotra = StringField('Gotra', validators=[Optional()])
    nativePlace = StringField('Native Place', validators=[Optional()])
    bloodGroup = StringField('Blood Group', validators=[Optional()])
    address = TextAreaField('Address', validators=[Optional()])
    files = FileField('Profile Photo')
    submit = SubmitField('Register')
