from datetime import date, datetime

from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField, FileRequired
from wtforms import (
    BooleanField, DateField, PasswordField, SelectField, StringField, SubmitField, TextAreaField
)
from wtforms.validators import URL, DataRequired, Email, Length, Optional, ValidationError

from jobboard.models import JOB_STATUSES, JOB_TYPES, ROLES


def strip(value):
    return value.strip() if isinstance(value, str) else value


class SignupForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired(), Length(min=6)])
    submit = SubmitField('Create account')


class LoginForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired()])
    submit = SubmitField('Login')


class JobForm(FlaskForm):
    title = StringField('Job Title', filters=[strip], validators=[DataRequired()])
    description = TextAreaField('Job Description', filters=[strip], validators=[DataRequired()])
    salary_range = StringField('Salary Range', filters=[strip], validators=[DataRequired()])
    expires_at = DateField('Expires On', validators=[DataRequired()])
    status = SelectField('Status', choices=[(s, s.capitalize()) for s in JOB_STATUSES], default='active')
    company = StringField('Company', filters=[strip], validators=[Optional()])
    location = StringField('Location', filters=[strip], validators=[Optional()])
    is_remote = BooleanField('Remote')
    type = SelectField('Type', choices=[('', 'Unspecified')] + [(t, t) for t in JOB_TYPES], default='')
    requirements = TextAreaField('Requirements', filters=[strip], validators=[Optional()])
    contact_email = StringField('Contact Email', filters=[strip], validators=[Optional(), Email()])
    submit = SubmitField('Save Job')

    def validate_expires_at(self, field):
        value = field.data
        if isinstance(value, datetime):
            value = value.date()
        if value and value < date.today():
            raise ValidationError('Expiry date cannot be in the past')


class ProfileForm(FlaskForm):
    first_name = StringField('First Name', filters=[strip], validators=[Optional(), Length(max=100)])
    last_name = StringField('Last Name', filters=[strip], validators=[Optional(), Length(max=100)])
    email = StringField('Email', filters=[strip], validators=[Optional(), Email()])
    phone = StringField('Phone', filters=[strip], validators=[Optional(), Length(max=40)])
    role = SelectField('Role', choices=[('', 'Choose a role')] + [(r, r.capitalize()) for r in ROLES if r != 'admin'], default='')
    country = StringField('Country', filters=[strip], validators=[Optional()])
    city = StringField('City', filters=[strip], validators=[Optional()])
    bio = TextAreaField('Bio', filters=[strip], validators=[Optional()])
    skills = StringField('Skills (comma separated)', filters=[strip], validators=[Optional()])
    languages = StringField('Languages (comma separated)', filters=[strip], validators=[Optional()])
    portfolio_url = StringField('Portfolio', filters=[strip], validators=[Optional(), URL()])
    linkedin_url = StringField('LinkedIn', filters=[strip], validators=[Optional(), URL()])
    github_url = StringField('GitHub', filters=[strip], validators=[Optional(), URL()])
    website_url = StringField('Website', filters=[strip], validators=[Optional(), URL()])
    submit = SubmitField('Save Profile')


class AvatarForm(FlaskForm):
    avatar = FileField('Avatar', validators=[FileRequired(), FileAllowed(['png', 'jpg', 'jpeg', 'gif', 'webp'], 'Images only')])
    submit = SubmitField('Upload')


class ApplyForm(FlaskForm):
    cover_letter = TextAreaField('Cover Letter', filters=[strip], validators=[DataRequired(), Length(max=5000)])
    submit = SubmitField('Apply')


class ConfirmForm(FlaskForm):
    """Empty form carrying the CSRF token for delete / accept / reject buttons."""

    submit = SubmitField('Confirm')
