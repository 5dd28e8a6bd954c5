# File: admin_panel/forms.py
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SubmitField, HiddenField
from wtforms import SelectMultipleField
from wtforms.validators import DataRequired, Length, Optional, Regexp, ValidationError
from wtforms.widgets import ListWidget, CheckboxInput

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'

class LoginForm(FlaskForm):
    email = StringField('E-mail Address', validators=[DataRequired(), Length(max=255)])
    password = PasswordField('Password', validators=[DataRequired()])
    remember = BooleanField('Remember me')
    submit = SubmitField('Sign In')

class UserForm(FlaskForm):
    """Fields shared by the 'create' and 'update' validation profiles."""
    fullname = StringField('Full Name', validators=[DataRequired(), Length(max=100)])
    email = StringField('E-mail Address', validators=[
        DataRequired(), Length(max=255), Regexp(EMAIL_PATTERN, message='Enter a valid e-mail address.')
    ])
    roles = SelectMultipleField(
        'Roles',
        coerce=int,
        validators=[Optional()],
        widget=ListWidget(prefix_label=False),
        option_widget=CheckboxInput()
    )
    submit = SubmitField('Save')

    def __init__(self, *args, user_id=None, **kwargs):
        super(UserForm, self).__init__(*args, **kwargs)
        from admin_panel.models import Role
        self.user_id = user_id
        self.roles.choices = list(Role.lists().items())

    def validate_email(self, field):
        from admin_panel.models import User
        existing = User.query.filter(User.email == field.data).first()
        if existing and existing.id != self.user_id:
            raise ValidationError('This e-mail address is already registered.')

class UserCreateForm(UserForm):
    password = PasswordField('Password', validators=[DataRequired(), Length(max=128)])

class UserUpdateForm(UserForm):
    id = HiddenField(validators=[DataRequired()])
    password = PasswordField('Password', validators=[Optional(), Length(max=128)],
                             description='Leave blank to keep the current password.')

VALIDATION_PROFILES = {
    'create': UserCreateForm,
    'update': UserUpdateForm,
}

def validation_profile(name):
    try:
        return VALIDATION_PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown validation profile: {name!r}") from None
