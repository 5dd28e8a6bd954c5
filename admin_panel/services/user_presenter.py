# File: admin_panel/services/user_presenter.py
"""Builders that describe the users table and the user form for the templates.

Both builders are handed to event listeners before they are rendered, so other
parts of the application can append columns or fields. The users listing adds
its edit/delete action columns only after the listeners have run, which keeps
the actions as the last two columns.
"""
from typing import Any, Callable, List, Optional
from flask import url_for
from flask_babel import gettext
from markupsafe import Markup, escape
from admin_panel.forms import validation_profile
from admin_panel.utils.timezone_utils import format_datetime


class Column:
    def __init__(self, key: str, label: str, value: Optional[Callable[[Any], Any]] = None,
                 escape: bool = True, css_class: str = ''):
        self.key = key
        self.label = label
        self.value = value
        self.escape = escape
        self.css_class = css_class

    def render(self, row) -> Markup:
        raw = self.value(row) if self.value is not None else getattr(row, self.key, '')
        if raw is None:
            raw = ''
        return escape(raw) if self.escape else Markup(raw)

    def __repr__(self):
        return f'<Column {self.key}>'


class TableBuilder:
    def __init__(self, rows=(), empty_message: str = ''):
        self.rows = list(rows)
        self.columns: List[Column] = []
        self.empty_message = empty_message

    def add_column(self, key, label, value=None, escape=True, css_class='') -> Column:
        if key in self.keys:
            raise ValueError(f"Column '{key}' is already defined")
        column = Column(key, label, value=value, escape=escape, css_class=css_class)
        self.columns.append(column)
        return column

    @property
    def keys(self):
        return [column.key for column in self.columns]

    @property
    def headers(self):
        return [column.label for column in self.columns]

    def cells(self, row):
        return [(column, column.render(row)) for column in self.columns]


class ExtraField:
    """A field appended by a listener; rendered as a plain input."""
    def __init__(self, name, label, value='', type='text', description=None):
        self.name = name
        self.label = label
        self.value = value
        self.type = type
        self.description = description


class FormBuilder:
    def __init__(self, form, mode, action, method, field_names):
        self.form = form
        self.mode = mode
        self.action = action
        self.method = method
        self.field_names = list(field_names)
        self.extra_fields: List[ExtraField] = []

    @property
    def fields(self):
        return [self.form[name] for name in self.field_names]

    def add_field(self, name, label, value='', type='text', description=None) -> ExtraField:
        field = ExtraField(name, label, value=value, type=type, description=description)
        self.extra_fields.append(field)
        return field

    @property
    def is_create(self):
        return self.mode == 'create'


class UserPresenter:
    FORM_FIELDS = ('fullname', 'email', 'password', 'roles')

    @staticmethod
    def table(pagination) -> TableBuilder:
        table = TableBuilder(pagination.items, empty_message=gettext('No users found.'))
        table.add_column('fullname', gettext('Full Name'))
        table.add_column('email', gettext('E-mail Address'))
        table.add_column('roles', gettext('Roles'), value=_role_badges, escape=False)
        table.add_column('status', gettext('Status'), value=lambda user: user.status.value.title())
        table.add_column('created_at', gettext('Created'), value=lambda user: format_datetime(user.created_at))
        return table

    @staticmethod
    def actions(table: TableBuilder, acting_user_id=None) -> TableBuilder:
        table.add_column('edit', '', value=_edit_link, escape=False, css_class='action')
        table.add_column('delete', '', value=lambda user: _delete_link(user, acting_user_id),
                         escape=False, css_class='action')
        return table

    @staticmethod
    def form(user, mode, old_input=None, errors=None) -> FormBuilder:
        profile = validation_profile(mode)
        if old_input is not None:
            form = profile(formdata=None, data=old_input, user_id=user.id)
        else:
            form = profile(formdata=None, obj=user, user_id=user.id)
            form.roles.data = user.role_ids
        form.password.data = ''

        for name, messages in (errors or {}).items():
            if name in form:
                form[name].errors = list(messages)

        if mode == 'create':
            action, method = url_for('users.store'), 'POST'
        else:
            form.id.data = user.id
            action, method = url_for('users.update', user_id=user.id), 'PUT'

        return FormBuilder(form, mode, action, method, UserPresenter.FORM_FIELDS)


def _role_badges(user):
    return Markup(' ').join(
        Markup('<span class="badge">{}</span>').format(role.name) for role in user.roles
    )

def _edit_link(user):
    return Markup('<a href="{}">{}</a>').format(url_for('users.edit', user_id=user.id), gettext('Edit'))

def _delete_link(user, acting_user_id):
    if acting_user_id is not None and user.id == acting_user_id:
        return ''
    return Markup(
        '<a href="{}" hx-delete="{}" hx-confirm="{}">{}</a>'
    ).format(
        url_for('users.delete', user_id=user.id),
        url_for('users.destroy', user_id=user.id),
        gettext('Delete this user?'),
        gettext('Delete'),
    )
