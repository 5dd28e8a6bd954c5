"""Tests for the table and form builders."""
from types import SimpleNamespace

import pytest

from admin_panel.extensions import db
from admin_panel.models import User
from admin_panel.services.user_presenter import TableBuilder, UserPresenter
from tests.conftest import ADA_ID, EDITOR_ROLE_ID


def test_duplicate_column_is_rejected():
    table = TableBuilder([])
    table.add_column('email', 'E-mail')

    with pytest.raises(ValueError):
        table.add_column('email', 'Again')


def test_cells_escape_values_unless_told_otherwise():
    row = SimpleNamespace(fullname='<b>Ada</b>')
    table = TableBuilder([row])
    table.add_column('fullname', 'Name')
    table.add_column('raw', 'Raw', value=lambda r: r.fullname, escape=False)

    (_, escaped), (_, raw) = table.cells(row)

    assert str(escaped) == '&lt;b&gt;Ada&lt;/b&gt;'
    assert str(raw) == '<b>Ada</b>'


def test_action_columns_are_appended_last(app):
    with app.test_request_context():
        users = User.query.order_by(User.id).all()
        table = UserPresenter.table(SimpleNamespace(items=users))
        table.add_column('extra', 'Extra')
        UserPresenter.actions(table, acting_user_id=ADA_ID)

        assert table.keys == ['fullname', 'email', 'roles', 'status', 'created_at', 'extra', 'edit', 'delete']

        ada = db.session.get(User, ADA_ID)
        cells = dict((column.key, value) for column, value in table.cells(ada))
        assert cells['delete'] == ''
        assert '/users/5/edit' in cells['edit']
        assert 'Editor' in cells['roles']


def test_update_form_is_filled_from_the_user(app):
    with app.test_request_context():
        ada = db.session.get(User, ADA_ID)
        builder = UserPresenter.form(ada, 'update')

        assert builder.method == 'PUT'
        assert builder.action == '/users/5'
        assert builder.form.fullname.data == 'Ada Lovelace'
        assert builder.form.id.data == ADA_ID
        assert builder.form.password.data == ''
        assert sorted(builder.form.roles.data) == [1, 2, 3]
        assert not builder.is_create


def test_create_form_prefers_old_input_and_errors(app):
    with app.test_request_context():
        builder = UserPresenter.form(
            User(),
            'create',
            old_input={'fullname': 'Ada', 'email': 'bad', 'roles': [EDITOR_ROLE_ID]},
            errors={'email': ['Enter a valid e-mail address.'], 'unknown': ['ignored']},
        )

        assert builder.method == 'POST'
        assert builder.action == '/users'
        assert builder.form.email.data == 'bad'
        assert builder.form.roles.data == [EDITOR_ROLE_ID]
        assert builder.form.email.errors == ['Enter a valid e-mail address.']
        assert [field.name for field in builder.fields] == ['fullname', 'email', 'password', 'roles']


def test_unknown_form_mode_is_rejected(app):
    with app.test_request_context():
        with pytest.raises(ValueError):
            UserPresenter.form(User(), 'archive')
