"""Test configuration and fixtures."""
import pytest
from flask_login import FlaskLoginClient

from admin_panel import create_app
from admin_panel.events import Phase, Scope, signal_for
from admin_panel.extensions import db
from admin_panel.models import Role, User, UserStatus

ADMIN_ID = 1
ADA_ID = 5
MEMBER_ID = 7

ADMIN_ROLE_ID = 1
EDITOR_ROLE_ID = 2
VIEWER_ROLE_ID = 3


def _seed():
    admin_role = Role(id=ADMIN_ROLE_ID, name='Administrator', permissions=['manage_users'])
    editor_role = Role(id=EDITOR_ROLE_ID, name='Editor', permissions=[])
    viewer_role = Role(id=VIEWER_ROLE_ID, name='Viewer', permissions=[])
    db.session.add_all([admin_role, editor_role, viewer_role])

    admin = User(id=ADMIN_ID, fullname='Grace Hopper', email='grace@example.com', status=UserStatus.VERIFIED)
    admin.set_password('admin-password')
    admin.roles = [admin_role]

    ada = User(id=ADA_ID, fullname='Ada Lovelace', email='ada@example.com', status=UserStatus.VERIFIED)
    ada.set_password('ada-password')
    ada.roles = [admin_role, editor_role, viewer_role]

    member = User(id=MEMBER_ID, fullname='Alan Turing', email='alan@example.com', status=UserStatus.UNVERIFIED)
    member.set_password('alan-password')
    member.roles = [viewer_role]

    db.session.add_all([admin, ada, member])
    db.session.commit()


@pytest.fixture
def app():
    """Application with a fresh in-memory database per test."""
    app = create_app('testing')
    app.test_client_class = FlaskLoginClient

    with app.app_context():
        db.create_all()
        _seed()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


def _client_for(app, user_id):
    with app.app_context():
        user = db.session.get(User, user_id)
        return app.test_client(user=user)


@pytest.fixture
def client(app):
    """Anonymous test client."""
    return app.test_client()


@pytest.fixture
def admin_client(app):
    return _client_for(app, ADMIN_ID)


@pytest.fixture
def ada_client(app):
    return _client_for(app, ADA_ID)


@pytest.fixture
def member_client(app):
    return _client_for(app, MEMBER_ID)


@pytest.fixture
def recorded_events():
    """Records every lifecycle notification as (phase, scope) pairs."""
    recorded = []
    receivers = []

    for phase in Phase:
        for scope in Scope:
            def receiver(sender, _phase=phase, _scope=scope, **payload):
                recorded.append((_phase, _scope))
            signal_for(phase, scope).connect(receiver, weak=False)
            receivers.append((phase, scope, receiver))

    yield recorded

    for phase, scope, receiver in receivers:
        signal_for(phase, scope).disconnect(receiver)


@pytest.fixture
def listener():
    """Connect ad-hoc receivers that are disconnected after the test."""
    connected = []

    def _connect(phase, receiver, scope=Scope.USERS):
        signal_for(phase, scope).connect(receiver, weak=False)
        connected.append((phase, scope, receiver))
        return receiver

    yield _connect

    for phase, scope, receiver in connected:
        signal_for(phase, scope).disconnect(receiver)


def flashes(client):
    with client.session_transaction() as sess:
        return list(sess.get('_flashes', []))
