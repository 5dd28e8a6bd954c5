"""Tests for the lifecycle notification channels."""
from admin_panel import events
from admin_panel.events import Phase, Scope, emit, signal_for


def test_emit_reaches_both_channels_in_order(app, recorded_events):
    with app.app_context():
        emit(Phase.SAVING, user=None)

    assert recorded_events == [(Phase.SAVING, Scope.USERS), (Phase.SAVING, Scope.ACCOUNT)]


def test_emit_sends_application_and_payload(app, listener):
    received = []

    def receiver(sender, **payload):
        received.append((sender, payload))

    listener(Phase.FORM, receiver, scope=Scope.ACCOUNT)

    with app.app_context():
        emit(Phase.FORM, user='ada')

    assert received == [(app, {'user': 'ada'})]


def test_channel_names():
    assert signal_for(Phase.LIST, Scope.USERS).name == 'admin.list: users'
    assert signal_for(Phase.SAVED, Scope.ACCOUNT).name == 'admin.saved: user.account'
    assert signal_for(Phase.FORM, Scope.USERS) is signal_for(Phase.FORM, Scope.USERS)


def test_before_and_after_phases_follow_mode():
    assert Phase.before('create') is Phase.CREATING
    assert Phase.after('create') is Phase.CREATED
    assert Phase.before('update') is Phase.UPDATING
    assert Phase.after('update') is Phase.UPDATED


def test_connect_without_scope_subscribes_to_both_channels(app):
    calls = []

    def receiver(sender, **payload):
        calls.append(payload['marker'])

    events.connect(Phase.SAVED, receiver)
    try:
        with app.app_context():
            emit(Phase.SAVED, marker='x')
    finally:
        events.disconnect(Phase.SAVED, receiver)

    assert calls == ['x', 'x']

    with app.app_context():
        emit(Phase.SAVED, marker='y')
    assert calls == ['x', 'x']


def test_connect_to_one_scope_only(app):
    calls = []

    def receiver(sender, **payload):
        calls.append(payload['marker'])

    events.connect(Phase.SAVING, receiver, scope=Scope.USERS)
    try:
        with app.app_context():
            emit(Phase.SAVING, marker='x')
    finally:
        events.disconnect(Phase.SAVING, receiver, scope=Scope.USERS)

    assert calls == ['x']
