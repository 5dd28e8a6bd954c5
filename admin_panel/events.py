# File: admin_panel/events.py
"""Lifecycle notifications for the user administration screens.

Every phase is broadcast twice with the same payload: once on the ``users``
channel and once on the ``user.account`` channel, so listeners can subscribe
at either granularity. The channels are blinker signals, the same machinery
Flask uses for ``template_rendered`` and ``request_started``; the sender is
always the Flask application.
"""
import enum
from blinker import Namespace
from flask import current_app

_signals = Namespace()


class Scope(enum.Enum):
    USERS = "users"
    ACCOUNT = "user.account"


class Phase(enum.Enum):
    LIST = "list"
    FORM = "form"
    CREATING = "creating"
    CREATED = "created"
    UPDATING = "updating"
    UPDATED = "updated"
    SAVING = "saving"
    SAVED = "saved"
    DELETING = "deleting"
    DELETED = "deleted"

    @classmethod
    def before(cls, mode):
        """Phase fired ahead of a write for a 'create' or 'update' save."""
        return cls.CREATING if mode == 'create' else cls.UPDATING

    @classmethod
    def after(cls, mode):
        return cls.CREATED if mode == 'create' else cls.UPDATED


def signal_for(phase: Phase, scope: Scope):
    return _signals.signal(f"admin.{phase.value}: {scope.value}")


def emit(phase: Phase, **payload):
    """Send ``payload`` to the listeners of ``phase`` on both channels."""
    sender = current_app._get_current_object()
    for scope in Scope:
        signal_for(phase, scope).send(sender, **payload)


def connect(phase: Phase, receiver, scope: Scope = None, weak: bool = False):
    """Subscribe ``receiver`` to one channel, or to both when ``scope`` is None.

    Subscribing to both channels means the receiver runs twice per emit.
    Returns the receiver so this can be used from a decorator.
    """
    scopes = list(Scope) if scope is None else [scope]
    for each in scopes:
        signal_for(phase, each).connect(receiver, weak=weak)
    return receiver


def disconnect(phase: Phase, receiver, scope: Scope = None):
    scopes = list(Scope) if scope is None else [scope]
    for each in scopes:
        signal_for(phase, each).disconnect(receiver)
