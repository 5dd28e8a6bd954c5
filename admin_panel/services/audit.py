# File: admin_panel/services/audit.py
"""History log entries for committed user changes."""
from admin_panel.events import Phase, Scope, connect
from admin_panel.models import EventType
from admin_panel.utils.helpers import log_event


def log_user_created(sender, user, **extra):
    log_event(EventType.USER_CREATED, f"User '{user.email}' created.", subject_id=user.id)


def log_user_updated(sender, user, **extra):
    log_event(EventType.USER_UPDATED, f"User '{user.email}' updated.",
              details={'roles': user.role_ids}, subject_id=user.id)


def log_user_deleted(sender, user, **extra):
    log_event(EventType.USER_DELETED, f"User '{user.email}' deleted.", subject_id=user.id)


def register_audit_listeners():
    # Only the 'users' channel, otherwise each change would be logged twice.
    connect(Phase.CREATED, log_user_created, scope=Scope.USERS)
    connect(Phase.UPDATED, log_user_updated, scope=Scope.USERS)
    connect(Phase.DELETED, log_user_deleted, scope=Scope.USERS)
