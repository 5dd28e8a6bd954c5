# File: admin_panel/utils/helpers.py
from urllib.parse import urlsplit, urljoin
from flask import current_app, url_for, redirect, request, session, make_response, abort
from functools import wraps
from flask_login import current_user
# Models and db are imported inside the functions below; models import this
# package indirectly and a module-level import would be circular.

OLD_INPUT_KEY = '_old_input'
FORM_ERRORS_KEY = '_form_errors'
INPUT_TARGET_KEY = '_old_input_target'


def permission_required(permission_name):
    """Decorator to check if a logged-in user has a specific permission."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                from admin_panel.extensions import login_manager
                return login_manager.unauthorized()

            if current_user.has_permission(permission_name):
                return f(*args, **kwargs)

            current_app.logger.warning(
                f"Helpers.py - permission_required(): user {current_user.id} lacks '{permission_name}' for {request.endpoint}."
            )
            abort(403)
        return decorated_function
    return decorator


def log_event(event_type, message: str, details: dict = None,
              actor_id: int = None, subject_id: int = None):
    """Logs an event to the HistoryLog. Never raises; failures are rolled back and logged."""
    from admin_panel.models import HistoryLog, EventType as EventTypeEnum
    from admin_panel.extensions import db

    if not isinstance(event_type, EventTypeEnum):
        current_app.logger.error(f"Invalid event_type provided to log_event: {event_type}")
        return

    try:
        log_entry = HistoryLog(
            event_type=event_type,
            message=message,
            details=details or {},
            subject_id=subject_id
        )
        if actor_id is not None:
            log_entry.actor_id = actor_id
        elif current_user and current_user.is_authenticated:
            log_entry.actor_id = current_user.id

        db.session.add(log_entry)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error logging event (original: {event_type.name} - {message}): {e}")


def redirect_to(endpoint, **values):
    """Redirect, or ask HTMX for a full page navigation when the request came from it."""
    from admin_panel.extensions import htmx

    target = url_for(endpoint, **values)
    if htmx:
        response = make_response("", 204)
        response.headers['HX-Redirect'] = target
        return response
    return redirect(target)


def flash_input(data: dict, errors: dict, target):
    """Keep submitted values and field errors for the next render of the form named by target."""
    session[INPUT_TARGET_KEY] = list(target)
    session[OLD_INPUT_KEY] = data
    session[FORM_ERRORS_KEY] = {field: [str(message) for message in messages] for field, messages in errors.items()}


def pop_flashed_input(target):
    """Old input and errors for target, or (None, {}). Stored input is discarded either way."""
    stored_target = session.pop(INPUT_TARGET_KEY, None)
    old_input = session.pop(OLD_INPUT_KEY, None)
    errors = session.pop(FORM_ERRORS_KEY, None) or {}
    if stored_target is None or list(stored_target) != list(target):
        return None, {}
    return old_input, errors


def is_safe_url(target):
    host_url = urlsplit(request.host_url); redirect_url = urlsplit(urljoin(request.host_url, target))
    return redirect_url.scheme in ('http', 'https') and host_url.netloc == redirect_url.netloc
