# File: admin_panel/routes/auth.py
from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_babel import gettext
from flask_login import login_user, logout_user, login_required, current_user
from admin_panel.utils.helpers import log_event, is_safe_url
from admin_panel.models import User, EventType
from admin_panel.forms import LoginForm

bp = Blueprint('auth', __name__)


@bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('users.index'))

    form = LoginForm()
    if form.validate_on_submit():
        input_email = (form.email.data or '').strip()
        user = User.query.filter_by(email=input_email).first()

        if user and user.check_password(form.password.data or ''):
            login_user(user, remember=form.remember.data)
            log_event(EventType.ADMIN_LOGIN_SUCCESS, f"User '{user.email}' logged in.", actor_id=user.id)

            next_page = request.args.get('next')
            if not next_page or not is_safe_url(next_page):
                next_page = url_for('users.index')
            return redirect(next_page)

        log_event(EventType.ADMIN_LOGIN_FAIL, f"Failed login attempt for '{input_email}'.")
        flash(gettext('Invalid e-mail address or password.'), 'error')

    return render_template('auth/login.html', title=gettext('Sign In'), form=form)


@bp.route('/logout')
@login_required
def logout():
    log_event(EventType.ADMIN_LOGOUT, f"User '{current_user.email}' logged out.")
    logout_user()
    flash(gettext('You have been logged out.'), 'info')
    return redirect(url_for('auth.login'))
