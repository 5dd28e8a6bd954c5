# File: admin_panel/routes/users.py
from flask import (
    Blueprint, render_template, flash, request, current_app, abort
)
from flask_babel import gettext
from flask_login import login_required, current_user
from admin_panel.models import User, Role, UserStatus
from admin_panel.forms import validation_profile
from admin_panel.events import Phase, emit
from admin_panel.services.user_presenter import UserPresenter
from admin_panel.services.user_service import UserService
from admin_panel.utils.helpers import permission_required, redirect_to, flash_input, pop_flashed_input

bp = Blueprint('users', __name__)

MANAGE_USERS = 'manage_users'


@bp.before_request
@login_required
@permission_required(MANAGE_USERS)
def require_user_manager():
    """Both filters run ahead of every action in this blueprint."""
    return None


@bp.route('', methods=['GET'])
def index():
    keyword = request.args.get('q', '').strip()
    role_ids = request.args.getlist('roles', type=int)
    page = request.args.get('page', 1, type=int)
    per_page = current_app.config.get('USERS_PER_PAGE', 30)

    users = UserService.get_users_with_pagination(keyword, role_ids, page=page, per_page=per_page)

    table = UserPresenter.table(users)
    emit(Phase.LIST, users=users, table=table)
    # Listeners have had their turn; the action columns always come last.
    UserPresenter.actions(table, acting_user_id=current_user.id)

    return render_template(
        'users/index.html',
        title=gettext('List Users'),
        eloquent=users,
        table=table,
        roles=Role.lists(),
        keyword=keyword,
        selected_roles=role_ids
    )


@bp.route('/<int:user_id>', methods=['GET'])
def show(user_id):
    return edit(user_id)


@bp.route('/create', methods=['GET'])
def create():
    user = User()
    return _render_form(user, 'create', gettext('Create User'))


@bp.route('/<int:user_id>/edit', methods=['GET'])
def edit(user_id):
    user = User.find(user_id)
    if user is None:
        abort(404)
    return _render_form(user, 'update', gettext('Update User'))


@bp.route('', methods=['POST'])
def store():
    form = validation_profile('create')()
    if not form.validate():
        flash_input(_old_input(), form.errors, target=('create', None))
        return redirect_to('users.create')

    # The create profile requires a password, so apply_input always sets one
    user = User(status=UserStatus.UNVERIFIED)

    _persist(user, form, 'create')
    return redirect_to('users.index')


@bp.route('/<int:user_id>', methods=['PUT'])
def update(user_id):
    # The hidden id must agree with the URL before anything else happens.
    try:
        submitted_id = int(request.form.get('id', ''))
    except ValueError:
        submitted_id = None
    if submitted_id != user_id:
        current_app.logger.error(f"Users.py - update(): path id {user_id} does not match submitted id {request.form.get('id')!r}.")
        abort(500)

    form = validation_profile('update')(user_id=user_id)
    if not form.validate():
        flash_input(_old_input(), form.errors, target=('update', user_id))
        return redirect_to('users.edit', user_id=user_id)

    user = User.find(user_id)
    if user is None:
        abort(404)

    _persist(user, form, 'update')
    return redirect_to('users.index')


@bp.route('/<int:user_id>/delete', methods=['GET'])
def delete(user_id):
    return destroy(user_id)


@bp.route('/<int:user_id>', methods=['DELETE'])
def destroy(user_id):
    user = UserService.find_deletable(user_id, acting_user_id=current_user.id)
    if user is None:
        abort(404)

    try:
        UserService.delete(user)
        flash(gettext('User has been deleted.'), 'success')
    except Exception as e:
        current_app.logger.error(f"Users.py - destroy(): could not delete user {user_id}: {e}", exc_info=True)
        flash(gettext('Unable to save changes to the database: %(error)s', error=str(e)), 'error')

    return redirect_to('users.index')


def _render_form(user, mode, title):
    old_input, errors = pop_flashed_input(target=(mode, user.id))
    form = UserPresenter.form(user, mode, old_input=old_input, errors=errors)
    emit(Phase.FORM, user=user, form=form)

    return render_template(
        'users/edit.html',
        title=title,
        eloquent=user,
        form=form
    )


def _persist(user, form, mode):
    """Shared save for store and update; reports the outcome as a flash message."""
    UserService.apply_input(user, {
        'fullname': form.fullname.data,
        'email': form.email.data,
        'password': form.password.data,
    })

    try:
        UserService.save(user, form.roles.data, mode)
    except Exception as e:
        current_app.logger.error(f"Users.py - _persist(): {mode} failed: {e}", exc_info=True)
        flash(gettext('Unable to save changes to the database: %(error)s', error=str(e)), 'error')
        return False

    if mode == 'create':
        flash(gettext('User has been created.'), 'success')
    else:
        flash(gettext('User has been updated.'), 'success')
    return True


def _old_input():
    # Passwords are never carried back into a form.
    return {
        'fullname': request.form.get('fullname', ''),
        'email': request.form.get('email', ''),
        'roles': request.form.getlist('roles'),
    }
