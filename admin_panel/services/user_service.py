# File: admin_panel/services/user_service.py
from flask import current_app
from admin_panel.models import User
from admin_panel.extensions import db
from admin_panel.events import Phase, emit

class UserService:
    """Transactional writes for user accounts, wrapped in lifecycle events.

    ``save`` and ``delete`` roll the session back and re-raise on any error,
    including errors raised by listeners; callers decide how to report them.
    Events fired before the failure are not undone.
    """

    @staticmethod
    def get_users_with_pagination(keyword: str = '', role_ids=(), page: int = 1, per_page: int = 30):
        query = User.search(keyword, role_ids)
        return query.paginate(page=page, per_page=per_page, error_out=False)

    @staticmethod
    def apply_input(user: User, data: dict):
        """Copy submitted attributes; the password only when a new one was typed."""
        user.fullname = data.get('fullname')
        user.email = data.get('email')
        if data.get('password'):
            user.set_password(data['password'])
        return user

    @staticmethod
    def save(user: User, role_ids, mode: str = 'create'):
        try:
            emit(Phase.before(mode), user=user)
            emit(Phase.SAVING, user=user)

            # User row and role set commit together or not at all
            db.session.add(user)
            user.sync_roles(role_ids)
            db.session.commit()
            current_app.logger.info(f"User_Service.py - save(): {mode} of user {user.id} committed.")

            emit(Phase.after(mode), user=user)
            emit(Phase.SAVED, user=user)
        except Exception:
            db.session.rollback()
            raise
        return user

    @staticmethod
    def find_deletable(user_id, acting_user_id):
        """The user to delete, or None when missing or when it is the acting user."""
        user = User.find(user_id)
        if user is None or user.id == acting_user_id:
            return None
        return user

    @staticmethod
    def delete(user: User):
        user_id = user.id
        try:
            emit(Phase.DELETING, user=user)

            user.sync_roles([])
            db.session.flush()
            db.session.delete(user)
            db.session.commit()
            current_app.logger.info(f"User_Service.py - delete(): user {user_id} deleted.")

            emit(Phase.DELETED, user=user)
        except Exception:
            db.session.rollback()
            raise
        return True
