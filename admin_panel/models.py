# File: admin_panel/models.py
import enum
from typing import Dict, Iterable, Optional
from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin
from sqlalchemy.ext.mutable import MutableDict, MutableList
from admin_panel.extensions import db, JSONEncodedDict
from admin_panel.utils.timezone_utils import utcnow

# Many-to-many relationship table for users and roles
user_roles = db.Table('user_roles',
    db.Column('user_id', db.Integer, db.ForeignKey('users.id'), primary_key=True),
    db.Column('role_id', db.Integer, db.ForeignKey('roles.id'), primary_key=True)
)

class UserStatus(enum.Enum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"

class EventType(enum.Enum):
    USER_CREATED = "USER_CREATED"; USER_UPDATED = "USER_UPDATED"; USER_DELETED = "USER_DELETED"
    ADMIN_LOGIN_SUCCESS = "ADMIN_LOGIN_SUCCESS"; ADMIN_LOGIN_FAIL = "ADMIN_LOGIN_FAIL"; ADMIN_LOGOUT = "ADMIN_LOGOUT"
    ERROR_GENERAL = "ERROR_GENERAL"

class Role(db.Model):
    __tablename__ = 'roles'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), unique=True, nullable=False)
    # Permissions for this role are stored as a simple JSON list of strings.
    permissions = db.Column(MutableList.as_mutable(JSONEncodedDict), nullable=True, default=list)

    def __repr__(self):
        return f'<Role {self.name}>'

    @staticmethod
    def lists() -> Dict[int, str]:
        """Role names keyed by id, ordered by name, for select boxes and filters."""
        return {role.id: role.name for role in Role.query.order_by(Role.name).all()}

class User(db.Model, UserMixin):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    fullname = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=True)
    status = db.Column(db.Enum(UserStatus), default=UserStatus.UNVERIFIED, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    roles = db.relationship('Role', secondary=user_roles, lazy='subquery',
                            backref=db.backref('users', lazy=True))

    def __repr__(self):
        return f'<User {self.email}>'

    # Authentication Methods
    def set_password(self, password):
        self.password_hash = generate_password_hash(password, method='pbkdf2:sha256')

    def check_password(self, password):
        if self.password_hash:
            return check_password_hash(self.password_hash, password)
        return False

    def has_permission(self, permission_name):
        return any(permission_name in (role.permissions or []) for role in self.roles)

    def sync_roles(self, role_ids: Iterable[int]):
        """Replace the whole role set with exactly the given role ids."""
        role_ids = {int(role_id) for role_id in role_ids or []}
        if not role_ids:
            self.roles = []
            return
        self.roles = Role.query.filter(Role.id.in_(role_ids)).order_by(Role.id).all()

    @property
    def role_ids(self):
        return [role.id for role in self.roles]

    @staticmethod
    def find(user_id) -> Optional['User']:
        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None

    @staticmethod
    def search(keyword: str = '', role_ids: Iterable[int] = ()):
        """Users matching keyword (name or email) and holding any of role_ids."""
        query = User.query
        if keyword:
            # Wildcards typed by the user are matched literally
            query = query.filter(
                db.or_(
                    User.fullname.icontains(keyword, autoescape=True),
                    User.email.icontains(keyword, autoescape=True)
                )
            )
        role_ids = [int(role_id) for role_id in role_ids or []]
        if role_ids:
            query = query.filter(User.roles.any(Role.id.in_(role_ids)))
        return query.order_by(User.id)

class HistoryLog(db.Model):
    __tablename__ = 'history_logs'; id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime, default=utcnow, index=True)
    event_type = db.Column(db.Enum(EventType), nullable=False, index=True); message = db.Column(db.Text, nullable=False)
    details = db.Column(MutableDict.as_mutable(JSONEncodedDict), nullable=True)
    actor_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    actor = db.relationship('User', foreign_keys='HistoryLog.actor_id')
    # Plain column so the entry outlives the user it describes
    subject_id = db.Column(db.Integer, nullable=True, index=True)
    def __repr__(self): return f'<HistoryLog {self.timestamp} [{self.event_type.name}]: {self.message[:50]}>'
