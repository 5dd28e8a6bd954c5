"""Tests for the user and role models."""
from admin_panel.extensions import db
from admin_panel.models import Role, User
from tests.conftest import ADA_ID, MEMBER_ID, ADMIN_ROLE_ID, EDITOR_ROLE_ID, VIEWER_ROLE_ID


def test_sync_roles_replaces_the_whole_set(app):
    with app.app_context():
        user = db.session.get(User, ADA_ID)
        user.sync_roles([VIEWER_ROLE_ID, str(EDITOR_ROLE_ID)])
        db.session.commit()

        assert sorted(db.session.get(User, ADA_ID).role_ids) == [EDITOR_ROLE_ID, VIEWER_ROLE_ID]


def test_sync_roles_with_nothing_clears_roles(app):
    with app.app_context():
        user = db.session.get(User, ADA_ID)
        user.sync_roles(None)
        db.session.commit()

        assert db.session.get(User, ADA_ID).roles == []


def test_find_returns_none_for_missing_or_malformed_ids(app):
    with app.app_context():
        assert User.find(ADA_ID).email == 'ada@example.com'
        assert User.find(str(ADA_ID)).id == ADA_ID
        assert User.find(999) is None
        assert User.find('abc') is None
        assert User.find(None) is None


def test_search_by_keyword_matches_name_or_email(app):
    with app.app_context():
        assert [u.id for u in User.search('TURING')] == [MEMBER_ID]
        assert [u.id for u in User.search('ada@')] == [ADA_ID]
        assert len(User.search('').all()) == 3


def test_search_by_roles_matches_any_role(app):
    with app.app_context():
        assert [u.id for u in User.search(role_ids=[EDITOR_ROLE_ID])] == [ADA_ID]
        assert [u.id for u in User.search(role_ids=[EDITOR_ROLE_ID, VIEWER_ROLE_ID])] == [ADA_ID, MEMBER_ID]
        assert User.search('alan', role_ids=[ADMIN_ROLE_ID]).all() == []


def test_role_lists_is_ordered_by_name(app):
    with app.app_context():
        db.session.add(Role(name='Auditor', permissions=[]))
        db.session.commit()

        names = list(Role.lists().values())

    assert names == ['Administrator', 'Auditor', 'Editor', 'Viewer']


def test_permissions_come_from_roles(app):
    with app.app_context():
        assert db.session.get(User, ADA_ID).has_permission('manage_users')
        assert not db.session.get(User, MEMBER_ID).has_permission('manage_users')


def test_password_hashing(app):
    user = User(fullname='Test', email='test@example.com')
    assert not user.check_password('anything')

    user.set_password('correct horse')
    assert user.password_hash != 'correct horse'
    assert user.check_password('correct horse')
    assert not user.check_password('battery staple')
