# File: admin_panel/cli.py
import click
from admin_panel.extensions import db
from admin_panel.models import Role, User, UserStatus

DEFAULT_ROLES = {
    'Administrator': ['manage_users'],
    'Member': [],
}


def ensure_default_roles():
    """Create the default roles that are missing. Returns the names created."""
    created = []
    for name, permissions in DEFAULT_ROLES.items():
        if not Role.query.filter_by(name=name).first():
            db.session.add(Role(name=name, permissions=list(permissions)))
            created.append(name)
    db.session.commit()
    return created


def register_commands(app):

    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables. Migrations are preferred for schema changes."""
        db.create_all()
        click.echo("Initialized the database.")

    @app.cli.command("seed-roles")
    def seed_roles_command():
        """Create the default Administrator and Member roles if they are missing."""
        created = ensure_default_roles()
        if created:
            click.echo(f"Created roles: {', '.join(created)}.")
        else:
            click.echo("Default roles already exist.")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    @click.option("--fullname", default="Administrator", help="Display name for the account.")
    def create_admin_command(email, password, fullname):
        """Create a verified user holding the Administrator role."""
        email = email.strip()
        if not email or not password:
            raise click.UsageError("E-mail address and password are required.")
        if User.query.filter_by(email=email).first():
            click.echo(f"User '{email}' already exists.", err=True)
            raise SystemExit(1)

        ensure_default_roles()
        admin_role = Role.query.filter_by(name='Administrator').first()

        user = User(fullname=fullname, email=email, status=UserStatus.VERIFIED)
        user.set_password(password)
        user.roles = [admin_role]
        db.session.add(user)
        db.session.commit()
        click.echo(f"Created administrator '{email}'.")
