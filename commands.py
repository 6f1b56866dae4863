import click
from flask.cli import with_appcontext
from extensions import db
from utils.account_service import create_default_user, DEFAULT_USER_MAX_USES
from utils.errors import ApiError


@click.command('init-db')
@with_appcontext
def init_db_command():
    """创建所有数据表（开发环境用，生产环境走 flask db upgrade）"""
    db.create_all()
    click.echo('Database tables created.')


@click.command('create-default-user')
@click.argument('wallet_address')
@click.argument('invitation_code')
@click.option('--max-uses', default=DEFAULT_USER_MAX_USES, show_default=True, type=int)
@with_appcontext
def create_default_user_command(wallet_address, invitation_code, max_uses):
    """Create an activated inviter account with a fixed invitation code."""
    try:
        account = create_default_user(wallet_address, invitation_code, max_uses=max_uses)
    except ApiError as e:
        raise click.ClickException(e.message)
    click.echo(f'Default user {account.wallet_address} created, code {account.invitation_code} ({max_uses} uses)')


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_default_user_command)
