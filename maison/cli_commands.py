import click
from flask import current_app
from flask.cli import with_appcontext

from .errors import MaisonError
from .services.auth import AuthService
from .services.currency import CurrencyService


def _currency_service():
    return CurrencyService.from_config(current_app.config)


@click.command('create-admin')
@click.argument('username')
@click.password_option()
@with_appcontext
def create_admin(username, password):
    """Create a back-office admin account."""
    try:
        AuthService().create_admin(username, password)
    except MaisonError as e:
        raise click.ClickException(e.message)
    click.echo(f'Admin {username} created.')


@click.command('purge-sessions')
@with_appcontext
def purge_sessions():
    """Delete expired admin sessions."""
    deleted = AuthService().purge_expired()
    click.echo(f'Removed {deleted} expired sessions.')


@click.command('sync-currency')
@with_appcontext
def sync_currency():
    """Fetch current exchange rates for the tracked currencies."""
    service = _currency_service()
    try:
        rates, as_of = service.sync()
    except MaisonError as e:
        raise click.ClickException(e.message)
    for rate in service.serialize(rates):
        click.echo(f"{rate['currency_code']}: {rate['rate']}")
    click.echo(f'Rates as of {as_of}.')


@click.command('seed-currencies')
@with_appcontext
def seed_currencies():
    """Create the base and tracked currency rows that do not exist yet."""
    created = _currency_service().seed()
    click.echo(f"Created: {', '.join(created) or 'nothing'}")


def register_commands(app):
    app.cli.add_command(create_admin)
    app.cli.add_command(purge_sessions)
    app.cli.add_command(sync_currency)
    app.cli.add_command(seed_currencies)
