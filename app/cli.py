"""Flask CLI commands for the add-on license checker."""

import click
from flask import current_app
from flask.cli import with_appcontext

from app.services.licensing import LicenseChecker, get_installed_addons, run_one_check


def register_commands(app):
    app.cli.add_command(license_check)
    app.cli.add_command(license_status)


@click.command('license-check')
@with_appcontext
def license_check():
    """Check the license of the next add-on whose turn it is."""
    checker = LicenseChecker.from_config(current_app.config)
    checked = run_one_check(get_installed_addons(), checker=checker)
    if checked is None:
        click.echo('No add-on license due for a check')
        return

    state = checker.store.load(checked.slug)
    click.echo(f'Checked {checked.slug}: {state.status}')


@click.command('license-status')
@with_appcontext
def license_status():
    """Show the stored license state of every installed add-on."""
    checker = LicenseChecker.from_config(current_app.config)
    addons = get_installed_addons()
    if not addons:
        click.echo('No add-ons installed')
        return

    for addon in addons:
        state = checker.store.load(addon.slug)
        checked = state.last_checked_date.isoformat() if state.last_checked_date else 'never'
        due = 'due' if checker.is_due(state) else 'not due'
        click.echo(f'{addon.slug}\t{state.status}\tchecked {checked}\t{due}')
