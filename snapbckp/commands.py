# -*- coding: utf-8 -*-
import click
from .backups import BackupCycle
from .config import read_config
from .constants import (
    CONFIG_ENVVAR, ERR_CONFIG_MISSING, ERR_STEP_FAILED, EVALUATOR_ENVVAR,
    HELP_CLEAN_DRYRUN, HELP_CONF, HELP_DEBUG, HELP_EVALUATOR,
    HELP_START_DRYRUN)
from .exceptions import ConfigError, SnapbckpError
from .retention import load_evaluator
from .snapshots import format_timestamp
from .utils import setup_logging


conf_option = click.option(
    '--conf', envvar=CONFIG_ENVVAR, default=None, help=HELP_CONF)

evaluator_option = click.option(
    '--evaluator', envvar=EVALUATOR_ENVVAR, default=None,
    help=HELP_EVALUATOR)


@click.group()
@click.option('--debug/--no-debug', default=False, help=HELP_DEBUG)
def cli(debug):
    """Backup a directory tree to a remote host with rsync over SSH.

    Every run of ``start`` syncs the source to the destination on the
    remote host, hard-links the destination into a timestamped snapshot and
    deletes snapshots that the retention evaluator given with ``--evaluator``
    marks as outdated. Without an evaluator nothing is deleted.

    The configuration is a JSON file passed with ``--conf`` or through the
    BACK_UP_RSYNC_CONFIG environment variable. The tool is not daemonized
    and can be scheduled with cron jobs.
    """
    setup_logging(debug)


@cli.command()
@conf_option
@evaluator_option
@click.option('--dryrun/--no-dryrun', default=False, help=HELP_START_DRYRUN)
def start(conf, evaluator, dryrun):
    """Sync, snapshot and prune."""
    cycle = BackupCycle(load_config(conf), evaluator=get_evaluator(evaluator))

    try:
        report = cycle.run(dry_run=dryrun)
    except SnapbckpError as e:
        raise step_failed(e)

    click.echo(click.style(
        'Created snapshot {}'.format(report.snapshot_path), fg='green'))
    echo_removed(report.deleted, dryrun)


@cli.command()
@conf_option
def snapshots(conf):
    """List snapshots on the remote host, oldest first."""
    cycle = BackupCycle(load_config(conf))

    try:
        entries = cycle.snapshots()
    except SnapbckpError as e:
        raise step_failed(e)

    for entry in sorted(entries, key=lambda s: s.timestamp):
        click.echo('{}  {}'.format(format_timestamp(entry.timestamp),
                                   entry.name))


@cli.command()
@conf_option
@evaluator_option
@click.option('--dryrun', default=True, type=bool, help=HELP_CLEAN_DRYRUN)
def clean(conf, evaluator, dryrun):
    """Delete snapshots outside the retention policy.

    Note that to actually delete the snapshots from the remote host, the
    command needs to be invoked with --dryrun=False.
    """
    cycle = BackupCycle(load_config(conf), evaluator=get_evaluator(evaluator))

    try:
        report = cycle.clean(dry_run=dryrun)
    except SnapbckpError as e:
        raise step_failed(e)

    echo_removed(report.deleted, dryrun)


def load_config(conf):
    """Returns the run configuration or exits with a readable message."""
    if not conf:
        raise click.ClickException(ERR_CONFIG_MISSING)

    try:
        return read_config(conf)
    except ConfigError as e:
        raise click.ClickException(str(e))


def get_evaluator(target):
    """Returns the configured evaluator, None means keep everything."""
    if not target:
        return None

    try:
        return load_evaluator(target)
    except ConfigError as e:
        raise click.ClickException(str(e))


def step_failed(error):
    return click.ClickException(
        ERR_STEP_FAILED.format(error.step or 'setup', error))


def echo_removed(paths, dry_run):
    label = 'Marked for removal' if dry_run else 'Removed'
    for path in paths:
        click.echo(click.style('{}: {}'.format(label, path), fg='yellow'))
