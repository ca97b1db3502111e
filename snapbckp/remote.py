# -*- coding: utf-8 -*-
"""Remote operations on the backup host.

Small wrappers around ``rsync`` and ``ssh`` that are invoked through a
``CommandRunner``. Argument order is fixed and matches the command lines
existing deployments expect.
"""
import collections
import logging
from .constants import FORBIDDEN_DELETE_PATHS
from .exceptions import PathDeletionError
from .snapshots import parse_listing
from .utils import path_arg


logger = logging.getLogger(__name__)


class SshCredentials(collections.namedtuple(
        'SshCredentials', ['user', 'id_file', 'host'])):
    """Login user, identity file and host of the backup server."""
    __slots__ = ()

    def ssh_command(self):
        """Returns the remote shell passed to ``rsync -e``."""
        return ' '.join(['ssh', '-l', self.user, '-i', self.id_file])

    def ssh_args(self, *remote_cmd):
        """Returns ``ssh`` arguments that run ``remote_cmd`` on the host."""
        return ['-l', self.user, '-i', self.id_file, self.host] + list(
            remote_cmd)


def sync_backup(runner, ssh_creds, exclude_file, source, destination,
                log_file):
    """Mirrors ``source`` into ``destination`` on the remote host via rsync.

    Equivalent to::

        rsync -ave "ssh -l <user> -i <id_file>" --compress --one-file-system
            --exclude-from=<exclude_file> --delete-after --delete-excluded
            <source> <user>@<host>:<destination> > <log_file>

    :return: Output of rsync.
    :raises: PathConversionError, ExecError
    """
    exclude_file = '--exclude-from={}'.format(
        path_arg(exclude_file, 'exclude file'))
    destination = '{}@{}:{}'.format(
        ssh_creds.user, ssh_creds.host, path_arg(destination, 'destination'))
    source = path_arg(source, 'source')
    log_file = path_arg(log_file, 'log file')

    args = [
        '-ave',
        ssh_creds.ssh_command(),
        '--compress',
        '--one-file-system',
        exclude_file,
        '--delete-after',
        '--delete-excluded',
        source,
        destination,
        '>',
        log_file,
    ]

    logger.debug("syncing %s to %s", source, destination)
    return runner.execute('rsync', args)


def create_snapshot(runner, ssh_creds, backup_path, snapshot_path):
    """Hard-link copies ``backup_path`` to ``snapshot_path`` on the host.

    Unchanged files share their inodes with the backup, so a snapshot only
    costs the space of what changed since the last one.

    :raises: PathConversionError, ExecError
    """
    backup_path = path_arg(backup_path, 'backup')
    snapshot_path = path_arg(snapshot_path, 'snapshot')

    logger.debug("creating snapshot %s", snapshot_path)
    return runner.execute(
        'ssh', ssh_creds.ssh_args('cp', '-al', backup_path, snapshot_path))


def list_snapshots(runner, ssh_creds, snapshot_root):
    """Returns the ``SnapshotEntry`` list found in ``snapshot_root``.

    Entries keep the order of the remote listing. Names without a valid
    timestamp prefix are left out.

    :raises: PathConversionError, ExecError
    """
    snapshot_root = path_arg(snapshot_root, 'snapshot')
    output = runner.execute(
        'ssh', ssh_creds.ssh_args('ls', '-A1', snapshot_root))

    return parse_listing(output)


def delete_snapshot(runner, ssh_creds, snapshot_path):
    """Recursively removes ``snapshot_path`` on the host.

    The filesystem root and the empty path are refused before anything is
    sent to the host.

    :raises: PathConversionError, PathDeletionError, ExecError
    """
    snapshot_path = path_arg(snapshot_path, 'snapshot')

    if snapshot_path in FORBIDDEN_DELETE_PATHS:
        raise PathDeletionError(snapshot_path)

    logger.debug("deleting snapshot %s", snapshot_path)
    runner.execute('ssh', ssh_creds.ssh_args('rm', '-r', snapshot_path))
