# -*- coding: utf-8 -*-
import collections
import datetime
import logging
import posixpath
from .durations import windows_to_timedeltas
from .exceptions import SnapbckpError
from .remote import (
    create_snapshot, delete_snapshot, list_snapshots, sync_backup)
from .retention import KeepAllEvaluator
from .runner import SubprocessRunner
from .snapshots import format_snapshot_name, to_utc


logger = logging.getLogger(__name__)

STEP_SYNC = 'sync'
STEP_SNAPSHOT = 'snapshot'
STEP_LIST = 'list'
STEP_RETENTION = 'retention'
STEP_DELETE = 'delete'


CycleReport = collections.namedtuple(
    'CycleReport', ['snapshot_name', 'snapshot_path', 'snapshots', 'deleted'])


class BackupCycle(object):
    """Runs one backup cycle against the remote host.

    A cycle syncs the source tree to the destination, hard-links the
    destination into a new timestamped snapshot, lists all snapshots and
    deletes the ones the retention evaluator marks as outdated.

    Steps run strictly one after another. The first error stops the cycle;
    nothing is retried or rolled back, the next run simply starts over with
    a fresh sync.
    """
    def __init__(self, config, runner=None, evaluator=None):
        self.config = config
        self.runner = runner or SubprocessRunner()
        self.evaluator = evaluator or KeepAllEvaluator()

    def run(self, now=None, dry_run=False):
        """Executes sync, snapshot, listing, retention and deletion.

        :param now: Time of the cycle, defaults to the current UTC time.
        :param dry_run: Flag that indicates whether outdated snapshots are
            only reported instead of deleted.
        :return: ``CycleReport``
        :raises: SnapbckpError with ``step`` set to the failing step.
        """
        now = self._now(now)
        cfg = self.config

        logger.info("syncing %s to %s", cfg.source, cfg.destination)
        self._step(STEP_SYNC, sync_backup, self.runner, cfg.ssh_credentials,
                   cfg.exclude_file, cfg.source, cfg.destination,
                   cfg.log_file)

        snapshot_name = format_snapshot_name(now, cfg.snapshot_suffix)
        snapshot_path = posixpath.join(cfg.snapshot, snapshot_name)

        logger.info("creating snapshot %s", snapshot_path)
        self._step(STEP_SNAPSHOT, create_snapshot, self.runner,
                   cfg.ssh_credentials, cfg.destination, snapshot_path)

        snapshots, deleted = self._prune(now, dry_run)

        return CycleReport(snapshot_name, snapshot_path, snapshots, deleted)

    def snapshots(self):
        """Returns the snapshots currently on the remote host."""
        return self._step(STEP_LIST, list_snapshots, self.runner,
                          self.config.ssh_credentials, self.config.snapshot)

    def clean(self, now=None, dry_run=True):
        """Applies the retention policy without syncing or snapshotting.

        :return: ``CycleReport`` without snapshot name and path.
        """
        snapshots, deleted = self._prune(self._now(now), dry_run)
        return CycleReport(None, None, snapshots, deleted)

    def _prune(self, now, dry_run):
        snapshots = self.snapshots()
        logger.info("found %d snapshots", len(snapshots))

        windows = self._step(
            STEP_RETENTION, windows_to_timedeltas, self.config.policy)
        to_delete = self._step(
            STEP_RETENTION, self.evaluator.evaluate, now, windows, snapshots)

        deleted = []
        for entry in to_delete:
            path = posixpath.join(self.config.snapshot, entry.name)
            if dry_run:
                logger.info("marked for removal: %s", path)
            else:
                logger.info("deleting snapshot %s", path)
                self._step(STEP_DELETE, delete_snapshot, self.runner,
                           self.config.ssh_credentials, path)
            deleted.append(path)

        return snapshots, deleted

    def _step(self, name, func, *args):
        try:
            return func(*args)
        except SnapbckpError as e:
            e.step = name
            logger.error("%s failed: %s", name, e)
            raise

    @staticmethod
    def _now(now):
        if now is None:
            return datetime.datetime.now(datetime.timezone.utc)
        return to_utc(now)
