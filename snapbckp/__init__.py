# -*- coding: utf-8 -*-
"""
      Title: snapbckp
      Usage: $ snapbckp start --conf ~/etc/snapbckp.json
             $ snapbckp snapshots --help
             $ snapbckp clean --help
  Platforms: Linux and MacOS X, needs rsync and ssh on the PATH

Description:
    Backs up a directory tree to a remote host with rsync over SSH, keeps
    hard-linked, timestamped snapshots of every run on that host and prunes
    old snapshots according to a retention policy.

    The configuration is a JSON file, passed with ``--conf`` or through the
    ``BACK_UP_RSYNC_CONFIG`` environment variable.

    The tool is not daemonized and can be scheduled with cron jobs.

Dependencies:
    * Click
    * colorama

"""
from .backups import BackupCycle, CycleReport
from .config import BackupRunConfig, read_config
from .durations import RetentionWindow
from .exceptions import (
    ConfigError, DurationConversionError, ExecError, PathConversionError,
    PathDeletionError, SnapbckpError)
from .remote import SshCredentials
from .retention import (
    FunctionEvaluator, KeepAllEvaluator, RetentionEvaluator, load_evaluator)
from .runner import CommandRunner, SubprocessRunner
from .snapshots import SnapshotEntry, format_snapshot_name
