# -*- coding: utf-8 -*-
import datetime
import json
import os
import shutil
import tempfile
import unittest
from unittest import mock
from click.testing import CliRunner
from snapbckp import commands
from snapbckp.backups import CycleReport
from snapbckp.exceptions import ExecError
from snapbckp.retention import KeepAllEvaluator
from snapbckp.snapshots import SnapshotEntry


UTC = datetime.timezone.utc

CONFIG = {
    'source': 'source',
    'destination': 'destination',
    'exclude_file': 'exclude_file',
    'log_file': 'log_file',
    'snapshot': 'snapshot',
    'snapshot_suffix': 'test_user',
    'ssh_credentials': {'user': 'user', 'id_file': 'id_file', 'host': 'host'},
    'policy': [{'minutes': 30}, {'days': 2}],
}


class TestCommands(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.conf = os.path.join(self.tmp_dir, 'snapbckp.json')
        with open(self.conf, 'w', encoding='utf-8') as f:
            json.dump(CONFIG, f)
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_start(self, mock_cycle):
        mock_cycle.return_value.run.return_value = CycleReport(
            'name', 'snapshot/name', [], ['snapshot/old'])

        result = self.runner.invoke(
            commands.cli, ['start', '--conf', self.conf])

        self.assertEqual(result.exit_code, 0, result.output)
        config = mock_cycle.call_args[0][0]
        self.assertEqual(config.snapshot_suffix, 'test_user')
        mock_cycle.return_value.run.assert_called_once_with(dry_run=False)
        self.assertIn('Created snapshot snapshot/name', result.output)
        self.assertIn('Removed: snapshot/old', result.output)

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_config_from_environment(self, mock_cycle):
        mock_cycle.return_value.run.return_value = CycleReport(
            'name', 'snapshot/name', [], [])

        result = self.runner.invoke(
            commands.cli, ['start'], env={'BACK_UP_RSYNC_CONFIG': self.conf})

        self.assertEqual(result.exit_code, 0, result.output)
        mock_cycle.assert_called_once()

    def test_missing_config(self):
        result = self.runner.invoke(
            commands.cli, ['start'], env={'BACK_UP_RSYNC_CONFIG': ''})

        self.assertEqual(result.exit_code, 1)
        self.assertIn('No configuration given', result.output)

    def test_config_file_does_not_exist(self):
        result = self.runner.invoke(
            commands.cli,
            ['start', '--conf', os.path.join(self.tmp_dir, 'nope.json')])

        self.assertEqual(result.exit_code, 1)
        self.assertIn('does not exist', result.output)

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_failure_names_step(self, mock_cycle):
        error = ExecError('rsync', 12, 'connection refused')
        error.step = 'sync'
        mock_cycle.return_value.run.side_effect = error

        result = self.runner.invoke(
            commands.cli, ['start', '--conf', self.conf])

        self.assertEqual(result.exit_code, 1)
        self.assertIn('Backup failed during sync', result.output)
        self.assertIn('connection refused', result.output)

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_clean_defaults_to_dry_run(self, mock_cycle):
        mock_cycle.return_value.clean.return_value = CycleReport(
            None, None, [], ['snapshot/old'])

        result = self.runner.invoke(
            commands.cli, ['clean', '--conf', self.conf])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_cycle.return_value.clean.assert_called_once_with(dry_run=True)
        self.assertIn('Marked for removal: snapshot/old', result.output)

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_clean_for_real(self, mock_cycle):
        mock_cycle.return_value.clean.return_value = CycleReport(
            None, None, [], [])

        result = self.runner.invoke(
            commands.cli, ['clean', '--conf', self.conf, '--dryrun=False'])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_cycle.return_value.clean.assert_called_once_with(dry_run=False)

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_snapshots_sorted_oldest_first(self, mock_cycle):
        mock_cycle.return_value.snapshots.return_value = [
            SnapshotEntry(datetime.datetime(2022, 11, 2, tzinfo=UTC),
                          '2022-11-02T00:00:00Z_b'),
            SnapshotEntry(datetime.datetime(2022, 11, 1, tzinfo=UTC),
                          '2022-11-01T00:00:00Z_a'),
        ]

        result = self.runner.invoke(
            commands.cli, ['snapshots', '--conf', self.conf])

        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.splitlines()
        self.assertTrue(lines[0].endswith('2022-11-01T00:00:00Z_a'))
        self.assertTrue(lines[1].endswith('2022-11-02T00:00:00Z_b'))

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_start_without_evaluator_keeps_everything(self, mock_cycle):
        mock_cycle.return_value.run.return_value = CycleReport(
            'name', 'snapshot/name', [], [])

        result = self.runner.invoke(
            commands.cli, ['start', '--conf', self.conf],
            env={'SNAPBCKP_EVALUATOR': ''})

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIsNone(mock_cycle.call_args[1]['evaluator'])

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_start_with_evaluator(self, mock_cycle):
        mock_cycle.return_value.run.return_value = CycleReport(
            'name', 'snapshot/name', [], [])

        result = self.runner.invoke(
            commands.cli,
            ['start', '--conf', self.conf,
             '--evaluator', 'snapbckp.retention:KeepAllEvaluator'])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIsInstance(mock_cycle.call_args[1]['evaluator'],
                              KeepAllEvaluator)

    @mock.patch('snapbckp.commands.BackupCycle')
    def test_clean_evaluator_from_environment(self, mock_cycle):
        mock_cycle.return_value.clean.return_value = CycleReport(
            None, None, [], [])

        result = self.runner.invoke(
            commands.cli, ['clean', '--conf', self.conf],
            env={'SNAPBCKP_EVALUATOR': 'snapbckp.retention:KeepAllEvaluator'})

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIsInstance(mock_cycle.call_args[1]['evaluator'],
                              KeepAllEvaluator)

    def test_unknown_evaluator(self):
        result = self.runner.invoke(
            commands.cli, ['start', '--conf', self.conf,
                           '--evaluator', 'no_such_module_for_snapbckp:f'])

        self.assertEqual(result.exit_code, 1)
        self.assertIn('Could not import retention evaluator', result.output)
