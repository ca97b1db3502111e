# -*- coding: utf-8 -*-


CONFIG_ENVVAR = 'BACK_UP_RSYNC_CONFIG'

EVALUATOR_ENVVAR = 'SNAPBCKP_EVALUATOR'

SNAPSHOT_NAME_SEPARATOR = '_'

# Remote paths that must never reach ``rm -r``.
FORBIDDEN_DELETE_PATHS = ('/', '')

HELP_CONF = (
    "Location of the JSON configuration file. Falls back to the "
    "BACK_UP_RSYNC_CONFIG environment variable.")

HELP_DEBUG = (
    "Log every remote command and parsing decision to stderr.")

HELP_START_DRYRUN = (
    "Run sync and snapshot as usual but only list the snapshots that the "
    "retention policy would delete.")

HELP_CLEAN_DRYRUN = (
    "By default clean will only list the snapshots that would be deleted "
    "from the remote host. To actually delete them, pass --dryrun=False.")

ERR_CONFIG_MISSING = (
    "No configuration given. Pass --conf or set BACK_UP_RSYNC_CONFIG.")

ERR_CONFIG_FILE_DOES_NOT_EXIST = (
    "Config file does not exist at {}")

ERR_CONFIG_FILE_UNREADABLE = (
    "Could not read config file {}: {}")

ERR_CONFIG_INVALID_JSON = (
    "Config file {} is not valid JSON: {}")

ERR_CONFIG_NOT_AN_OBJECT = (
    "Config file {} must contain a JSON object.")

ERR_CONFIG_MISSING_KEY = (
    "Config file {} is missing the key '{}'.")

ERR_CONFIG_WRONG_TYPE = (
    "Config file {}: '{}' must be {}.")

ERR_POLICY_UNKNOWN_KEYS = (
    "Retention window {} has unknown keys: {}. Allowed are minutes, hours, "
    "days and weeks.")

ERR_POLICY_NOT_INTEGER = (
    "Retention window {}: '{}' must be an integer.")

ERR_STEP_FAILED = (
    "Backup failed during {}: {}")

HELP_EVALUATOR = (
    "Retention evaluator as package.module:name. Without one, no snapshot is "
    "ever deleted. Falls back to the SNAPBCKP_EVALUATOR environment "
    "variable.")

ERR_EVALUATOR_TARGET = (
    "Retention evaluator '{}' must be given as package.module:name and name "
    "a RetentionEvaluator or a function.")

ERR_EVALUATOR_IMPORT = (
    "Could not import retention evaluator '{}': {}")
