# -*- coding: utf-8 -*-


class SnapbckpError(Exception):
    """Base class for every error that aborts a backup cycle.

    ``step`` is filled in by ``BackupCycle`` with the name of the step that
    was running when the error was raised.
    """
    def __init__(self, message):
        super().__init__(message)
        self.step = None


class ExecError(SnapbckpError):
    """A remote command could not be spawned or exited non-zero."""
    def __init__(self, program, returncode=None, stderr=''):
        self.program = program
        self.returncode = returncode
        self.stderr = stderr

        if returncode is None:
            msg = "could not run {}".format(program)
        else:
            msg = "{} exited with status {}".format(program, returncode)
        if stderr and stderr.strip():
            msg = "{}: {}".format(msg, stderr.strip())

        super().__init__(msg)


class PathConversionError(SnapbckpError):
    """A configured path cannot be passed as a command argument."""
    def __init__(self, field):
        self.field = field
        super().__init__(
            "error converting path to string ({})".format(field))


class PathDeletionError(SnapbckpError):
    """Refused to delete a forbidden remote path."""
    def __init__(self, path):
        self.path = path
        super().__init__("path deletion error ({!r})".format(path))


class DurationConversionError(SnapbckpError):
    """A retention window does not fit into a ``timedelta``."""
    def __init__(self, window):
        self.window = window
        super().__init__("duration conversion error ({!r})".format(window))


class ConfigError(SnapbckpError):
    pass
