# -*- coding: utf-8 -*-
import logging
import subprocess
from .exceptions import ExecError


logger = logging.getLogger(__name__)


class CommandRunner(object):
    """Executes a program with an argument list and returns its stdout.

    Every remote operation goes through a runner, which makes it possible to
    swap in a fake one in tests instead of calling real ``rsync`` and ``ssh``.
    """
    def execute(self, program, args):
        """Runs ``program`` with ``args`` and returns captured stdout.

        :param program: Name of the executable, e.g. ``ssh``.
        :param args: Ordered sequence of string arguments.
        :return: Standard output as text.
        :raises: ExecError
        """
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """Runs commands via ``subprocess.run()`` without a shell.

    Blocks until the command exits. There is no timeout. Bytes that are not
    UTF-8 come back as lone surrogates instead of failing the call.
    """
    def execute(self, program, args):
        cmd = [program] + list(args)
        logger.debug("running %s", cmd)

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                errors='surrogateescape')
        except OSError as e:
            raise ExecError(program, stderr=str(e)) from e

        if result.returncode != 0:
            logger.debug("%s exited with %s", program, result.returncode)
            raise ExecError(program, result.returncode, result.stderr)

        return result.stdout
