# -*- coding: utf-8 -*-
import logging
import os
from .exceptions import PathConversionError


LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def path_arg(value, field):
    """Returns ``value`` as a text command argument.

    Accepts ``str``, ``bytes`` and path-like objects. Anything that cannot be
    represented as clean UTF-8 text (``None``, other types, undecodable bytes,
    lone surrogates from ``os.fsdecode``) is rejected.

    :param value: The configured path.
    :param field: Human readable name of the argument, used in the error.
    :raises: PathConversionError
    """
    try:
        value = os.fspath(value)
    except TypeError:
        raise PathConversionError(field) from None

    if isinstance(value, bytes):
        try:
            value = value.decode('utf-8')
        except UnicodeDecodeError:
            raise PathConversionError(field) from None

    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        raise PathConversionError(field) from None

    return value


def setup_logging(debug=False):
    """Configures the root logger for a command line run."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT)
