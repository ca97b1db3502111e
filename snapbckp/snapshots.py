# -*- coding: utf-8 -*-
"""Naming of snapshot directories.

Snapshot directories on the remote host are named
``<RFC3339 timestamp>_<suffix>``, e.g. ``2022-11-02T21:22:10Z_nightly``.
The suffix is free text chosen by the operator; only the timestamp in front
of the first underscore carries meaning.
"""
import collections
import datetime
import logging
import re
from .constants import SNAPSHOT_NAME_SEPARATOR


logger = logging.getLogger(__name__)

RFC3339_RE = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(\.\d+)?'
    r'(?:([Zz])|([+-])(\d{2}):(\d{2}))$')


class SnapshotEntry(collections.namedtuple(
        'SnapshotEntry', ['timestamp', 'name'])):
    """One snapshot directory found on the remote host.

    ``timestamp`` is an aware UTC datetime, ``name`` the directory name as
    listed.
    """
    __slots__ = ()


def to_utc(instant):
    """Returns ``instant`` as an aware UTC datetime. Naive means UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=datetime.timezone.utc)
    return instant.astimezone(datetime.timezone.utc)


def format_timestamp(instant):
    return to_utc(instant).strftime('%Y-%m-%dT%H:%M:%SZ')


def format_snapshot_name(instant, suffix):
    """Returns the directory name for a snapshot taken at ``instant``.

    Second precision, always in UTC with the ``Z`` designator.
    """
    return '{}{}{}'.format(
        format_timestamp(instant), SNAPSHOT_NAME_SEPARATOR, suffix)


def parse_timestamp(token):
    """Parses an RFC3339 timestamp into an aware UTC datetime.

    :return: The datetime or None if ``token`` is not RFC3339.
    """
    match = RFC3339_RE.match(token)
    if not match:
        return None

    (year, month, day, hour, minute, second, fraction,
     zulu, sign, off_hours, off_minutes) = match.groups()

    # Leap seconds are folded into the last regular second.
    second = int(second)
    if second == 60:
        second = 59

    microsecond = 0
    if fraction:
        microsecond = int(fraction[1:7].ljust(6, '0'))

    if zulu:
        tz = datetime.timezone.utc
    else:
        if int(off_minutes) > 59:
            return None
        offset = datetime.timedelta(
            hours=int(off_hours), minutes=int(off_minutes))
        if sign == '-':
            offset = -offset
        try:
            tz = datetime.timezone(offset)
        except ValueError:
            return None

    try:
        dt = datetime.datetime(
            int(year), int(month), int(day), int(hour), int(minute),
            second, microsecond, tzinfo=tz)
    except ValueError:
        return None

    try:
        return dt.astimezone(datetime.timezone.utc)
    except OverflowError:
        return None


def parse_snapshot_name(name):
    """Returns a ``SnapshotEntry`` for ``name`` or None if it has no
    parsable timestamp prefix."""
    prefix = name.split(SNAPSHOT_NAME_SEPARATOR, 1)[0]
    timestamp = parse_timestamp(prefix)
    if timestamp is None:
        return None
    return SnapshotEntry(timestamp, name)


def parse_listing(output):
    """Turns ``ls -A1`` output into snapshot entries.

    Order follows the listing. Lines without a timestamp prefix or with
    bytes that are not UTF-8 are skipped, unknown directories next to the
    snapshots are not an error.
    """
    entries = []
    for line in output.split('\n'):
        if not line:
            continue

        try:
            line.encode('utf-8')
        except UnicodeEncodeError:
            logger.debug("ignoring %r, not valid UTF-8", line)
            continue

        entry = parse_snapshot_name(line)
        if entry is None:
            logger.debug("ignoring %r, not a snapshot name", line)
            continue

        entries.append(entry)

    return entries
